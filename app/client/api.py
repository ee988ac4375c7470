"""시험 포털 HTTP API 클라이언트 (httpx)

응시 세션 / 결과 분석 / 알림 폴링이 같은 클라이언트를 공유한다.
서버 내부 구현이나 DB 는 알지 않고 /api/v1 계약만 사용한다.
"""
import logging
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """API 호출 실패 (status_code 가 None 이면 네트워크 오류)"""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class ExamApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        if client is not None:
            self._client = client
        else:
            self._client = httpx.AsyncClient(
                base_url=base_url or settings.api_base_url,
                timeout=timeout if timeout is not None else settings.http_timeout_seconds,
                transport=transport,
            )

    async def __aenter__(self) -> "ExamApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"API 요청 실패: {method} {url} ({e.__class__.__name__})")
            raise ApiError(f"Network error: {e.__class__.__name__}") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"API 오류 응답: {method} {url} -> {response.status_code} {message}")
            raise ApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"API 응답 파싱 실패: {method} {url} -> {response.status_code}")
            raise ApiError("Invalid response body", status_code=response.status_code) from e

    async def get_test(self, test_id: int) -> dict:
        return await self._request("GET", f"/test/{test_id}")

    async def get_questions(self, test_id: int) -> list[dict]:
        return await self._request("GET", f"/test/{test_id}/questions")

    async def get_available_tests(self) -> list[dict]:
        return await self._request("GET", "/test/student/all")

    async def submit_exam(self, student_id: int, test_id: int, answers: list[dict]) -> dict:
        """시험 제출 → 저장된 Result 반환"""
        payload = {"studentId": student_id, "testId": test_id, "answers": answers}
        data = await self._request("POST", "/exam/submit", json=payload)
        if not isinstance(data, dict) or not isinstance(data.get("result"), dict):
            raise ApiError("Missing result in submit response")
        return data["result"]

    async def get_result(self, result_id: int) -> dict:
        return await self._request("GET", f"/exam/result/{result_id}")

    async def get_student_results(self, student_id: int) -> list[dict]:
        return await self._request("GET", f"/exam/results/{student_id}")

    async def get_notifications(self) -> list[dict]:
        return await self._request("GET", "/notifications")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or response.reason_phrase)
    return response.reason_phrase
