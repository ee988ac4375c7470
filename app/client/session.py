"""응시 세션 상태 머신

한 학생의 한 번의 응시를 담당한다: 문제/시험 로드, 문제별 답안·검토표시·방문 추적,
카운트다운, 그리고 제출을 정확히 한 번만 보내는 것.

상태: LOADING -> IN_PROGRESS -> SUBMITTING -> COMPLETED
- 시간 만료 시 사용자 입력과 무관하게 IN_PROGRESS -> SUBMITTING 으로 강제 전환
- 제출 실패 시 SUBMITTING -> IN_PROGRESS (입력한 답안은 유지, 재제출 가능)
- 뒤로가기 차단(exit_blocked)은 주 상태를 바꾸지 않는 UX 수준의 안내일 뿐 보안 장치가 아니다

세션 상태는 모두 인스턴스에 있다. 탭(세션)마다 별도 인스턴스를 만들면 서로 간섭하지 않는다.
이벤트 루프 하나에서 핸들러가 끝까지 실행된 후 다음 이벤트가 처리되므로 별도 락은 두지 않는다.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from app.client.api import ApiError, ExamApiClient
from app.core.config import settings

logger = logging.getLogger(__name__)

SUBMIT_ERROR_MESSAGE = "Error submitting exam."
LOAD_ERROR_MESSAGE = "Failed to load exam"


class ExamState(str, Enum):
    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


class PaletteStatus(str, Enum):
    CURRENT = "current"
    MARKED_ANSWERED = "marked_answered"
    MARKED = "marked"
    ANSWERED = "answered"
    NOT_ANSWERED = "not_answered"
    NOT_VISITED = "not_visited"


@dataclass(frozen=True)
class SessionSummary:
    total: int
    answered: int
    marked: int
    not_visited: int
    not_answered: int

    @property
    def unanswered(self) -> int:
        return self.total - self.answered


def format_time(seconds: int) -> str:
    """남은 시간 HH:MM:SS"""
    seconds = max(seconds, 0)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class ExamSession:
    def __init__(
        self,
        api: ExamApiClient,
        student_id: int,
        test_id: int,
        *,
        default_duration_minutes: int | None = None,
    ):
        self._api = api
        self.student_id = student_id
        self.test_id = test_id
        self.default_duration_minutes = default_duration_minutes or settings.default_exam_duration_minutes

        self.state = ExamState.LOADING
        self.test: dict | None = None
        self.questions: list[dict] = []
        self.current = 0
        self.answers: dict[int, int] = {}
        self.marked: set[int] = set()
        self.visited: set[int] = {0}
        self.time_left = 0

        self.confirm_open = False
        self.time_expired = False
        self.exit_blocked = False
        self.error: str | None = None
        self.result: dict | None = None

        # 제출 요청이 이미 나갔는지 여부. 실패했을 때만 False 로 되돌린다.
        self._has_submitted = False

    # ------------------------------------------------------------------
    # 로드
    # ------------------------------------------------------------------
    async def load(self) -> bool:
        """문제와 시험 정보를 불러와 IN_PROGRESS 로 전환. 실패하면 LOADING 에 머문다."""
        if self.state is not ExamState.LOADING:
            return False

        try:
            questions = await self._api.get_questions(self.test_id)
            test = await self._api.get_test(self.test_id)
        except ApiError as e:
            logger.error(f"시험 로드 실패: test_id={self.test_id}, status={e.status_code}, message={e.message}")
            self.error = LOAD_ERROR_MESSAGE
            return False

        if not questions:
            logger.warning(f"문제가 없는 시험: test_id={self.test_id}")
            self.error = "No questions available for this test"
            return False

        self.questions = questions
        self.test = test
        duration = test.get("duration") or 0
        if duration <= 0:
            duration = self.default_duration_minutes
        self.time_left = duration * 60
        self.error = None
        self.state = ExamState.IN_PROGRESS
        logger.info(
            f"응시 시작: test_id={self.test_id}, questions={len(questions)}, time_left={self.time_left}s"
        )
        return True

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------
    @property
    def last_index(self) -> int:
        return max(len(self.questions) - 1, 0)

    @property
    def current_question(self) -> dict | None:
        if not self.questions:
            return None
        return self.questions[self.current]

    @property
    def accepting_input(self) -> bool:
        return self.state is ExamState.IN_PROGRESS

    @property
    def score(self) -> int | None:
        return self.result["score"] if self.result else None

    def summary(self) -> SessionSummary:
        answered = len(self.answers)
        return SessionSummary(
            total=len(self.questions),
            answered=answered,
            marked=len(self.marked),
            not_visited=len(self.questions) - len(self.visited),
            not_answered=len(self.visited) - answered,
        )

    def status_of(self, index: int) -> PaletteStatus:
        """문제 팔레트 표시 상태"""
        is_answered = index in self.answers
        is_marked = index in self.marked
        if index == self.current:
            return PaletteStatus.CURRENT
        if is_marked and is_answered:
            return PaletteStatus.MARKED_ANSWERED
        if is_marked:
            return PaletteStatus.MARKED
        if is_answered:
            return PaletteStatus.ANSWERED
        if index in self.visited:
            return PaletteStatus.NOT_ANSWERED
        return PaletteStatus.NOT_VISITED

    # ------------------------------------------------------------------
    # 문제 조작 (IN_PROGRESS 가 아니면 아무 일도 하지 않는다)
    # ------------------------------------------------------------------
    def select_option(self, option_index: int) -> None:
        if not self.accepting_input:
            return
        options = self.current_question.get("options") or []
        if not 0 <= option_index < len(options):
            return
        self.answers[self.current] = option_index

    def clear_response(self) -> None:
        if not self.accepting_input:
            return
        self.answers.pop(self.current, None)

    def navigate_to(self, index: int) -> None:
        if not self.accepting_input:
            return
        if not 0 <= index < len(self.questions):
            return
        self.visited.add(index)
        self.current = index

    def save_and_next(self) -> None:
        if not self.accepting_input:
            return
        self.marked.discard(self.current)
        self._advance()

    def mark_for_review(self) -> None:
        if not self.accepting_input:
            return
        self.marked.add(self.current)
        self._advance()

    def _advance(self) -> None:
        self.navigate_to(min(self.current + 1, self.last_index))

    # ------------------------------------------------------------------
    # 뒤로가기 차단 (UX 안내용)
    # ------------------------------------------------------------------
    def handle_back_navigation(self) -> bool:
        """뒤로가기 요청 처리. 응시/제출 중이면 막고 경고를 띄운다 (False 반환)."""
        if self.state in (ExamState.IN_PROGRESS, ExamState.SUBMITTING):
            self.exit_blocked = True
            return False
        return True

    def dismiss_exit_warning(self) -> None:
        self.exit_blocked = False

    # ------------------------------------------------------------------
    # 제출
    # ------------------------------------------------------------------
    def initiate_submit(self) -> SessionSummary | None:
        """제출 확인 단계 열기 (아직 제출하지 않음)"""
        if not self.accepting_input:
            return None
        self.confirm_open = True
        return self.summary()

    def cancel_submit(self) -> None:
        self.confirm_open = False

    def build_payload(self) -> list[dict]:
        """원래 순서대로 {questionId, selectedIndex}. 답하지 않은 문제는 selectedIndex 를 보내지 않는다."""
        payload = []
        for index, question in enumerate(self.questions):
            item = {"questionId": question["_id"]}
            if index in self.answers:
                item["selectedIndex"] = self.answers[index]
            payload.append(item)
        return payload

    async def confirm_submit(self) -> dict | None:
        """사용자 제출 확정"""
        if not self.accepting_input or self._has_submitted:
            return None
        return await self._submit()

    async def _submit(self) -> dict | None:
        self._has_submitted = True
        self.state = ExamState.SUBMITTING
        self.error = None

        try:
            result = await self._api.submit_exam(self.student_id, self.test_id, self.build_payload())
        except ApiError as e:
            logger.error(f"제출 실패: test_id={self.test_id}, status={e.status_code}, message={e.message}")
            self._has_submitted = False
            self.state = ExamState.IN_PROGRESS
            self.error = SUBMIT_ERROR_MESSAGE
            return None

        self.result = result
        self.confirm_open = False
        self.state = ExamState.COMPLETED
        logger.info(f"제출 완료: test_id={self.test_id}, result_id={result.get('_id')}, score={result.get('score')}")
        return result

    # ------------------------------------------------------------------
    # 타이머
    # ------------------------------------------------------------------
    async def tick(self) -> None:
        """1초 경과. 0 이 되면 한 번만 강제 제출한다."""
        # SUBMITTING 중에는 멈춘다. 제출이 실패하면 남은 시간 그대로 재개
        if self.state is not ExamState.IN_PROGRESS or self.time_left <= 0:
            return

        self.time_left -= 1
        if self.time_left > 0:
            return

        logger.info(f"시간 만료, 자동 제출: test_id={self.test_id}")
        self.time_expired = True
        self.confirm_open = False
        if not self._has_submitted:
            await self._submit()

    async def run_timer(self, interval: float = 1.0) -> None:
        """IN_PROGRESS 동안 매 interval 초마다 tick. 결과가 나오거나 시간이 다 되면 종료."""
        while self.state is not ExamState.COMPLETED and self.time_left > 0:
            await asyncio.sleep(interval)
            await self.tick()
