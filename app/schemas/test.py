from datetime import datetime

from pydantic import Field, model_validator

from app.schemas.base import CamelModel


class OptionInput(CamelModel):
    """문제 선택지 입력"""
    text: str = Field(..., min_length=1)
    is_correct: bool = False


class TestCreateRequest(CamelModel):
    """시험 생성 요청 스키마"""
    __test__ = False

    title: str = Field(..., min_length=1, max_length=200)
    duration: int | None = Field(None, ge=0, description="시험 시간 (분)")
    total_marks: int = Field(0, ge=0)
    passing_marks: int = Field(0, ge=0)
    is_active: bool = True
    created_by: int | None = None


class TestActiveUpdateRequest(CamelModel):
    """시험 활성화 상태 변경 요청"""
    __test__ = False

    is_active: bool


class TestResponse(CamelModel):
    """시험 응답 스키마"""
    __test__ = False

    id: int = Field(..., alias="_id")
    title: str
    duration: int | None
    total_marks: int
    passing_marks: int
    is_active: bool
    created_by: int | None = None
    created_at: datetime


class StudentTestResponse(CamelModel):
    """학생용 시험 목록 응답 (활성 시험만)"""
    id: int = Field(..., alias="_id")
    title: str
    duration: int | None
    total_marks: int
    passing_marks: int


class QuestionCreateRequest(CamelModel):
    """문제 등록 요청 (필수 값 누락은 서비스에서 400 처리)"""
    test_id: int | None = None
    question: str | None = None
    options: list[OptionInput] | None = None


class BulkQuestionInput(CamelModel):
    question: str | None = None
    options: list[OptionInput] | None = None


class BulkUploadRequest(CamelModel):
    """문제 일괄 등록 요청"""
    test_id: int | None = None
    questions: list[BulkQuestionInput] | None = None


class BulkUploadResponse(CamelModel):
    message: str
    count: int


class OptionPublicResponse(CamelModel):
    """응시 중 노출되는 선택지 (정답 여부 제외)"""
    text: str


class OptionResponse(CamelModel):
    text: str
    is_correct: bool = False


class QuestionPublicResponse(CamelModel):
    """응시용 문제 응답 스키마 - isCorrect 는 절대 포함하지 않는다"""
    id: int = Field(..., alias="_id")
    test_id: int
    question: str
    options: list[OptionPublicResponse]

    @model_validator(mode="before")
    @classmethod
    def strip_correctness(cls, data):
        """DB 의 options(JSON)에서 text 만 남김"""
        options = data.get("options") if isinstance(data, dict) else getattr(data, "options", None)
        if options is None:
            return data
        stripped = [{"text": opt.get("text", "")} for opt in options]
        if isinstance(data, dict):
            return {**data, "options": stripped}
        return {
            "id": data.id,
            "test_id": data.test_id,
            "question": data.question,
            "options": stripped,
        }


class QuestionResponse(CamelModel):
    """관리자 / 결과 분석용 문제 응답 (정답 여부 포함)"""
    id: int = Field(..., alias="_id")
    test_id: int
    question: str
    options: list[OptionResponse]


class MessageResponse(CamelModel):
    message: str
