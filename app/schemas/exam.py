from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.test import QuestionResponse


class SubmittedAnswer(CamelModel):
    """제출 답안 1건. selectedIndex 가 없거나 null 이면 건너뛴 문제"""
    question_id: int | None = None
    selected_index: int | None = None


class ExamSubmitRequest(CamelModel):
    """시험 제출 요청 스키마

    answers 형식 검증은 exam_service 에서 수행한다 (형식 오류는 422 가 아니라 400).
    """
    student_id: int | None = None
    test_id: int | None = None
    answers: Any = None


class AnswerResponse(CamelModel):
    question_id: int | None
    selected_index: int


class ResultResponse(CamelModel):
    """저장된 시험 결과 (참조는 id 그대로)"""
    id: int = Field(..., alias="_id")
    student_id: int
    test_id: int | None
    score: int
    total_questions: int
    correct_answers: int
    wrong_answers: int
    answers: list[AnswerResponse]
    created_at: datetime


class ExamSubmitResponse(CamelModel):
    message: str
    result: ResultResponse


class PopulatedTest(CamelModel):
    """결과에 채워지는 시험 정보"""
    id: int = Field(..., alias="_id")
    title: str
    total_marks: int
    passing_marks: int


class PopulatedAnswer(CamelModel):
    """questionId 는 문제가 삭제되었으면 null"""
    question: QuestionResponse | None = Field(None, alias="questionId")
    selected_index: int


class ResultDetailResponse(CamelModel):
    """시험 결과 상세 (시험/문제 populate, 없으면 null)"""
    id: int = Field(..., alias="_id")
    student_id: int
    test: PopulatedTest | None = Field(None, alias="testId")
    score: int
    total_questions: int
    correct_answers: int
    wrong_answers: int
    answers: list[PopulatedAnswer]
    created_at: datetime


class ResultSummaryResponse(CamelModel):
    """결과 목록 / 리더보드 항목 (시험만 populate)"""
    id: int = Field(..., alias="_id")
    student_id: int
    test: PopulatedTest | None = Field(None, alias="testId")
    score: int
    total_questions: int
    correct_answers: int
    wrong_answers: int
    created_at: datetime


class ResultsDeleteResponse(CamelModel):
    message: str
    deleted: int
