import logging
from typing import Any, Sequence

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import question as question_crud, result as result_crud, test as test_crud
from app.exceptions import InvalidSubmissionError, ResultNotFoundError, TestNotFoundError
from app.models.result import Result
from app.models.test import Test
from app.schemas import exam as exam_schema, test as test_schema
from app.services import notification_service, scoring_service

logger = logging.getLogger(__name__)

GLOBAL_LEADERBOARD_SIZE = 5
TEST_LEADERBOARD_SIZE = 10


def parse_submitted_answers(raw_answers: Any) -> list[scoring_service.AnswerInput]:
    """answers 배열을 채점 입력으로 변환 (형식이 잘못되면 400)"""
    if not isinstance(raw_answers, list):
        raise InvalidSubmissionError()

    parsed = []
    for raw in raw_answers:
        if not isinstance(raw, dict):
            raise InvalidSubmissionError("invalid submission shape")
        try:
            answer = exam_schema.SubmittedAnswer.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"답안 형식 오류: {e.errors()}")
            raise InvalidSubmissionError("invalid submission shape")
        parsed.append(scoring_service.AnswerInput(answer.question_id, answer.selected_index))
    return parsed


async def submit_exam(
    session: AsyncSession,
    request: exam_schema.ExamSubmitRequest,
) -> exam_schema.ExamSubmitResponse:
    """시험 제출: 검증 → 채점 → 결과 저장 → 알림

    서버는 같은 제출의 중복 여부를 판단하지 않는다 (클라이언트의 제출 중 플래그에 의존).
    """
    if not request.student_id or not request.test_id:
        raise InvalidSubmissionError()
    answers = parse_submitted_answers(request.answers)

    test = await test_crud.get_test_by_id(session, request.test_id)
    if not test:
        raise TestNotFoundError(request.test_id)

    # 정답 여부는 항상 제출 시점의 문제로 판단한다
    question_ids = {a.question_id for a in answers if a.question_id}
    questions = await question_crud.get_questions_by_ids(session, question_ids)

    breakdown = scoring_service.score_answers(
        answers,
        questions,
        points_per_correct=settings.score_per_correct_answer,
    )

    try:
        result = await result_crud.create_result(
            session,
            student_id=request.student_id,
            test_id=test.id,
            score=breakdown.score,
            total_questions=breakdown.total_questions,
            correct_answers=breakdown.correct_answers,
            wrong_answers=breakdown.wrong_answers,
            answers=[(a.question_id, a.selected_index) for a in breakdown.normalized_answers],
        )
    except Exception as e:
        logger.error(
            f"결과 저장 실패: {e.__class__.__name__}, student_id={request.student_id}, test_id={test.id}",
            exc_info=True,
        )
        await session.rollback()
        raise

    logger.info(
        f"시험 제출 성공: result_id={result.id}, test_id={test.id}, "
        f"student_id={result.student_id}, score={result.score}/{result.total_questions}"
    )

    # 알림 실패 시 rollback 으로 result 가 expire 되므로 응답을 먼저 만든다
    response = exam_schema.ExamSubmitResponse(
        message="Exam submitted successfully",
        result=exam_schema.ResultResponse.model_validate(result),
    )

    await notification_service.notify_safely(
        session,
        type="result",
        title="Test Submitted",
        message=f"Student {result.student_id} scored {result.score} in '{test.title}'.",
        link="/admin/results",
    )
    return response


def _populate_test(test: Test | None) -> exam_schema.PopulatedTest | None:
    if test is None:
        return None
    return exam_schema.PopulatedTest.model_validate(test)


async def _populate_tests(
    session: AsyncSession,
    results: Sequence[Result],
) -> list[exam_schema.ResultSummaryResponse]:
    """결과 목록에 시험 정보를 채운다 (삭제된 시험은 None)"""
    tests = await test_crud.get_tests_by_ids(
        session, {r.test_id for r in results if r.test_id is not None}
    )
    return [
        exam_schema.ResultSummaryResponse(
            id=r.id,
            student_id=r.student_id,
            test=_populate_test(tests.get(r.test_id)) if r.test_id is not None else None,
            score=r.score,
            total_questions=r.total_questions,
            correct_answers=r.correct_answers,
            wrong_answers=r.wrong_answers,
            created_at=r.created_at,
        )
        for r in results
    ]


async def get_result_detail(
    session: AsyncSession,
    result_id: int,
) -> exam_schema.ResultDetailResponse:
    """시험 결과 상세 조회 (시험 / 답안별 문제 populate)"""
    result = await result_crud.get_result_by_id(session, result_id)
    if not result:
        raise ResultNotFoundError(result_id)

    test = await test_crud.get_test_by_id(session, result.test_id) if result.test_id else None
    questions = await question_crud.get_questions_by_ids(
        session, {a.question_id for a in result.answers if a.question_id}
    )

    answers = []
    for answer in result.answers:
        question = questions.get(answer.question_id) if answer.question_id else None
        answers.append(
            exam_schema.PopulatedAnswer(
                question=test_schema.QuestionResponse.model_validate(question) if question else None,
                selected_index=answer.selected_index,
            )
        )

    return exam_schema.ResultDetailResponse(
        id=result.id,
        student_id=result.student_id,
        test=_populate_test(test),
        score=result.score,
        total_questions=result.total_questions,
        correct_answers=result.correct_answers,
        wrong_answers=result.wrong_answers,
        answers=answers,
        created_at=result.created_at,
    )


async def get_student_results(
    session: AsyncSession,
    student_id: int,
) -> list[exam_schema.ResultSummaryResponse]:
    """학생별 결과 목록"""
    results = await result_crud.get_results_by_student(session, student_id)
    return await _populate_tests(session, results)


async def get_all_results(session: AsyncSession) -> list[exam_schema.ResultSummaryResponse]:
    """관리자용 전체 결과"""
    results = await result_crud.get_all_results(session)
    return await _populate_tests(session, results)


async def get_test_leaderboard(
    session: AsyncSession,
    test_id: int,
) -> list[exam_schema.ResultSummaryResponse]:
    """시험별 상위 10건"""
    results = await result_crud.get_top_results(session, TEST_LEADERBOARD_SIZE, test_id=test_id)
    return await _populate_tests(session, results)


async def get_global_leaderboard(session: AsyncSession) -> list[exam_schema.ResultSummaryResponse]:
    """전체 상위 5건"""
    results = await result_crud.get_top_results(session, GLOBAL_LEADERBOARD_SIZE)
    return await _populate_tests(session, results)


async def delete_student_results(
    session: AsyncSession,
    student_id: int,
) -> exam_schema.ResultsDeleteResponse:
    """학생 계정 삭제에 따른 결과 삭제 (시스템에서 유일한 명시적 cascade)"""
    deleted = await result_crud.delete_results_by_student(session, student_id)
    logger.info(f"학생 결과 삭제: student_id={student_id}, deleted={deleted}")
    return exam_schema.ResultsDeleteResponse(message="Results deleted successfully", deleted=deleted)
