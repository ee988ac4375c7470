import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import question as question_crud, test as test_crud
from app.exceptions import InvalidQuestionError, QuestionNotFoundError, TestNotFoundError
from app.schemas import test as test_schema
from app.services import notification_service

logger = logging.getLogger(__name__)


def build_options(question: str | None, options: list[test_schema.OptionInput] | None) -> list[dict]:
    """문제 선택지 검증 후 저장 형식으로 변환

    정답 선택지는 정확히 1개여야 한다 (0개 / 2개 이상이면 400).
    """
    if not question or not question.strip() or not options:
        raise InvalidQuestionError("Missing fields")
    if len(options) < 2:
        raise InvalidQuestionError("A question needs at least two options")

    correct_count = sum(1 for opt in options if opt.is_correct)
    if correct_count != 1:
        raise InvalidQuestionError("Exactly one option must be marked correct")

    return [{"text": opt.text, "isCorrect": opt.is_correct} for opt in options]


async def _get_test_or_404(session: AsyncSession, test_id: int):
    test = await test_crud.get_test_by_id(session, test_id)
    if not test:
        raise TestNotFoundError(test_id)
    return test


async def create_test(
    session: AsyncSession,
    request: test_schema.TestCreateRequest,
) -> test_schema.TestResponse:
    """시험 생성"""
    test = await test_crud.create_test(
        session,
        title=request.title,
        duration=request.duration,
        total_marks=request.total_marks,
        passing_marks=request.passing_marks,
        is_active=request.is_active,
        created_by=request.created_by,
    )
    logger.info(f"시험 생성: test_id={test.id}, title={test.title}")
    response = test_schema.TestResponse.model_validate(test)

    await notification_service.notify_safely(
        session,
        type="test",
        title="New Assessment Created",
        message=f"Admin created a new test: '{test.title}'",
        link="/admin/manage-tests",
    )
    return response


async def get_test(session: AsyncSession, test_id: int) -> test_schema.TestResponse:
    test = await _get_test_or_404(session, test_id)
    return test_schema.TestResponse.model_validate(test)


async def get_all_tests(session: AsyncSession) -> list[test_schema.TestResponse]:
    tests = await test_crud.get_all_tests(session)
    return [test_schema.TestResponse.model_validate(t) for t in tests]


async def get_student_tests(session: AsyncSession) -> list[test_schema.StudentTestResponse]:
    """활성 시험만 학생에게 노출"""
    tests = await test_crud.get_active_tests(session)
    return [test_schema.StudentTestResponse.model_validate(t) for t in tests]


async def set_test_active(
    session: AsyncSession,
    test_id: int,
    request: test_schema.TestActiveUpdateRequest,
) -> test_schema.TestResponse:
    test = await _get_test_or_404(session, test_id)
    test = await test_crud.update_test_active(session, test, request.is_active)
    logger.info(f"시험 활성화 상태 변경: test_id={test_id}, is_active={request.is_active}")
    return test_schema.TestResponse.model_validate(test)


async def delete_test(session: AsyncSession, test_id: int) -> test_schema.MessageResponse:
    """시험 삭제 (문제는 함께 삭제, 결과는 dangling 참조로 유지)"""
    test = await _get_test_or_404(session, test_id)
    await test_crud.delete_test(session, test)
    logger.info(f"시험 삭제: test_id={test_id}")
    return test_schema.MessageResponse(message="Test deleted successfully")


async def get_exam_questions(
    session: AsyncSession,
    test_id: int,
) -> list[test_schema.QuestionPublicResponse]:
    """응시용 문제 목록 (정답 여부 제외)"""
    questions = await question_crud.get_questions_by_test_id(session, test_id)
    return [test_schema.QuestionPublicResponse.model_validate(q) for q in questions]


async def add_question(
    session: AsyncSession,
    request: test_schema.QuestionCreateRequest,
) -> test_schema.QuestionResponse:
    """문제 1건 등록"""
    if not request.test_id:
        raise InvalidQuestionError("Missing fields")
    options = build_options(request.question, request.options)
    await _get_test_or_404(session, request.test_id)

    question = await question_crud.create_question(
        session,
        test_id=request.test_id,
        question=request.question.strip(),
        options=options,
    )
    return test_schema.QuestionResponse.model_validate(question)


async def bulk_upload(
    session: AsyncSession,
    request: test_schema.BulkUploadRequest,
) -> test_schema.BulkUploadResponse:
    """문제 일괄 등록 - 한 문제라도 잘못되면 전체를 거부한다"""
    if not request.test_id or not request.questions:
        raise InvalidQuestionError("Invalid request data")

    items = []
    for position, item in enumerate(request.questions, start=1):
        try:
            options = build_options(item.question, item.options)
            items.append((item.question.strip(), options))
        except InvalidQuestionError as e:
            raise InvalidQuestionError(f"Question {position}: {e.message}")

    await _get_test_or_404(session, request.test_id)
    count = await question_crud.create_questions_bulk(session, request.test_id, items)
    logger.info(f"문제 일괄 등록: test_id={request.test_id}, count={count}")
    return test_schema.BulkUploadResponse(message="Questions uploaded successfully", count=count)


async def delete_question(session: AsyncSession, question_id: int) -> test_schema.MessageResponse:
    """문제 삭제 (기존 결과의 참조는 그대로 남는다)"""
    question = await question_crud.get_question_by_id(session, question_id)
    if not question:
        raise QuestionNotFoundError(question_id)
    await question_crud.delete_question(session, question)
    logger.info(f"문제 삭제: question_id={question_id}")
    return test_schema.MessageResponse(message="Question deleted successfully")
