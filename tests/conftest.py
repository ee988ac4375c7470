"""공용 테스트 fixture: 테스트마다 인메모리 SQLite + ASGI httpx 클라이언트"""
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.models import Base, Question, Result, ResultAnswer, Test, get_db

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine):
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db_session(test_session_maker):
    """테스트 데이터 준비용 세션"""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(test_session_maker):
    """get_db 를 테스트 DB 로 바꾼 API 클라이언트"""

    async def override_get_db():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test/api/v1") as async_client:
        yield async_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sample_test(test_db_session):
    """문제 3개짜리 시험 (정답: 1번=2, 2번=0, 3번=1)"""
    test = Test(title="Python Basics", duration=30, total_marks=3, passing_marks=2)
    test_db_session.add(test)
    await test_db_session.flush()

    questions = [
        Question(
            test_id=test.id,
            question="Which keyword defines a function?",
            options=[
                {"text": "func", "isCorrect": False},
                {"text": "fn", "isCorrect": False},
                {"text": "def", "isCorrect": True},
                {"text": "lambda", "isCorrect": False},
            ],
        ),
        Question(
            test_id=test.id,
            question="What is len([1, 2])?",
            options=[
                {"text": "2", "isCorrect": True},
                {"text": "1", "isCorrect": False},
                {"text": "3", "isCorrect": False},
            ],
        ),
        Question(
            test_id=test.id,
            question="Which type is immutable?",
            options=[
                {"text": "list", "isCorrect": False},
                {"text": "tuple", "isCorrect": True},
                {"text": "dict", "isCorrect": False},
            ],
        ),
    ]
    test_db_session.add_all(questions)
    await test_db_session.commit()
    return test, questions


@pytest_asyncio.fixture
async def result_factory(test_db_session):
    """API 를 거치지 않고 결과를 직접 저장 (목록/리더보드 테스트용)"""

    async def create(student_id, test_id, score, answers=(), total=None):
        result = Result(
            student_id=student_id,
            test_id=test_id,
            score=score,
            total_questions=total if total is not None else len(answers),
            correct_answers=score,
            wrong_answers=0,
            answers=[
                ResultAnswer(position=i, question_id=qid, selected_index=idx)
                for i, (qid, idx) in enumerate(answers)
            ],
        )
        test_db_session.add(result)
        await test_db_session.commit()
        return result

    return create
