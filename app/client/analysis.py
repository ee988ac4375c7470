"""결과 분석 (GET /exam/result/{id}, GET /exam/results/{studentId} 응답 해석)

저장된 결과는 시험/문제가 삭제된 뒤에도 볼 수 있어야 한다.
- 시험이 없으면 placeholder 시험(title="unavailable", 배점 0)을 쓰고 백분율은 0
- 답안 중 하나라도 문제가 없으면 문항별 분석 전체를 숨긴다 (집계 수치는 그대로 표시)
- 문항 분류(정답/오답/건너뜀)는 살아있는 문제의 isCorrect 로 다시 계산한다
"""
import math
from dataclasses import dataclass, field
from enum import Enum

SKIPPED_INDEX = -1
UNAVAILABLE_TITLE = "unavailable"
DETAIL_UNAVAILABLE_MESSAGE = "detailed analysis unavailable, source questions deleted"
NO_ANSWERS_MESSAGE = "This exam was taken before the system update."


class AnswerOutcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    SKIPPED = "skipped"


class AnswerFilter(str, Enum):
    ALL = "all"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    SKIPPED = "skipped"


class DetailStatus(str, Enum):
    AVAILABLE = "available"
    QUESTIONS_DELETED = "questions_deleted"
    NO_ANSWERS = "no_answers"


@dataclass(frozen=True)
class TestView:
    __test__ = False

    title: str
    total_marks: int
    passing_marks: int
    available: bool = True


PLACEHOLDER_TEST = TestView(title=UNAVAILABLE_TITLE, total_marks=0, passing_marks=0, available=False)


@dataclass(frozen=True)
class AnswerRow:
    number: int
    question: str
    options: list[str]
    selected_index: int
    correct_index: int
    outcome: AnswerOutcome


@dataclass
class ResultAnalysis:
    test: TestView
    score: int
    total_questions: int
    correct_answers: int
    wrong_answers: int
    skipped: int
    percentage: int
    passed: bool
    detail_status: DetailStatus
    rows: list[AnswerRow] = field(default_factory=list)

    @property
    def detail_available(self) -> bool:
        return self.detail_status is DetailStatus.AVAILABLE

    @property
    def detail_message(self) -> str | None:
        if self.detail_status is DetailStatus.QUESTIONS_DELETED:
            return DETAIL_UNAVAILABLE_MESSAGE
        if self.detail_status is DetailStatus.NO_ANSWERS:
            return NO_ANSWERS_MESSAGE
        return None

    def filter_rows(self, kind: AnswerFilter | str = AnswerFilter.ALL) -> list[AnswerRow]:
        kind = AnswerFilter(kind)
        if kind is AnswerFilter.ALL:
            return list(self.rows)
        return [row for row in self.rows if row.outcome.value == kind.value]


@dataclass(frozen=True)
class ResultSummary:
    """결과 목록 한 줄"""
    result_id: int
    test: TestView
    score: int
    percentage: int
    passed: bool


def resolve_test(test: dict | None) -> TestView:
    """populate 된 시험 (없으면 placeholder)"""
    if not test:
        return PLACEHOLDER_TEST
    return TestView(
        title=test.get("title") or UNAVAILABLE_TITLE,
        total_marks=test.get("totalMarks") or 0,
        passing_marks=test.get("passingMarks") or 0,
    )


def calculate_percentage(score: int, total_marks: int) -> int:
    """0 으로 나누지 않는다 (배점이 없으면 0%)"""
    if not total_marks or total_marks <= 0:
        return 0
    # .5 는 올림 (round() 는 짝수 쪽으로 반올림)
    return math.floor(score / total_marks * 100 + 0.5)


def is_skipped(selected_index: int | None) -> bool:
    return selected_index is None or selected_index == SKIPPED_INDEX


def find_correct_index(question: dict) -> int:
    """isCorrect 가 true 인 첫 선택지 인덱스 (없으면 -1)"""
    for index, option in enumerate(question.get("options") or []):
        if option.get("isCorrect") is True:
            return index
    return SKIPPED_INDEX


def classify_answer(question: dict, selected_index: int | None) -> AnswerOutcome:
    if is_skipped(selected_index):
        return AnswerOutcome.SKIPPED
    if selected_index == find_correct_index(question):
        return AnswerOutcome.CORRECT
    return AnswerOutcome.INCORRECT


def count_skipped(result: dict) -> int:
    answers = result.get("answers") or []
    if answers:
        return sum(1 for a in answers if is_skipped(a.get("selectedIndex")))
    total = result.get("totalQuestions") or 0
    return max(total - (result.get("correctAnswers") or 0) - (result.get("wrongAnswers") or 0), 0)


def analyze_result(result: dict) -> ResultAnalysis:
    """결과 상세 응답을 화면용 분석으로 변환"""
    test = resolve_test(result.get("testId"))
    answers = result.get("answers") or []
    score = result.get("score") or 0

    analysis = ResultAnalysis(
        test=test,
        score=score,
        total_questions=result.get("totalQuestions") or len(answers),
        correct_answers=result.get("correctAnswers") or 0,
        wrong_answers=result.get("wrongAnswers") or 0,
        skipped=count_skipped(result),
        percentage=calculate_percentage(score, test.total_marks),
        passed=score >= test.passing_marks,
        detail_status=DetailStatus.AVAILABLE,
    )

    if not answers:
        analysis.detail_status = DetailStatus.NO_ANSWERS
        return analysis

    # 문제 하나라도 삭제되었으면 문항별 분석 전체를 숨긴다
    if any(not isinstance(a.get("questionId"), dict) for a in answers):
        analysis.detail_status = DetailStatus.QUESTIONS_DELETED
        return analysis

    for number, answer in enumerate(answers, start=1):
        question = answer["questionId"]
        selected_index = answer.get("selectedIndex")
        analysis.rows.append(
            AnswerRow(
                number=number,
                question=question.get("question") or "",
                options=[opt.get("text", "") for opt in question.get("options") or []],
                selected_index=SKIPPED_INDEX if is_skipped(selected_index) else selected_index,
                correct_index=find_correct_index(question),
                outcome=classify_answer(question, selected_index),
            )
        )
    return analysis


def summarize_result(result: dict) -> ResultSummary:
    """학생 결과 목록의 한 줄 (시험이 삭제되었어도 렌더링 가능)"""
    test = resolve_test(result.get("testId"))
    score = result.get("score") or 0
    return ResultSummary(
        result_id=result["_id"],
        test=test,
        score=score,
        percentage=calculate_percentage(score, test.total_marks),
        passed=score >= test.passing_marks,
    )
