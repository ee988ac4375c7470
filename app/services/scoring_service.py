"""채점 엔진

제출 답안과 제출 시점에 다시 조회한 문제(정답 정보)를 비교하여 점수를 계산한다.
DB 접근이 없는 순수 함수로만 구성되어 있고, 문제 조회와 결과 저장은 exam_service 가 담당한다.

규칙 (답안마다 독립적으로, 순서 유지):
1. questionId 가 없으면 해당 답안은 아무 집계에도 포함하지 않는다.
2. 문제가 삭제되어 조회되지 않으면 selectedIndex=-1 로 기록하고 정답/오답 어디에도 세지 않는다.
3. selectedIndex 가 없거나 null 이면 -1 (건너뜀).
4. -1 이면 정답/오답 집계 제외.
5. options[selectedIndex] 가 존재하고 isCorrect 가 true 이면 정답, 아니면 오답
   (범위를 벗어난 인덱스도 오답).
6. totalQuestions 는 제출된 답안 배열의 길이 (1번에서 제외된 답안 포함).
"""
import logging
from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

from app.models.result import SKIPPED_INDEX

logger = logging.getLogger(__name__)


class GradableQuestion(Protocol):
    id: int
    options: list[dict]


@dataclass(frozen=True)
class AnswerInput:
    question_id: int | None
    selected_index: int | None = None


@dataclass(frozen=True)
class NormalizedAnswer:
    question_id: int
    selected_index: int


@dataclass
class ScoreBreakdown:
    score: int = 0
    total_questions: int = 0
    correct_answers: int = 0
    wrong_answers: int = 0
    normalized_answers: list[NormalizedAnswer] = field(default_factory=list)
    missing_question_ids: list[int] = field(default_factory=list)

    @property
    def skipped_answers(self) -> int:
        return self.total_questions - self.correct_answers - self.wrong_answers


def normalize_index(selected_index: int | None) -> int:
    """null / 누락된 선택은 -1 로 정규화"""
    if selected_index is None:
        return SKIPPED_INDEX
    return selected_index


def is_correct_option(options: Sequence[Mapping], selected_index: int) -> bool:
    """선택한 인덱스의 선택지가 정답인지 여부 (범위 밖이면 False)"""
    if selected_index < 0 or selected_index >= len(options):
        return False
    return options[selected_index].get("isCorrect") is True


def score_answers(
    answers: Sequence[AnswerInput],
    questions: Mapping[int, GradableQuestion],
    points_per_correct: int = 1,
) -> ScoreBreakdown:
    """제출 답안 채점

    Args:
        answers: 제출 순서 그대로의 답안 목록
        questions: 제출 시점에 조회한 문제 (id -> 문제). 삭제된 문제는 포함되지 않는다.
        points_per_correct: 정답 1개당 점수

    Returns:
        ScoreBreakdown (score, totalQuestions, correctAnswers, wrongAnswers, 정규화된 답안)
    """
    breakdown = ScoreBreakdown(total_questions=len(answers))

    for answer in answers:
        if not answer.question_id:
            continue

        question = questions.get(answer.question_id)
        if question is None:
            breakdown.missing_question_ids.append(answer.question_id)
            breakdown.normalized_answers.append(NormalizedAnswer(answer.question_id, SKIPPED_INDEX))
            continue

        selected_index = normalize_index(answer.selected_index)
        if selected_index != SKIPPED_INDEX:
            if is_correct_option(question.options or [], selected_index):
                breakdown.correct_answers += 1
                breakdown.score += points_per_correct
            else:
                breakdown.wrong_answers += 1

        breakdown.normalized_answers.append(NormalizedAnswer(answer.question_id, selected_index))

    if breakdown.missing_question_ids:
        logger.warning(f"채점 중 삭제된 문제 발견 (건너뜀 처리): question_ids={breakdown.missing_question_ids}")

    return breakdown
