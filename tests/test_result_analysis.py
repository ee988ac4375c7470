"""결과 분석 테스트 (삭제된 시험/문제가 있어도 결과를 보여줄 수 있어야 함)"""
import pytest

from app.client.analysis import (
    DETAIL_UNAVAILABLE_MESSAGE,
    NO_ANSWERS_MESSAGE,
    PLACEHOLDER_TEST,
    AnswerFilter,
    AnswerOutcome,
    DetailStatus,
    analyze_result,
    calculate_percentage,
    classify_answer,
    find_correct_index,
    summarize_result,
)


def make_question(correct_index, text="Q"):
    return {
        "_id": 1,
        "question": text,
        "options": [{"text": t, "isCorrect": i == correct_index} for i, t in enumerate(["a", "b", "c"])],
    }


def make_result(answers, test=None, score=1, total=3, correct=1, wrong=1):
    if test is None:
        test = {"_id": 7, "title": "Quiz", "totalMarks": 4, "passingMarks": 2}
    return {
        "_id": 10,
        "studentId": 42,
        "testId": test,
        "score": score,
        "totalQuestions": total,
        "correctAnswers": correct,
        "wrongAnswers": wrong,
        "answers": answers,
    }


def test_calculate_percentage():
    assert calculate_percentage(3, 4) == 75
    assert calculate_percentage(2, 3) == 67
    assert calculate_percentage(5, 0) == 0


@pytest.mark.parametrize("score, total, expected", [(1, 8, 13), (5, 8, 63), (3, 8, 38), (7, 8, 88)])
def test_calculate_percentage_rounds_half_up(score, total, expected):
    assert calculate_percentage(score, total) == expected


def test_find_correct_index():
    assert find_correct_index(make_question(2)) == 2
    assert find_correct_index({"options": [{"text": "a", "isCorrect": False}]}) == -1


@pytest.mark.parametrize(
    "selected, expected",
    [
        (1, AnswerOutcome.CORRECT),
        (0, AnswerOutcome.INCORRECT),
        (-1, AnswerOutcome.SKIPPED),
        (None, AnswerOutcome.SKIPPED),
    ],
)
def test_classify_answer(selected, expected):
    assert classify_answer(make_question(1), selected) is expected


def test_skipped_is_not_correct_when_question_has_no_correct_option():
    """정답이 없는 문제에서 -1 을 정답으로 보지 않는다"""
    question = {"options": [{"text": "a", "isCorrect": False}, {"text": "b", "isCorrect": False}]}

    assert classify_answer(question, -1) is AnswerOutcome.SKIPPED


def test_analyze_result_with_live_questions():
    result = make_result(
        [
            {"questionId": make_question(0, "Q1"), "selectedIndex": 0},
            {"questionId": make_question(1, "Q2"), "selectedIndex": 2},
            {"questionId": make_question(2, "Q3"), "selectedIndex": -1},
        ],
        score=2,
    )

    analysis = analyze_result(result)

    assert analysis.detail_available is True
    assert analysis.detail_message is None
    assert analysis.percentage == 50
    assert analysis.passed is True
    assert analysis.skipped == 1
    assert [row.outcome for row in analysis.rows] == [
        AnswerOutcome.CORRECT,
        AnswerOutcome.INCORRECT,
        AnswerOutcome.SKIPPED,
    ]
    assert analysis.rows[1].correct_index == 1
    assert analysis.rows[0].options == ["a", "b", "c"]
    assert [row.number for row in analysis.filter_rows(AnswerFilter.INCORRECT)] == [2]
    assert [row.number for row in analysis.filter_rows("skipped")] == [3]
    assert len(analysis.filter_rows()) == 3


def test_deleted_test_uses_placeholder():
    result = make_result([{"questionId": make_question(0), "selectedIndex": 0}], test=None)
    result["testId"] = None

    analysis = analyze_result(result)

    assert analysis.test is PLACEHOLDER_TEST
    assert analysis.test.title == "unavailable"
    assert analysis.percentage == 0
    assert analysis.detail_available is True


def test_any_deleted_question_hides_all_rows():
    result = make_result(
        [
            {"questionId": make_question(0), "selectedIndex": 0},
            {"questionId": None, "selectedIndex": 1},
            {"questionId": make_question(2), "selectedIndex": 2},
        ]
    )

    analysis = analyze_result(result)

    assert analysis.detail_status is DetailStatus.QUESTIONS_DELETED
    assert analysis.detail_message == DETAIL_UNAVAILABLE_MESSAGE
    assert analysis.rows == []
    # 집계 수치는 저장된 값 그대로
    assert analysis.score == 1
    assert analysis.total_questions == 3
    assert analysis.correct_answers == 1
    assert analysis.wrong_answers == 1


def test_result_without_answers():
    result = make_result([], total=5, correct=2, wrong=1)

    analysis = analyze_result(result)

    assert analysis.detail_status is DetailStatus.NO_ANSWERS
    assert analysis.detail_message == NO_ANSWERS_MESSAGE
    assert analysis.skipped == 2


def test_summarize_result():
    summary = summarize_result(make_result([], score=3))

    assert summary.result_id == 10
    assert summary.test.title == "Quiz"
    assert summary.percentage == 75
    assert summary.passed is True


def test_summarize_result_with_deleted_test():
    result = make_result([], score=0)
    result["testId"] = None

    summary = summarize_result(result)

    assert summary.test.available is False
    assert summary.percentage == 0
