from app.services.exam_service import (
    get_result_detail,
    get_student_results,
    submit_exam,
)
from app.services.scoring_service import score_answers
from app.services.test_service import (
    add_question,
    bulk_upload,
    create_test,
    delete_question,
    delete_test,
    get_exam_questions,
    get_test,
)

__all__ = [
    "score_answers",
    "submit_exam",
    "get_result_detail",
    "get_student_results",
    "create_test",
    "get_test",
    "get_exam_questions",
    "add_question",
    "bulk_upload",
    "delete_test",
    "delete_question",
]
