from app.crud.notification import (
    create_notification,
    get_recent_notifications,
)
from app.crud.question import (
    create_question,
    get_question_by_id,
    get_questions_by_ids,
    get_questions_by_test_id,
)
from app.crud.result import (
    create_result,
    delete_results_by_student,
    get_result_by_id,
    get_results_by_student,
)
from app.crud.test import (
    create_test,
    delete_test,
    get_test_by_id,
    get_tests_by_ids,
)

__all__ = [
    "get_test_by_id",
    "get_tests_by_ids",
    "create_test",
    "delete_test",
    "get_question_by_id",
    "get_questions_by_ids",
    "get_questions_by_test_id",
    "create_question",
    "create_result",
    "get_result_by_id",
    "get_results_by_student",
    "delete_results_by_student",
    "create_notification",
    "get_recent_notifications",
]
