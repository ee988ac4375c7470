"""커스텀 예외 클래스 정의"""


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스"""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidSubmissionError(BaseAppError):
    """시험 제출 요청 형식이 잘못되었을 때 (400)"""

    def __init__(self, message: str = "Invalid data."):
        super().__init__(message, status_code=400)


class InvalidQuestionError(BaseAppError):
    """문제 등록 요청이 잘못되었을 때 (400)"""

    def __init__(self, message: str = "Missing fields"):
        super().__init__(message, status_code=400)


class TestNotFoundError(BaseAppError):
    """시험(Test)을 찾을 수 없을 때 (404)"""

    __test__ = False  # pytest 수집 대상 아님

    def __init__(self, test_id: int | None = None):
        self.test_id = test_id
        super().__init__("Test not found", status_code=404)


class QuestionNotFoundError(BaseAppError):
    """문제를 찾을 수 없을 때 (404)"""

    def __init__(self, question_id: int):
        self.question_id = question_id
        super().__init__("Question not found", status_code=404)


class ResultNotFoundError(BaseAppError):
    """시험 결과를 찾을 수 없을 때 (404)"""

    def __init__(self, result_id: int):
        self.result_id = result_id
        super().__init__("Result not found", status_code=404)


class NotificationNotFoundError(BaseAppError):
    """알림을 찾을 수 없을 때 (404)"""

    def __init__(self, notification_id: int):
        self.notification_id = notification_id
        super().__init__("Notification not found", status_code=404)
