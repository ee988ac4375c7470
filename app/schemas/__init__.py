from app.schemas.exam import (
    AnswerResponse,
    ExamSubmitRequest,
    ExamSubmitResponse,
    PopulatedAnswer,
    PopulatedTest,
    ResultDetailResponse,
    ResultResponse,
    ResultsDeleteResponse,
    ResultSummaryResponse,
    SubmittedAnswer,
)
from app.schemas.notification import (
    NotificationResponse,
    SuccessResponse,
)
from app.schemas.test import (
    BulkUploadRequest,
    BulkUploadResponse,
    MessageResponse,
    OptionInput,
    QuestionCreateRequest,
    QuestionPublicResponse,
    QuestionResponse,
    StudentTestResponse,
    TestActiveUpdateRequest,
    TestCreateRequest,
    TestResponse,
)

__all__ = [
    "SubmittedAnswer",
    "ExamSubmitRequest",
    "ExamSubmitResponse",
    "AnswerResponse",
    "ResultResponse",
    "PopulatedTest",
    "PopulatedAnswer",
    "ResultDetailResponse",
    "ResultSummaryResponse",
    "ResultsDeleteResponse",
    "NotificationResponse",
    "SuccessResponse",
    "OptionInput",
    "TestCreateRequest",
    "TestActiveUpdateRequest",
    "TestResponse",
    "StudentTestResponse",
    "QuestionCreateRequest",
    "QuestionPublicResponse",
    "QuestionResponse",
    "BulkUploadRequest",
    "BulkUploadResponse",
    "MessageResponse",
]
