from app.models.base import Base, get_db
from app.models.notification import Notification
from app.models.question import Question
from app.models.result import SKIPPED_INDEX, Result, ResultAnswer
from app.models.test import Test

__all__ = ["Base", "Test", "Question", "Result", "ResultAnswer", "Notification", "SKIPPED_INDEX", "get_db"]
