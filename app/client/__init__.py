from app.client.analysis import (
    AnswerFilter,
    AnswerOutcome,
    ResultAnalysis,
    analyze_result,
    calculate_percentage,
    summarize_result,
)
from app.client.api import ApiError, ExamApiClient
from app.client.polling import Poller
from app.client.session import ExamSession, ExamState, PaletteStatus, format_time

__all__ = [
    "ApiError",
    "ExamApiClient",
    "ExamSession",
    "ExamState",
    "PaletteStatus",
    "format_time",
    "Poller",
    "AnswerFilter",
    "AnswerOutcome",
    "ResultAnalysis",
    "analyze_result",
    "calculate_percentage",
    "summarize_result",
]
