"""
Services package.
"""
from interview_ai.services.gateway import LanguageModelGateway, get_gateway
from interview_ai.services.fallback_content import (
    FallbackContentLibrary,
    load_fallback_content,
    get_fallback_library,
)
from interview_ai.services.question_generator import QuestionGenerator
from interview_ai.services.feedback_evaluator import FeedbackEvaluator
from interview_ai.services.report_generator import ReportGenerator
from interview_ai.services.response_archive import ResponseArchive
from interview_ai.services.session_repository import (
    SessionRepository,
    InMemorySessionRepository,
    MongoSessionRepository,
    get_session_repository,
)
from interview_ai.services.interview_orchestrator import (
    InterviewOrchestrator,
    get_interview_orchestrator,
)

__all__ = [
    "LanguageModelGateway",
    "get_gateway",
    "FallbackContentLibrary",
    "load_fallback_content",
    "get_fallback_library",
    "QuestionGenerator",
    "FeedbackEvaluator",
    "ReportGenerator",
    "ResponseArchive",
    "SessionRepository",
    "InMemorySessionRepository",
    "MongoSessionRepository",
    "get_session_repository",
    "InterviewOrchestrator",
    "get_interview_orchestrator",
]
