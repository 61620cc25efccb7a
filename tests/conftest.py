"""
pytest configuration and shared fixtures.
"""
import os
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

# Configure the app for tests before any settings are loaded
os.environ["AUTH_ENABLED"] = "true"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["SESSION_STORE"] = "memory"
os.environ["ARCHIVE_RESPONSES"] = "false"
os.environ["REPORT_FALLBACK_ENABLED"] = "true"

from interview_ai.core.errors import UpstreamError
from interview_ai.services.fallback_content import load_fallback_content
from interview_ai.services.feedback_evaluator import FeedbackEvaluator
from interview_ai.services.gateway import LanguageModelGateway
from interview_ai.services.interview_orchestrator import InterviewOrchestrator
from interview_ai.services.question_generator import QuestionGenerator
from interview_ai.services.report_generator import ReportGenerator
from interview_ai.services.response_archive import ResponseArchive
from interview_ai.services.session_repository import InMemorySessionRepository


@pytest.fixture
def fallback_library():
    """The fallback content shipped with the package."""
    return load_fallback_content()


@pytest.fixture
def mock_gateway():
    """
    Gateway whose generate_text is an AsyncMock.
    
    Set ``mock_gateway.generate_text.return_value`` or ``side_effect``
    in the test.
    """
    gateway = MagicMock(spec=LanguageModelGateway)
    gateway.generate_text = AsyncMock()
    return gateway


@pytest.fixture
def failing_gateway(mock_gateway):
    """Gateway that always fails, forcing every fallback path."""
    mock_gateway.generate_text.side_effect = UpstreamError("model unavailable")
    return mock_gateway


@pytest.fixture
def make_orchestrator(fallback_library):
    """
    Factory fixture for an orchestrator on an in-memory store.
    
    Usage:
        orchestrator = make_orchestrator(gateway)
    """
    def _make(gateway, report_fallback_enabled: bool = True, repository=None):
        return InterviewOrchestrator(
            repository=repository or InMemorySessionRepository(),
            question_generator=QuestionGenerator(gateway, fallback_library),
            feedback_evaluator=FeedbackEvaluator(gateway, fallback_library),
            report_generator=ReportGenerator(
                gateway, fallback_library, fallback_enabled=report_fallback_enabled,
            ),
            archive=ResponseArchive(enabled=False),
            max_questions=10,
        )
    
    return _make


@pytest.fixture
def auth_headers_for():
    """
    Factory fixture to create auth headers for a user id.
    
    Usage:
        headers = auth_headers_for("user-1")
        response = await client.get("/api/interviews", headers=headers)
    """
    from interview_ai.core.auth import create_token
    
    def _create_headers(user_id: str):
        token = create_token(subject=user_id, expires_delta=timedelta(hours=1))
        return {"Authorization": f"Bearer {token}"}
    
    return _create_headers
