"""
Interview Orchestrator Tests.

Runs the lifecycle on an in-memory store with a mocked gateway.
"""
import asyncio

import pytest
from unittest.mock import AsyncMock

from interview_ai.core.errors import (
    AlreadyAnsweredError,
    AuthorizationError,
    ConcurrencyConflictError,
    NotFoundError,
    OutOfRangeError,
    UpstreamError,
    ValidationError,
)
from interview_ai.models.interview import Difficulty, QuestionType, SessionStatus
from interview_ai.services.fallback_content import REPORT_SECTIONS
from interview_ai.services.session_repository import InMemorySessionRepository


GOOD_ANSWER = "For example, I built a caching library for our API. " * 5

REQUIRED_HEADERS = (
    "Overall Assessment",
    "Technical Skills",
    "Communication Skills",
    "Strengths",
    "Areas for Improvement",
    "Recommendations",
)


class TestStartInterview:
    """Tests for start_interview."""
    
    @pytest.mark.asyncio
    async def test_creates_in_progress_session(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        assert session.owner_id == "user-1"
        assert session.role == "Backend"
        assert session.difficulty == Difficulty.MEDIUM
        assert session.status == SessionStatus.IN_PROGRESS
        assert session.answers == []
        assert session.overall_score == 0
        assert session.version == 0
        assert [q.type for q in session.questions] == [QuestionType.TECHNICAL, QuestionType.BEHAVIORAL]
        assert await orchestrator.repository.get(session.id) == session
    
    @pytest.mark.asyncio
    async def test_difficulty_is_case_insensitive(self, make_orchestrator, failing_gateway):
        session = await make_orchestrator(failing_gateway).start_interview("Backend", "HARD", 1, owner_id="u")
        assert session.difficulty == Difficulty.HARD
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("role,difficulty,count", [
        ("", "medium", 2),
        ("   ", "medium", 2),
        ("Backend", "expert", 2),
        ("Backend", "medium", 0),
        ("Backend", "medium", 11),
        ("Backend", "medium", -1),
    ])
    async def test_validation(self, make_orchestrator, mock_gateway, role, difficulty, count):
        orchestrator = make_orchestrator(mock_gateway)
        
        with pytest.raises(ValidationError):
            await orchestrator.start_interview(role, difficulty, count, owner_id="user-1")
        
        mock_gateway.generate_text.assert_not_called()


class TestSubmitAnswer:
    """Tests for submit_answer."""
    
    @pytest.mark.asyncio
    async def test_full_lifecycle_with_scores(self, make_orchestrator, mock_gateway):
        """[9, 7, 5] averages to 7.0 and completes on the last answer."""
        orchestrator = make_orchestrator(mock_gateway)
        mock_gateway.generate_text.return_value = "1. A?\n2. B?\n3. C?"
        session = await orchestrator.start_interview("Backend", "medium", 3, owner_id="user-1")
        
        for index, score in enumerate([9, 7, 5]):
            mock_gateway.generate_text.return_value = f'{{"feedback": "Score {score}", "score": {score}}}'
            session, feedback = await orchestrator.submit_answer(session.id, "user-1", index, "answer")
            assert feedback.score == score
            expected_status = SessionStatus.COMPLETED if index == 2 else SessionStatus.IN_PROGRESS
            assert session.status == expected_status
        
        assert session.overall_score == 7.0
        assert session.version == 3
    
    @pytest.mark.asyncio
    async def test_fallback_feedback_when_model_fails(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        session, feedback = await orchestrator.submit_answer(session.id, "user-1", 0, GOOD_ANSWER)
        
        assert feedback.score == 9
        assert session.answers[0].feedback == feedback
    
    @pytest.mark.asyncio
    async def test_duplicate_rejected_and_score_unchanged(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        await orchestrator.submit_answer(session.id, "user-1", 0, GOOD_ANSWER)
        
        with pytest.raises(AlreadyAnsweredError):
            await orchestrator.submit_answer(session.id, "user-1", 0, "short")
        
        stored = await orchestrator.get_session(session.id, "user-1")
        assert len(stored.answers) == 1
        assert stored.overall_score == 9.0
        assert stored.version == 1
    
    @pytest.mark.asyncio
    async def test_out_of_range(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        with pytest.raises(OutOfRangeError):
            await orchestrator.submit_answer(session.id, "user-1", 2, GOOD_ANSWER)
    
    @pytest.mark.asyncio
    async def test_blank_answer(self, make_orchestrator, mock_gateway):
        orchestrator = make_orchestrator(mock_gateway)
        mock_gateway.generate_text.return_value = "1. A?"
        session = await orchestrator.start_interview("Backend", "easy", 1, owner_id="user-1")
        mock_gateway.generate_text.reset_mock()
        
        with pytest.raises(ValidationError):
            await orchestrator.submit_answer(session.id, "user-1", 0, "   ")
        
        mock_gateway.generate_text.assert_not_called()
    
    @pytest.mark.asyncio
    async def test_missing_session(self, make_orchestrator, failing_gateway):
        with pytest.raises(NotFoundError):
            await make_orchestrator(failing_gateway).submit_answer("missing", "user-1", 0, "answer")
    
    @pytest.mark.asyncio
    async def test_non_owner_cannot_mutate(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        with pytest.raises(AuthorizationError):
            await orchestrator.submit_answer(session.id, "intruder", 0, GOOD_ANSWER)
        
        stored = await orchestrator.get_session(session.id, "user-1")
        assert stored.answers == []
        assert stored.version == 0
    
    @pytest.mark.asyncio
    async def test_concurrent_duplicate_submissions(self, make_orchestrator, failing_gateway):
        """Two racing submissions for one index: exactly one wins."""
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        results = await asyncio.gather(
            orchestrator.submit_answer(session.id, "user-1", 0, GOOD_ANSWER),
            orchestrator.submit_answer(session.id, "user-1", 0, GOOD_ANSWER),
            return_exceptions=True,
        )
        
        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], AlreadyAnsweredError)
        stored = await orchestrator.get_session(session.id, "user-1")
        assert len(stored.answers) == 1
    
    @pytest.mark.asyncio
    async def test_concurrent_different_indexes(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        await asyncio.gather(
            orchestrator.submit_answer(session.id, "user-1", 0, GOOD_ANSWER),
            orchestrator.submit_answer(session.id, "user-1", 1, GOOD_ANSWER),
        )
        
        stored = await orchestrator.get_session(session.id, "user-1")
        assert len(stored.answers) == 2
        assert stored.status == SessionStatus.COMPLETED
        assert stored.version == 2
    
    @pytest.mark.asyncio
    async def test_conflict_from_other_writer(self, make_orchestrator, failing_gateway):
        """A write that lands between read and save surfaces as a conflict."""
        repository = InMemorySessionRepository()
        orchestrator = make_orchestrator(failing_gateway, repository=repository)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        original_evaluate = orchestrator.feedback_evaluator.evaluate
        
        async def evaluate_then_interfere(*args, **kwargs):
            feedback = await original_evaluate(*args, **kwargs)
            other = await repository.get(session.id)
            await repository.save(other, expected_version=other.version)
            return feedback
        
        orchestrator.feedback_evaluator.evaluate = AsyncMock(side_effect=evaluate_then_interfere)
        
        with pytest.raises(ConcurrencyConflictError):
            await orchestrator.submit_answer(session.id, "user-1", 0, GOOD_ANSWER)
        
        assert (await repository.get(session.id)).answers == []


class TestReadAccess:
    """Tests for get_session, list_sessions and generate_report."""
    
    @pytest.mark.asyncio
    async def test_get_session_owner_checks(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 1, owner_id="user-1")
        
        assert (await orchestrator.get_session(session.id, "user-1")).id == session.id
        with pytest.raises(AuthorizationError):
            await orchestrator.get_session(session.id, "user-2")
        with pytest.raises(NotFoundError):
            await orchestrator.get_session("missing", "user-1")
    
    @pytest.mark.asyncio
    async def test_list_sessions_only_own(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway)
        first = await orchestrator.start_interview("Backend", "easy", 1, owner_id="user-1")
        second = await orchestrator.start_interview("Frontend", "hard", 1, owner_id="user-1")
        await orchestrator.start_interview("Backend", "easy", 1, owner_id="user-2")
        
        sessions = await orchestrator.list_sessions("user-1")
        
        assert {s.id for s in sessions} == {first.id, second.id}
    
    @pytest.mark.asyncio
    async def test_end_to_end_fallback_report(self, make_orchestrator, failing_gateway):
        """Backend/medium/2: answer both, completed, report has every section."""
        orchestrator = make_orchestrator(failing_gateway)
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        
        await orchestrator.submit_answer(session.id, "user-1", 0, GOOD_ANSWER)
        session, _ = await orchestrator.submit_answer(session.id, "user-1", 1, GOOD_ANSWER)
        assert session.status == SessionStatus.COMPLETED
        
        report = await orchestrator.generate_report(session.id, "user-1")
        
        assert report
        for section in REPORT_SECTIONS:
            assert section in report
        for header in REQUIRED_HEADERS:
            assert header in report
    
    @pytest.mark.asyncio
    async def test_report_allowed_in_progress(self, make_orchestrator, mock_gateway):
        orchestrator = make_orchestrator(mock_gateway)
        mock_gateway.generate_text.return_value = "1. A?\n2. B?"
        session = await orchestrator.start_interview("Backend", "medium", 2, owner_id="user-1")
        mock_gateway.generate_text.return_value = '{"feedback": "ok", "score": 6}'
        await orchestrator.submit_answer(session.id, "user-1", 1, "only the second one")
        mock_gateway.generate_text.return_value = "Partial report."
        
        report = await orchestrator.generate_report(session.id, "user-1")
        
        assert report == "Partial report."
        prompt = mock_gateway.generate_text.call_args[0][0]
        assert "Q: B?\nA: only the second one\nScore: 6/10" in prompt
        assert "Q: A?" not in prompt
    
    @pytest.mark.asyncio
    async def test_report_upstream_error_without_fallback(self, make_orchestrator, failing_gateway):
        orchestrator = make_orchestrator(failing_gateway, report_fallback_enabled=False)
        session = await orchestrator.start_interview("Backend", "medium", 1, owner_id="user-1")
        
        with pytest.raises(UpstreamError):
            await orchestrator.generate_report(session.id, "user-1")
    
    @pytest.mark.asyncio
    async def test_report_requires_owner(self, make_orchestrator, mock_gateway):
        orchestrator = make_orchestrator(mock_gateway)
        mock_gateway.generate_text.return_value = "1. A?"
        session = await orchestrator.start_interview("Backend", "medium", 1, owner_id="user-1")
        mock_gateway.generate_text.reset_mock()
        
        with pytest.raises(AuthorizationError):
            await orchestrator.generate_report(session.id, "user-2")
        mock_gateway.generate_text.assert_not_called()
