"""
Interview Orchestrator Service.

Drives the interview lifecycle: starts sessions, accepts answers one
question at a time, and produces the final report. All ownership and
state checks happen here before any model call is made.
"""
import asyncio
import logging
import weakref
from typing import List, Optional, Tuple

from interview_ai.core.config import get_settings
from interview_ai.core.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from interview_ai.models.interview import (
    Difficulty,
    Feedback,
    InterviewSession,
    SessionStatus,
)
from interview_ai.services.feedback_evaluator import FeedbackEvaluator
from interview_ai.services.question_generator import QuestionGenerator
from interview_ai.services.report_generator import ReportGenerator
from interview_ai.services.response_archive import ResponseArchive
from interview_ai.services.session_repository import SessionRepository, get_session_repository

logger = logging.getLogger(__name__)


def _parse_difficulty(value) -> Difficulty:
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(d.value for d in Difficulty)
        raise ValidationError(f"Difficulty must be one of: {allowed}")


class InterviewOrchestrator:
    """
    Manages interview sessions from start to report.
    
    Answer submissions for one session are serialized with a per-session
    lock; the repository's version check catches writers in other
    processes.
    """
    
    def __init__(
        self,
        repository: Optional[SessionRepository] = None,
        question_generator: Optional[QuestionGenerator] = None,
        feedback_evaluator: Optional[FeedbackEvaluator] = None,
        report_generator: Optional[ReportGenerator] = None,
        archive: Optional[ResponseArchive] = None,
        max_questions: Optional[int] = None,
    ):
        self.repository = repository or get_session_repository()
        self.question_generator = question_generator or QuestionGenerator()
        self.feedback_evaluator = feedback_evaluator or FeedbackEvaluator()
        self.report_generator = report_generator or ReportGenerator()
        self.archive = archive or ResponseArchive()
        self.max_questions = max_questions or get_settings().max_questions
        
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()
    
    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock
    
    async def _load_owned(self, session_id: str, owner_id: str) -> InterviewSession:
        session = await self.repository.get(session_id)
        if session is None:
            raise NotFoundError()
        if not session.is_owned_by(owner_id):
            logger.warning(f"User {owner_id} denied access to session {session_id}")
            raise AuthorizationError()
        return session
    
    async def start_interview(
        self,
        role: str,
        difficulty,
        num_questions: int,
        owner_id: str,
    ) -> InterviewSession:
        """
        Create a session with freshly generated questions.
        
        Raises:
            ValidationError: Blank role, unknown difficulty or question
                count outside [1, max_questions]
        """
        role = (role or "").strip()
        if not role:
            raise ValidationError("Job role is required")
        level = _parse_difficulty(difficulty)
        if isinstance(num_questions, bool) or not isinstance(num_questions, int) \
                or not 1 <= num_questions <= self.max_questions:
            raise ValidationError(f"Number of questions must be between 1 and {self.max_questions}")
        
        logger.info(f"Generating interview for {role} ({level.value}, {num_questions} questions)")
        questions = await self.question_generator.generate(role, level, num_questions)
        
        session = InterviewSession(
            owner_id=owner_id,
            role=role,
            difficulty=level,
            questions=questions,
        )
        await self.repository.create(session)
        await self.archive.save_questions(role, questions)
        
        logger.info(f"Started interview session {session.id} for user {owner_id}")
        return session
    
    async def get_session(self, session_id: str, owner_id: str) -> InterviewSession:
        return await self._load_owned(session_id, owner_id)
    
    async def list_sessions(self, owner_id: str) -> List[InterviewSession]:
        return await self.repository.list_by_owner(owner_id)
    
    async def submit_answer(
        self,
        session_id: str,
        owner_id: str,
        question_index: int,
        answer_text: str,
    ) -> Tuple[InterviewSession, Feedback]:
        """
        Evaluate and record an answer.
        
        Raises:
            NotFoundError, AuthorizationError: Session missing or not owned
            OutOfRangeError, AlreadyAnsweredError: Index not answerable
            ValidationError: Blank answer text
            ConcurrencyConflictError: Session changed by another writer
        """
        async with self._lock_for(session_id):
            session = await self._load_owned(session_id, owner_id)
            question = session.check_answerable(question_index)
            
            if not answer_text or not answer_text.strip():
                raise ValidationError("Answer is required")
            
            feedback = await self.feedback_evaluator.evaluate(
                session.role, question, answer_text, session.difficulty,
            )
            # Clamp again before storing
            feedback = Feedback(text=feedback.text, score=feedback.score)
            
            expected_version = session.version
            session.record_answer(question_index, answer_text, feedback)
            await self.repository.save(session, expected_version)
        
        await self.archive.save_feedback(session.role, question.text, answer_text, feedback)
        
        if session.status == SessionStatus.COMPLETED:
            logger.info(f"Interview session {session_id} completed with score {session.overall_score:.2f}")
        return session, feedback
    
    async def generate_report(self, session_id: str, owner_id: str) -> str:
        """
        Report for whatever has been answered so far.
        
        Raises:
            UpstreamError: Model failed and the fallback report is disabled
        """
        session = await self._load_owned(session_id, owner_id)
        
        report = await self.report_generator.generate(
            session.role,
            session.overall_score,
            session.answered_pairs(),
            session.difficulty,
        )
        await self.archive.save_report(session.role, report)
        return report


# Global orchestrator instance
_orchestrator: Optional[InterviewOrchestrator] = None


def get_interview_orchestrator() -> InterviewOrchestrator:
    """Get or create the interview orchestrator instance."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = InterviewOrchestrator()
    return _orchestrator
