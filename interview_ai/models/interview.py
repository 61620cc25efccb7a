"""
Pydantic models for interview sessions.

The session is the aggregate: questions, answers, feedback, the running
overall score and the lifecycle status all live on it, and the only way
to change it is ``record_answer``.
"""
import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from interview_ai.core.errors import AlreadyAnsweredError, OutOfRangeError

MIN_SCORE = 1
MAX_SCORE = 10


def clamp_score(value) -> int:
    """Truncate a numeric score to an integer in [MIN_SCORE, MAX_SCORE]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"score must be a number, got {type(value).__name__}")
    if math.isnan(value):
        raise ValueError("score must be a number, got NaN")
    if math.isinf(value):
        return MAX_SCORE if value > 0 else MIN_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, int(value)))


def technical_count(count: int) -> int:
    """Number of technical questions in a set of ``count``; the rest are behavioral."""
    return math.ceil(count / 2)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class QuestionType(str, Enum):
    """Kind of interview question."""
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"


class Difficulty(str, Enum):
    """Interview difficulty level."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionStatus(str, Enum):
    """Lifecycle status of an interview session."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Question(CamelModel):
    """A generated interview question."""
    model_config = ConfigDict(frozen=True)
    
    text: str
    type: QuestionType
    difficulty: Difficulty


class Feedback(CamelModel):
    """Evaluation of one answer."""
    model_config = ConfigDict(frozen=True)
    
    text: str
    score: int
    
    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, value):
        return clamp_score(value)


class Answer(CamelModel):
    """A candidate's answer to the question at ``question_index``."""
    model_config = ConfigDict(frozen=True)
    
    question_index: int = Field(..., ge=0)
    text: str
    feedback: Feedback


class InterviewSession(CamelModel):
    """Interview session aggregate."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    owner_id: str
    role: str
    difficulty: Difficulty = Difficulty.MEDIUM
    questions: List[Question] = Field(default_factory=list)
    answers: List[Answer] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.IN_PROGRESS
    overall_score: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0
    
    def is_owned_by(self, owner_id: str) -> bool:
        return self.owner_id == owner_id
    
    def is_answered(self, question_index: int) -> bool:
        return any(a.question_index == question_index for a in self.answers)
    
    @property
    def is_complete(self) -> bool:
        return self.status == SessionStatus.COMPLETED
    
    def check_answerable(self, question_index: int) -> Question:
        """
        Return the question at ``question_index`` if it can still be answered.
        
        Raises:
            OutOfRangeError: Index does not address a question
            AlreadyAnsweredError: Question already has an answer
        """
        if question_index < 0 or question_index >= len(self.questions):
            raise OutOfRangeError(
                f"Question index {question_index} is out of range for "
                f"{len(self.questions)} questions"
            )
        if self.is_answered(question_index):
            raise AlreadyAnsweredError(f"Question {question_index} has already been answered")
        return self.questions[question_index]
    
    def record_answer(self, question_index: int, text: str, feedback: Feedback) -> Answer:
        """
        Append an answer, recompute the overall score and advance the status.
        
        The status only ever moves from in_progress to completed.
        """
        self.check_answerable(question_index)
        
        answer = Answer(question_index=question_index, text=text, feedback=feedback)
        self.answers.append(answer)
        self.overall_score = sum(a.feedback.score for a in self.answers) / len(self.answers)
        
        if len(self.answers) == len(self.questions):
            self.status = SessionStatus.COMPLETED
        
        return answer
    
    def answered_pairs(self) -> List[Tuple[Question, Answer]]:
        """Answered questions with their answers, ordered by question index."""
        ordered = sorted(self.answers, key=lambda a: a.question_index)
        return [(self.questions[a.question_index], a) for a in ordered]


# Request / response models

class GenerateInterviewRequest(CamelModel):
    """Body of POST /api/interviews/generate."""
    role: str = Field(..., description="Job role to interview for")
    difficulty: str = Field(default=Difficulty.MEDIUM.value, description="easy, medium or hard")
    num_questions: int = Field(..., description="Number of questions to generate")


class SubmitAnswerRequest(CamelModel):
    """Body of POST /api/interviews/{id}/answers."""
    question_index: int
    answer: str


class SubmitAnswerResponse(CamelModel):
    """Feedback for the submitted answer plus the updated session."""
    feedback: Feedback
    session: InterviewSession
