"""
Models package.
"""
from interview_ai.models.interview import (
    QuestionType,
    Difficulty,
    SessionStatus,
    Question,
    Feedback,
    Answer,
    InterviewSession,
    GenerateInterviewRequest,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
    clamp_score,
    technical_count,
)

__all__ = [
    "QuestionType",
    "Difficulty",
    "SessionStatus",
    "Question",
    "Feedback",
    "Answer",
    "InterviewSession",
    "GenerateInterviewRequest",
    "SubmitAnswerRequest",
    "SubmitAnswerResponse",
    "clamp_score",
    "technical_count",
]
