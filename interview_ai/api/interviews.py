"""
Interview API endpoints.

Every route acts on behalf of the authenticated caller; sessions owned
by anyone else are refused.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from interview_ai.core.auth import get_current_user
from interview_ai.models.auth import AuthenticatedUser
from interview_ai.models.interview import (
    GenerateInterviewRequest,
    InterviewSession,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from interview_ai.services.interview_orchestrator import (
    InterviewOrchestrator,
    get_interview_orchestrator,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate",
    response_model=InterviewSession,
    status_code=status.HTTP_201_CREATED,
)
async def generate_interview(
    request: GenerateInterviewRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_interview_orchestrator),
):
    """Start a new interview with generated questions."""
    return await orchestrator.start_interview(
        role=request.role,
        difficulty=request.difficulty,
        num_questions=request.num_questions,
        owner_id=current_user.user_id,
    )


@router.get("", response_model=List[InterviewSession])
async def list_interviews(
    current_user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_interview_orchestrator),
):
    """List the caller's interviews, newest first."""
    return await orchestrator.list_sessions(current_user.user_id)


@router.get("/{interview_id}", response_model=InterviewSession)
async def get_interview(
    interview_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_interview_orchestrator),
):
    """Get one interview."""
    return await orchestrator.get_session(interview_id, current_user.user_id)


@router.post("/{interview_id}/answers", response_model=SubmitAnswerResponse)
async def submit_answer(
    interview_id: str,
    request: SubmitAnswerRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_interview_orchestrator),
):
    """Submit the answer to one question and get its feedback."""
    session, feedback = await orchestrator.submit_answer(
        session_id=interview_id,
        owner_id=current_user.user_id,
        question_index=request.question_index,
        answer_text=request.answer,
    )
    return SubmitAnswerResponse(feedback=feedback, session=session)


@router.get("/{interview_id}/report", response_class=PlainTextResponse)
async def get_report(
    interview_id: str,
    download: bool = Query(default=False, description="Send as a file attachment"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_interview_orchestrator),
):
    """Generate the interview report as plain text."""
    report = await orchestrator.generate_report(interview_id, current_user.user_id)

    headers = {}
    if download:
        logger.info(f"Report download for interview {interview_id}")
        headers["Content-Disposition"] = f'attachment; filename="interview-report-{interview_id}.txt"'
    return PlainTextResponse(content=report, headers=headers)
