"""
Error taxonomy for the Interview AI service.

Every error that can reach the HTTP boundary carries a stable machine-readable
code and a human-readable message. Internal details (prompts, raw model output,
upstream error bodies) are logged where they occur and never attached here.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InterviewAIError(Exception):
    """Base class for all service errors."""
    
    code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
    
    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)
    
    def to_dict(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(InterviewAIError):
    """Bad input shape or range."""
    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(InterviewAIError):
    """Interview session does not exist."""
    code = "SESSION_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Interview not found"


class AuthorizationError(InterviewAIError):
    """Caller does not own the interview session."""
    code = "NOT_AUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class OutOfRangeError(InterviewAIError):
    """Question index does not address an unanswered question."""
    code = "QUESTION_INDEX_OUT_OF_RANGE"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Question index out of range"


class AlreadyAnsweredError(OutOfRangeError):
    """Question index has already been answered."""
    code = "QUESTION_ALREADY_ANSWERED"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Question already answered"


class ConcurrencyConflictError(InterviewAIError):
    """Session was modified by another request between read and write."""
    code = "CONCURRENT_UPDATE"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Interview was modified concurrently, please retry"


class UpstreamError(InterviewAIError):
    """Language model gateway failure."""
    code = "UPSTREAM_ERROR"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Language model service unavailable"


async def interview_error_handler(request: Request, exc: InterviewAIError) -> JSONResponse:
    """Render an InterviewAIError as a standard error response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request body/query validation failures as 400 VALIDATION_ERROR."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    
    error = ValidationError("; ".join(messages) or None)
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the service's exception handlers to an application."""
    app.add_exception_handler(InterviewAIError, interview_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
