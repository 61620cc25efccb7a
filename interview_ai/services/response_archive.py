"""
Response archive.

Optionally keeps a plain-text copy of every generated question set,
feedback and report under ``responses_dir``. Files are named
``<role>_<kind>_<timestamp>.txt``. Archiving is best effort: failures
are logged and never reach the caller.
"""
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from interview_ai.core.config import get_settings
from interview_ai.models.interview import Feedback, Question

logger = logging.getLogger(__name__)


def _safe(part: str) -> str:
    return "".join(c if c.isalnum() or c in "-_" else "-" for c in part)


def format_questions(role: str, questions: List[Question]) -> str:
    blocks = [
        f"{i}. {q.text}\nType: {q.type.value}\nDifficulty: {q.difficulty.value}\n"
        for i, q in enumerate(questions, 1)
    ]
    return f"Interview Questions for {role} Position\n\n" + "\n".join(blocks)


def format_feedback(role: str, question: str, answer: str, feedback: Feedback) -> str:
    return (
        f"Feedback for {role} Position\n\n"
        f"Question: {question}\nAnswer: {answer}\n\n"
        f"Feedback: {feedback.text}\nScore: {feedback.score}/10"
    )


class ResponseArchive:
    """Writes generated content to text files when enabled."""
    
    def __init__(self, base_path: Optional[str] = None, enabled: Optional[bool] = None):
        settings = get_settings()
        self.base_path = Path(base_path or settings.responses_dir)
        self.enabled = settings.archive_responses if enabled is None else enabled
    
    def _path_for(self, role: str, kind: str) -> Path:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        return self.base_path / f"{_safe(role)}_{kind}_{timestamp}.txt"
    
    def _write(self, path: Path, content: str):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    
    async def save(self, kind: str, role: str, content: str) -> Optional[Path]:
        """Write ``content``; returns the file path, or None when disabled or failed."""
        if not self.enabled:
            return None
        
        path = self._path_for(role, kind)
        try:
            await asyncio.to_thread(self._write, path, content)
        except OSError as e:
            logger.error(f"Failed to archive {kind} for {role}: {e}")
            return None
        
        logger.info(f"Saved {kind} to {path}")
        return path
    
    async def save_questions(self, role: str, questions: List[Question]) -> Optional[Path]:
        return await self.save("questions", role, format_questions(role, questions))
    
    async def save_feedback(self, role: str, question: str, answer: str, feedback: Feedback) -> Optional[Path]:
        return await self.save("feedback", role, format_feedback(role, question, answer, feedback))
    
    async def save_report(self, role: str, report: str) -> Optional[Path]:
        return await self.save("report", role, report)
