"""
Interview Report Service.

Turns a session's answered questions into a narrative report. When the
model is unavailable the deterministic fallback report is used, unless
that has been switched off in settings.
"""
import logging
from typing import Optional, Sequence, Tuple, Union

from interview_ai.core.config import get_settings
from interview_ai.core.errors import UpstreamError
from interview_ai.models.interview import Answer, Difficulty, Question
from interview_ai.services.fallback_content import (
    REPORT_SECTIONS,
    FallbackContentLibrary,
    get_fallback_library,
)
from interview_ai.services.gateway import LanguageModelGateway, get_gateway
from interview_ai.services.prompts import build_report_prompt

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Generates the end-of-interview report."""
    
    def __init__(
        self,
        gateway: Optional[LanguageModelGateway] = None,
        fallback_library: Optional[FallbackContentLibrary] = None,
        fallback_enabled: Optional[bool] = None,
    ):
        self.gateway = gateway or get_gateway()
        self.fallback = fallback_library or get_fallback_library()
        if fallback_enabled is None:
            fallback_enabled = get_settings().report_fallback_enabled
        self.fallback_enabled = fallback_enabled
    
    async def generate(
        self,
        role: str,
        overall_score: float,
        pairs: Sequence[Tuple[Question, Answer]],
        difficulty: Optional[Union[Difficulty, str]] = None,
    ) -> str:
        """
        Generate a report for the answered questions.
        
        Raises:
            UpstreamError: Model failed and the fallback report is disabled
        """
        level = Difficulty(difficulty) if difficulty else Difficulty.MEDIUM
        prompt = build_report_prompt(role, overall_score, level.value, pairs, REPORT_SECTIONS)
        
        try:
            return await self.gateway.generate_text(prompt)
        except UpstreamError as e:
            if not self.fallback_enabled:
                logger.error(f"Report generation failed for {role}: {e.message}")
                raise
            logger.warning(f"Report generation failed ({e.message}), using fallback report")
            return self.fallback.default_report(role, overall_score, level, pairs)
