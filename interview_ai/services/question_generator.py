"""
Question Generation Service.

Asks the language model for a numbered list of questions and parses it.
If the model fails or returns fewer usable lines than requested, the
whole set comes from the fallback library instead.
"""
import logging
import re
from typing import List, Optional

from interview_ai.core.errors import UpstreamError
from interview_ai.models.interview import (
    Difficulty,
    Question,
    QuestionType,
    technical_count,
)
from interview_ai.services.fallback_content import FallbackContentLibrary, get_fallback_library
from interview_ai.services.gateway import LanguageModelGateway, get_gateway
from interview_ai.services.prompts import build_question_prompt

logger = logging.getLogger(__name__)

NUMBERED_LINE = re.compile(r"^\d+[.)]")
NUMBER_MARKER = re.compile(r"^\d+[.)]\s*")


def parse_numbered_questions(text: str, count: int) -> List[str]:
    """
    Extract up to ``count`` question texts from numbered lines.
    
    Only lines starting with ``<n>.`` or ``<n>)`` count; the marker is
    stripped and lines left empty are dropped.
    """
    parsed = []
    for line in text.splitlines():
        line = line.strip()
        if not NUMBERED_LINE.match(line):
            continue
        question = NUMBER_MARKER.sub("", line).strip()
        if question:
            parsed.append(question)
    return parsed[:count]


class QuestionGenerator:
    """Generates interview questions for a role and difficulty."""
    
    def __init__(
        self,
        gateway: Optional[LanguageModelGateway] = None,
        fallback_library: Optional[FallbackContentLibrary] = None,
    ):
        self.gateway = gateway or get_gateway()
        self.fallback = fallback_library or get_fallback_library()
    
    async def generate(self, role: str, difficulty: Difficulty, count: int) -> List[Question]:
        """
        Return exactly ``count`` questions, the first ceil(count/2) technical.
        
        Never raises on model failure.
        """
        difficulty = Difficulty(difficulty)
        prompt = build_question_prompt(role, difficulty.value, count)
        
        try:
            response = await self.gateway.generate_text(prompt)
        except UpstreamError as e:
            logger.warning(f"Question generation failed ({e.message}), using fallback questions")
            return self.fallback.fallback_questions(role, difficulty, count)
        
        logger.debug(f"Raw question response: {response}")
        texts = parse_numbered_questions(response, count)
        
        if len(texts) < count:
            logger.warning(
                f"Model returned {len(texts)} of {count} questions for {role}, using fallback questions"
            )
            return self.fallback.fallback_questions(role, difficulty, count)
        
        n_technical = technical_count(count)
        return [
            Question(
                text=text,
                type=QuestionType.TECHNICAL if i < n_technical else QuestionType.BEHAVIORAL,
                difficulty=difficulty,
            )
            for i, text in enumerate(texts)
        ]
