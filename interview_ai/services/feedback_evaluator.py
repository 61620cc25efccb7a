"""
Answer Feedback Service.

Scores one answer with the language model. The model is asked for strict
JSON; anything that does not parse into a feedback string and a numeric
score is discarded in favour of heuristic fallback feedback.
"""
import json
import logging
import math
from typing import Any, Dict, Optional

from interview_ai.core.errors import UpstreamError
from interview_ai.models.interview import (
    Difficulty,
    Feedback,
    Question,
)
from interview_ai.services.fallback_content import FallbackContentLibrary, get_fallback_library
from interview_ai.services.gateway import LanguageModelGateway, get_gateway
from interview_ai.services.prompts import build_feedback_prompt

logger = logging.getLogger(__name__)


def extract_json_object(response: str) -> Optional[Dict[str, Any]]:
    """
    Pull a JSON object out of a model response.
    
    Tolerates markdown code fences and prose around the object. Returns
    None when no object can be decoded.
    """
    response = response.strip()
    
    # Handle markdown code blocks
    if "```json" in response:
        start = response.find("```json") + 7
        end = response.find("```", start)
        response = response[start:end if end != -1 else None].strip()
    elif "```" in response:
        start = response.find("```") + 3
        end = response.find("```", start)
        response = response[start:end if end != -1 else None].strip()
    
    # Find JSON object bounds
    start = response.find("{")
    end = response.rfind("}")
    if start == -1 or end < start:
        return None
    
    try:
        data = json.loads(response[start:end + 1])
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse feedback JSON: {e}")
        return None
    
    return data if isinstance(data, dict) else None


def parse_feedback(response: str) -> Optional[Feedback]:
    """Validate the model's JSON into Feedback, or None if the shape is wrong."""
    data = extract_json_object(response)
    if data is None:
        return None
    
    text = data.get("feedback")
    score = data.get("score")
    
    if not isinstance(text, str) or not text.strip():
        return None
    if isinstance(score, str):
        try:
            score = float(score.strip())
        except ValueError:
            return None
    if isinstance(score, bool) or not isinstance(score, (int, float)) or math.isnan(score):
        return None
    
    return Feedback(text=text.strip(), score=score)


class FeedbackEvaluator:
    """Produces scored feedback for a single answer."""
    
    def __init__(
        self,
        gateway: Optional[LanguageModelGateway] = None,
        fallback_library: Optional[FallbackContentLibrary] = None,
    ):
        self.gateway = gateway or get_gateway()
        self.fallback = fallback_library or get_fallback_library()
    
    async def evaluate(
        self,
        role: str,
        question: Question,
        answer_text: str,
        difficulty: Difficulty,
    ) -> Feedback:
        """Score ``answer_text``; never raises on model failure."""
        prompt = build_feedback_prompt(role, question.text, answer_text, Difficulty(difficulty).value)
        
        try:
            response = await self.gateway.generate_text(prompt)
        except UpstreamError as e:
            logger.warning(f"Feedback generation failed ({e.message}), using fallback feedback")
            return self.fallback.fallback_feedback(question.type, answer_text)
        
        logger.debug(f"Raw feedback response: {response}")
        feedback = parse_feedback(response)
        
        if feedback is None:
            logger.warning("Unparseable feedback from model, using fallback feedback")
            return self.fallback.fallback_feedback(question.type, answer_text)
        
        return feedback
