"""
Fallback Content Library.

Deterministic questions, feedback and report text used whenever the
language model fails or answers with something unusable. The content is
loaded once from ``config/fallback_content.yaml`` into frozen structures
and handed to the generator, evaluator and report generator.
"""
import itertools
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple, Union

import yaml

from interview_ai.core.config import CONFIG_DIR
from interview_ai.models.interview import (
    Answer,
    Difficulty,
    Feedback,
    Question,
    QuestionType,
    technical_count,
)

logger = logging.getLogger(__name__)

DEFAULT_ROLE_KEY = "default"

REPORT_SECTIONS = (
    "Overall Assessment",
    "Technical Skills",
    "Communication Skills",
    "Strengths",
    "Areas for Improvement",
    "Recommendations",
)


class FeedbackLevel:
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class FeedbackTemplate:
    text: str
    score: int


@dataclass(frozen=True)
class AnswerHeuristics:
    """Thresholds and keywords used to grade an answer without a model."""
    long_answer_chars: int
    short_answer_chars: int
    detail_keywords: Tuple[str, ...]
    technical_keywords: Tuple[str, ...]


@dataclass(frozen=True)
class ReportBand:
    min_score: float
    assessment: str
    recommendation: str


def normalize_role(role: str) -> str:
    """Lookup key for a role: lowercase with spaces, hyphens and underscores removed."""
    return re.sub(r"[\s_\-]+", "", role or "").lower()


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class FallbackContentLibrary:
    """Read-only table of canned interview content."""
    
    def __init__(
        self,
        technical_questions: Mapping[Difficulty, Mapping[str, Tuple[str, ...]]],
        behavioral_questions: Mapping[Difficulty, Tuple[str, ...]],
        feedback: Mapping[QuestionType, Mapping[str, FeedbackTemplate]],
        heuristics: AnswerHeuristics,
        report_bands: Tuple[ReportBand, ...],
        report_strengths: Tuple[str, ...],
        report_improvements: Tuple[str, ...],
    ):
        self._technical = technical_questions
        self._behavioral = behavioral_questions
        self._feedback = feedback
        self.heuristics = heuristics
        self._bands = report_bands
        self._strengths = report_strengths
        self._improvements = report_improvements
    
    @classmethod
    def from_dict(cls, data: dict) -> "FallbackContentLibrary":
        """Build the library from the parsed YAML document."""
        questions = data["questions"]
        
        technical = {}
        behavioral = {}
        for difficulty in Difficulty:
            by_role = questions["technical"][difficulty.value]
            technical[difficulty] = MappingProxyType({
                normalize_role(role): tuple(texts) for role, texts in by_role.items()
            })
            behavioral[difficulty] = tuple(questions["behavioral"][difficulty.value])
            if DEFAULT_ROLE_KEY not in technical[difficulty] or not behavioral[difficulty]:
                raise ValueError(f"Fallback questions incomplete for difficulty '{difficulty.value}'")
        
        feedback = {}
        for question_type in QuestionType:
            levels = data["feedback"][question_type.value]
            feedback[question_type] = MappingProxyType({
                level: FeedbackTemplate(text=entry["text"], score=int(entry["score"]))
                for level, entry in levels.items()
            })
        
        heuristics_data = data["heuristics"]
        heuristics = AnswerHeuristics(
            long_answer_chars=int(heuristics_data["long_answer_chars"]),
            short_answer_chars=int(heuristics_data["short_answer_chars"]),
            detail_keywords=tuple(k.lower() for k in heuristics_data["detail_keywords"]),
            technical_keywords=tuple(k.lower() for k in heuristics_data["technical_keywords"]),
        )
        
        report = data["report"]
        bands = tuple(sorted(
            (ReportBand(float(b["min_score"]), b["assessment"], b["recommendation"]) for b in report["bands"]),
            key=lambda band: band.min_score,
            reverse=True,
        ))
        
        return cls(
            technical_questions=MappingProxyType(technical),
            behavioral_questions=MappingProxyType(behavioral),
            feedback=MappingProxyType(feedback),
            heuristics=heuristics,
            report_bands=bands,
            report_strengths=tuple(report["strengths"]),
            report_improvements=tuple(report["improvements"]),
        )
    
    # Questions
    
    def technical_templates(self, role: str, difficulty: Difficulty) -> Tuple[str, ...]:
        by_role = self._technical[Difficulty(difficulty)]
        return by_role.get(normalize_role(role)) or by_role[DEFAULT_ROLE_KEY]
    
    def fallback_questions(self, role: str, difficulty: Difficulty, count: int) -> List[Question]:
        """
        Build ``count`` questions: the first ceil(count/2) technical for the
        role, the rest behavioral. Templates are cycled when there are fewer
        than needed.
        """
        difficulty = Difficulty(difficulty)
        n_technical = technical_count(count)
        
        technical = itertools.islice(itertools.cycle(self.technical_templates(role, difficulty)), n_technical)
        behavioral = itertools.islice(itertools.cycle(self._behavioral[difficulty]), count - n_technical)
        
        questions = [
            Question(text=text, type=QuestionType.TECHNICAL, difficulty=difficulty)
            for text in technical
        ]
        questions.extend(
            Question(text=text, type=QuestionType.BEHAVIORAL, difficulty=difficulty)
            for text in behavioral
        )
        return questions
    
    # Feedback
    
    def feedback_level(self, answer_text: str) -> str:
        """Grade an answer as high, medium or low from its length and vocabulary."""
        h = self.heuristics
        text = (answer_text or "").lower()
        has_details = _contains_any(text, h.detail_keywords)
        has_technical_terms = _contains_any(text, h.technical_keywords)
        
        if len(text) > h.long_answer_chars and (has_details or has_technical_terms):
            return FeedbackLevel.HIGH
        if len(text) < h.short_answer_chars or not (has_details or has_technical_terms):
            return FeedbackLevel.LOW
        return FeedbackLevel.MEDIUM
    
    def fallback_feedback(self, question_type: QuestionType, answer_text: str) -> Feedback:
        """Canned feedback for the question type at the answer's heuristic level."""
        template = self._feedback[QuestionType(question_type)][self.feedback_level(answer_text)]
        return Feedback(text=template.text, score=template.score)
    
    # Report
    
    def band_for(self, overall_score: float) -> ReportBand:
        for band in self._bands:
            if overall_score >= band.min_score:
                return band
        return self._bands[-1]
    
    def default_report(
        self,
        role: str,
        overall_score: float,
        difficulty: Optional[Union[Difficulty, str]],
        pairs: Sequence[Tuple[Question, Answer]],
    ) -> str:
        """Deterministic report with every standard section."""
        level = Difficulty(difficulty).value if difficulty else Difficulty.MEDIUM.value
        band = self.band_for(overall_score)
        
        def scores_of(question_type: QuestionType) -> List[int]:
            return [a.feedback.score for q, a in pairs if q.type == question_type]
        
        def summary(question_type: QuestionType, label: str) -> str:
            scores = scores_of(question_type)
            if not scores:
                return f"No {label} questions were answered."
            average = sum(scores) / len(scores)
            return f"Answered {len(scores)} {label} question(s) with an average score of {average:.1f}/10."
        
        answered = len(pairs)
        lines = [
            f"# Interview Report - {role} Position ({level.capitalize()} Level)",
            "",
            f"## {REPORT_SECTIONS[0]}",
            f"Overall score: {overall_score:.1f}/10 across {answered} answered question(s). {band.assessment}",
            "",
            f"## {REPORT_SECTIONS[1]}",
            summary(QuestionType.TECHNICAL, "technical"),
            "",
            f"## {REPORT_SECTIONS[2]}",
            summary(QuestionType.BEHAVIORAL, "behavioral"),
            "",
            f"## {REPORT_SECTIONS[3]}",
        ]
        lines.extend(f"{i}. {s.format(role=role)}" for i, s in enumerate(self._strengths, 1))
        lines.extend(["", f"## {REPORT_SECTIONS[4]}"])
        lines.extend(f"{i}. {s.format(role=role)}" for i, s in enumerate(self._improvements, 1))
        lines.extend(["", f"## {REPORT_SECTIONS[5]}", band.recommendation])
        return "\n".join(lines)


def load_fallback_content(path: Optional[Path] = None) -> FallbackContentLibrary:
    """Parse a fallback content YAML file into a library."""
    path = Path(path) if path else CONFIG_DIR / "fallback_content.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Fallback content not found: {path}")
    
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    
    library = FallbackContentLibrary.from_dict(data)
    logger.info(f"Loaded fallback content from {path}")
    return library


@lru_cache()
def get_fallback_library() -> FallbackContentLibrary:
    """Shared fallback library, loaded on first use."""
    return load_fallback_content()
