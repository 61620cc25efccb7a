"""
Feedback Evaluator Tests.
"""
import pytest

from interview_ai.models.interview import Difficulty, Question, QuestionType
from interview_ai.services.feedback_evaluator import (
    FeedbackEvaluator,
    extract_json_object,
    parse_feedback,
)


@pytest.fixture
def technical_question():
    return Question(text="What is REST?", type=QuestionType.TECHNICAL, difficulty=Difficulty.MEDIUM)


class TestParseFeedback:
    """Tests for model output parsing."""
    
    def test_plain_json(self):
        feedback = parse_feedback('{"feedback": "Clear answer.", "score": 8}')
        assert feedback.text == "Clear answer."
        assert feedback.score == 8
    
    def test_code_fence(self):
        response = 'Here you go:\n```json\n{"feedback": "Good.", "score": 7}\n```'
        assert parse_feedback(response).score == 7
    
    def test_surrounding_prose(self):
        response = 'Evaluation: {"feedback": "Fine.", "score": 6} Hope that helps.'
        assert parse_feedback(response).text == "Fine."
    
    @pytest.mark.parametrize("raw,expected", [(15, 10), (0, 1), (-3, 1), (7.9, 7), ("8", 8)])
    def test_score_truncated_and_clamped(self, raw, expected):
        import json
        feedback = parse_feedback(json.dumps({"feedback": "x", "score": raw}))
        assert feedback.score == expected
    
    @pytest.mark.parametrize("response", [
        "not json at all",
        '{"feedback": "missing score"}',
        '{"score": 5}',
        '{"feedback": "", "score": 5}',
        '{"feedback": "text", "score": "high"}',
        '{"feedback": "text", "score": true}',
        '{"feedback": ["a"], "score": 5}',
        '{"feedback": "truncated", "score":',
    ])
    def test_unparseable_returns_none(self, response):
        assert parse_feedback(response) is None
    
    def test_extract_json_object_rejects_arrays(self):
        assert extract_json_object("[1, 2, 3]") is None


class TestFeedbackEvaluator:
    """Tests for FeedbackEvaluator.evaluate."""
    
    @pytest.mark.asyncio
    async def test_model_feedback(self, mock_gateway, fallback_library, technical_question):
        mock_gateway.generate_text.return_value = '{"feedback": "Solid explanation.", "score": 9}'
        evaluator = FeedbackEvaluator(mock_gateway, fallback_library)
        
        feedback = await evaluator.evaluate("Backend", technical_question, "REST is ...", Difficulty.MEDIUM)
        
        assert feedback.text == "Solid explanation."
        assert feedback.score == 9
        prompt = mock_gateway.generate_text.call_args[0][0]
        assert "expert interviewer for Backend positions" in prompt
        assert "Question: What is REST?" in prompt
        assert "Answer: REST is ..." in prompt
    
    @pytest.mark.asyncio
    async def test_unparseable_uses_fallback(self, mock_gateway, fallback_library, technical_question):
        mock_gateway.generate_text.return_value = "Great answer, 8 out of 10!"
        evaluator = FeedbackEvaluator(mock_gateway, fallback_library)
        
        feedback = await evaluator.evaluate("Backend", technical_question, "short", Difficulty.MEDIUM)
        
        assert feedback == fallback_library.fallback_feedback(QuestionType.TECHNICAL, "short")
        assert feedback.score == 5
    
    @pytest.mark.asyncio
    async def test_gateway_failure_uses_fallback(self, failing_gateway, fallback_library):
        question = Question(text="Tell me about a conflict.", type=QuestionType.BEHAVIORAL, difficulty=Difficulty.EASY)
        answer = "For example, " + "we disagreed on the rollout plan and talked it through. " * 4
        evaluator = FeedbackEvaluator(failing_gateway, fallback_library)
        
        feedback = await evaluator.evaluate("Backend", question, answer, Difficulty.EASY)
        
        assert feedback.score == 9
        assert feedback.text.startswith("Strong response")
