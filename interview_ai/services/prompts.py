"""
Prompt templates for question generation, answer feedback and reports.
"""
from typing import Sequence, Tuple

from interview_ai.models.interview import Answer, Question


QUESTION_GENERATION_PROMPT = """Generate {num_questions} interview questions for a {role} position.
Level: {difficulty}

Requirements:
1. First half of questions must be technical about {role} skills
2. Second half must be behavioral/soft skills questions
3. Questions should match {difficulty} level
4. Questions must be clear and specific

Return the questions in this exact format (no additional text):
{format_lines}"""


FEEDBACK_PROMPT = """You are an expert interviewer for {role} positions.
Evaluate this interview answer:

Question: {question}
Answer: {answer}
Level: {difficulty}

Return the evaluation in this exact JSON format (no additional text):
{{
  "feedback": "detailed evaluation of the answer",
  "score": number between 1-10
}}"""


REPORT_PROMPT = """Generate a detailed interview report for a {role} position candidate.
Overall Score: {overall_score}/10
Level: {difficulty}

Questions and Answers:
{questions_and_answers}

Generate a professional interview report with these sections:
{sections}"""


def build_question_prompt(role: str, difficulty: str, num_questions: int) -> str:
    format_lines = "\n".join(f"{i}. [Question {i}]" for i in range(1, num_questions + 1))
    return QUESTION_GENERATION_PROMPT.format(
        role=role,
        difficulty=difficulty,
        num_questions=num_questions,
        format_lines=format_lines,
    )


def build_feedback_prompt(role: str, question: str, answer: str, difficulty: str) -> str:
    return FEEDBACK_PROMPT.format(
        role=role,
        question=question,
        answer=answer,
        difficulty=difficulty,
    )


def build_report_prompt(
    role: str,
    overall_score: float,
    difficulty: str,
    pairs: Sequence[Tuple[Question, Answer]],
    sections: Sequence[str],
) -> str:
    """Report prompt listing every answered question with its score."""
    questions_and_answers = "\n\n".join(
        f"Q: {q.text}\nA: {a.text}\nScore: {a.feedback.score}/10" for q, a in pairs
    )
    return REPORT_PROMPT.format(
        role=role,
        overall_score=round(overall_score, 2),
        difficulty=difficulty.capitalize(),
        questions_and_answers=questions_and_answers,
        sections="\n".join(f"{i}. {name}" for i, name in enumerate(sections, 1)),
    )
