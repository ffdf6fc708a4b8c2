"""
Question generation pipeline.

Turns the parameters collected by the voice workflow into a list of interview
questions via the hosted LLM and stores them as a new interview.
"""
import json
import logging
import random
import re
from typing import Any, List, Optional, Union

from langchain_core.messages import HumanMessage

from mock_interviewer.ai.prompts.interview_prompts import QUESTION_GENERATION_PROMPT
from mock_interviewer.models.interview import GenerateInterviewRequest
from mock_interviewer.services.llm import message_text
from mock_interviewer.utils.constants import (
    EXPERIENCE_LEVELS,
    FORBIDDEN_QUESTION_CHARS,
    INTERVIEW_COVERS,
    INTERVIEW_TYPES,
)
from mock_interviewer.utils.db import iso_timestamp
from mock_interviewer.utils.errors import GenerationParseError, UpstreamError
from mock_interviewer.utils.profiling import timer
from mock_interviewer.utils.repositories import InterviewRepository

logger = logging.getLogger(__name__)

_CODE_FENCE_START = re.compile(r"^```(json)?", re.IGNORECASE)
_CODE_FENCE_END = re.compile(r"```$")


def normalize_type(value: Any) -> Any:
    """Map an interview type to its canonical label; unknown values pass through."""
    return INTERVIEW_TYPES.get(str(value or "").strip().lower(), value)


def normalize_level(value: Any) -> Any:
    """Map an experience level to its canonical label; unknown values pass through."""
    return EXPERIENCE_LEVELS.get(str(value or "").strip().lower(), value)


def normalize_techstack(techstack: Union[List[str], str]) -> List[str]:
    if isinstance(techstack, list):
        return [str(item).strip() for item in techstack if str(item).strip()]
    return [item.strip() for item in str(techstack).split(",") if item.strip()]


def extract_json_array(raw: str) -> str:
    """
    Strip Markdown code fences and slice the outermost ``[...]`` from model output.

    Returns the cleaned text unchanged when no bracket pair is found.
    """
    cleaned = _CODE_FENCE_START.sub("", str(raw).strip())
    cleaned = _CODE_FENCE_END.sub("", cleaned).strip()
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start >= 0 and end > start:
        return cleaned[start:end + 1]
    return cleaned


def clean_question(question: str) -> str:
    for char in FORBIDDEN_QUESTION_CHARS:
        question = question.replace(char, " ")
    return re.sub(r"\s{2,}", " ", question).strip()


def parse_questions(raw: str, amount: int) -> List[str]:
    """
    Parse the model's answer into exactly ``amount`` questions.

    Raises:
        GenerationParseError: if the output is not a JSON array of strings or
            holds fewer than ``amount`` questions
    """
    try:
        parsed = json.loads(extract_json_array(raw))
    except json.JSONDecodeError as e:
        raise GenerationParseError(f"Model did not return a JSON array: {e}") from e

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise GenerationParseError("Model output is not a list of strings")

    questions = [clean_question(item) for item in parsed]
    questions = [question for question in questions if question]
    if len(questions) < amount:
        raise GenerationParseError(f"Expected {amount} questions, got {len(questions)}")
    if len(questions) > amount:
        logger.warning(f"Model returned {len(questions)} questions, keeping the first {amount}")
    return questions[:amount]


class QuestionGenerator:
    """Generates and stores a new interview from voice-workflow parameters."""

    def __init__(self, interviews: InterviewRepository, llm: Any, rng: Optional[random.Random] = None):
        self.interviews = interviews
        self.llm = llm
        self.rng = rng or random.Random()

    def build_prompt(self, request: GenerateInterviewRequest) -> str:
        return QUESTION_GENERATION_PROMPT.format(
            role=request.role,
            level=normalize_level(request.level),
            techstack=", ".join(normalize_techstack(request.techstack)),
            type=normalize_type(request.type),
            amount=request.amount,
        )

    def generate_questions(self, request: GenerateInterviewRequest) -> List[str]:
        prompt = self.build_prompt(request)
        try:
            with timer("llm_question_generation", log_level=logging.INFO):
                response = self.llm.invoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error(f"Question generation call failed: {e}")
            raise UpstreamError("Question generation failed") from e
        return parse_questions(message_text(response), request.amount)

    def generate(self, request: GenerateInterviewRequest) -> str:
        """
        Run the pipeline and persist the interview.

        Returns:
            The new interview id
        """
        logger.info(f"Generating {request.amount} questions for {request.role} ({request.level})")
        questions = self.generate_questions(request)
        return self.interviews.create({
            "role": request.role,
            "type": normalize_type(request.type),
            "level": normalize_level(request.level),
            "techstack": normalize_techstack(request.techstack),
            "questions": questions,
            "user_id": request.userid,
            "finalized": True,
            "cover_image": self.rng.choice(INTERVIEW_COVERS),
            "created_at": iso_timestamp(),
        })
