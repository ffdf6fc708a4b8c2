"""
Unit tests for the question generation pipeline.
"""
import json
import random
import pytest
from unittest.mock import MagicMock
from bson import ObjectId
from langchain_core.messages import AIMessage, HumanMessage

from mock_interviewer.models.interview import GenerateInterviewRequest
from mock_interviewer.services.question_generation import (
    QuestionGenerator,
    extract_json_array,
    normalize_level,
    normalize_techstack,
    normalize_type,
    parse_questions,
)
from mock_interviewer.utils.constants import INTERVIEW_COVERS
from mock_interviewer.utils.errors import GenerationParseError, UpstreamError
from mock_interviewer.utils.repositories import InterviewRepository


def make_request(**overrides):
    params = {
        "type": "technical",
        "role": "Backend Engineer",
        "level": "senior",
        "techstack": "Go, Postgres",
        "amount": 5,
        "userid": str(ObjectId()),
    }
    params.update(overrides)
    return GenerateInterviewRequest(**params)


class TestNormalization:
    """Test canonicalization of workflow parameters."""

    @pytest.mark.parametrize("raw, expected", [
        ("technical", "Technical"),
        ("BEHAVIORAL", "Behavioral"),
        (" Mixed ", "Mixed"),
    ])
    def test_normalize_type(self, raw, expected):
        assert normalize_type(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("junior", "Junior"),
        ("Mid", "Mid"),
        ("SENIOR", "Senior"),
        ("lead", "Lead"),
        ("principal", "Principal"),
    ])
    def test_normalize_level(self, raw, expected):
        assert normalize_level(raw) == expected

    def test_normalization_is_idempotent(self):
        assert normalize_type(normalize_type("mixed")) == "Mixed"
        assert normalize_level(normalize_level("lead")) == "Lead"

    def test_unknown_values_pass_through(self):
        assert normalize_type("Pairing") == "Pairing"
        assert normalize_level("Staff") == "Staff"

    def test_techstack_from_string(self):
        assert normalize_techstack(" Go, Postgres ,, ") == ["Go", "Postgres"]

    def test_techstack_from_list(self):
        assert normalize_techstack(["Go", " ", "Postgres "]) == ["Go", "Postgres"]


class TestParsing:
    """Test model output parsing."""

    def test_extract_from_code_fence(self):
        raw = '```json\n["a", "b"]\n```'

        assert json.loads(extract_json_array(raw)) == ["a", "b"]

    def test_extract_from_surrounding_prose(self):
        raw = 'Here are your questions: ["a", "b"] Good luck!'

        assert json.loads(extract_json_array(raw)) == ["a", "b"]

    def test_forbidden_characters_removed(self):
        questions = parse_questions('["What is CI/CD?", "Explain *indexes* briefly."]', 2)

        assert questions == ["What is CI CD?", "Explain indexes briefly."]
        assert all("/" not in q and "*" not in q for q in questions)

    def test_extra_questions_truncated(self):
        assert parse_questions('["a", "b", "c"]', 2) == ["a", "b"]

    def test_too_few_questions(self):
        with pytest.raises(GenerationParseError):
            parse_questions('["a"]', 2)

    def test_not_json(self):
        with pytest.raises(GenerationParseError):
            parse_questions("I cannot help with that.", 1)

    def test_not_a_list_of_strings(self):
        with pytest.raises(GenerationParseError):
            parse_questions('[1, 2, 3]', 3)

    def test_parse_error_is_upstream_error(self):
        assert issubclass(GenerationParseError, UpstreamError)


class TestQuestionGenerator:
    """Test the end-to-end generator with a mocked model."""

    @pytest.fixture
    def interviews(self, db):
        return InterviewRepository(db)

    def test_generate_stores_interview(self, interviews, llm):
        generator = QuestionGenerator(interviews, llm, rng=random.Random(7))
        request = make_request(techstack=["Go", "Postgres"])

        interview_id = generator.generate(request)
        stored = interviews.get(interview_id)

        assert stored["type"] == "Technical"
        assert stored["level"] == "Senior"
        assert stored["techstack"] == ["Go", "Postgres"]
        assert stored["role"] == "Backend Engineer"
        assert len(stored["questions"]) == 5
        assert stored["finalized"] is True
        assert stored["cover_image"] in INTERVIEW_COVERS
        assert stored["user_id"] == ObjectId(request.userid)
        assert stored["created_at"].endswith("Z")

    def test_prompt_carries_parameters(self, interviews, llm):
        generator = QuestionGenerator(interviews, llm)

        generator.generate(make_request(amount=5))

        messages = llm.invoke.call_args[0][0]
        assert isinstance(messages[0], HumanMessage)
        prompt = messages[0].content
        assert "Backend Engineer" in prompt
        assert "Senior" in prompt
        assert "Go, Postgres" in prompt
        assert "5" in prompt

    def test_model_failure_raises_upstream_error(self, interviews):
        llm = MagicMock()
        llm.invoke.side_effect = RuntimeError("quota exceeded")
        generator = QuestionGenerator(interviews, llm)

        with pytest.raises(UpstreamError):
            generator.generate(make_request())

        assert interviews.collection.count_documents({}) == 0

    def test_short_answer_stores_nothing(self, interviews):
        llm = MagicMock()
        llm.invoke.return_value = AIMessage(content='["Only one question?"]')
        generator = QuestionGenerator(interviews, llm)

        with pytest.raises(GenerationParseError):
            generator.generate(make_request(amount=3))

        assert interviews.collection.count_documents({}) == 0
