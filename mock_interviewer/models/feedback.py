"""
Feedback models: the submission coming from a finished voice session and the
stored feedback record.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mock_interviewer.models.evaluation_rubric import CategoryScore
from mock_interviewer.utils.db import is_valid_object_id, serialize_document


class TranscriptTurn(BaseModel):
    """One finalized utterance of a voice conversation."""
    role: Literal["user", "assistant", "system"]
    content: str

    @field_validator("content")
    @classmethod
    def check_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Content cannot be empty")
        return value


class CreateFeedbackRequest(BaseModel):
    """Request body for ``POST /feedback``."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    interview_id: str
    transcript: List[TranscriptTurn] = Field(..., min_length=1)
    feedback_id: Optional[str] = None

    @field_validator("interview_id")
    @classmethod
    def check_interview_id(cls, value: str) -> str:
        if not is_valid_object_id(value):
            raise ValueError("Invalid interview ID")
        return value

    @field_validator("feedback_id")
    @classmethod
    def check_feedback_id(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_valid_object_id(value):
            raise ValueError("Invalid feedback ID")
        return value


class Feedback(BaseModel):
    """Stored feedback, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    interview_id: str
    user_id: str
    total_score: int
    category_scores: List[CategoryScore]
    strengths: List[str]
    areas_for_improvement: List[str]
    final_assessment: str
    created_at: str

    @classmethod
    def from_document(cls, document: dict) -> "Feedback":
        return cls.model_validate(serialize_document(document))

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)
