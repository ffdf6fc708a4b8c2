"""
Interview models: the generation request coming from the voice workflow and
the stored interview record.
"""
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mock_interviewer.utils.constants import (
    EXPERIENCE_LEVELS,
    INTERVIEW_TYPES,
    MAX_QUESTIONS,
    MIN_QUESTIONS,
)
from mock_interviewer.utils.db import is_valid_object_id, serialize_document


class GenerateInterviewRequest(BaseModel):
    """Request body for ``POST /vapi/generate``."""
    type: str = Field(..., description="technical, behavioral or mixed (any case)")
    role: str = Field(..., description="Job role, 2 to 100 characters")
    level: str = Field(..., description="junior, mid, senior, lead or principal (any case)")
    techstack: Union[List[str], str] = Field(..., description="List or comma-separated string")
    amount: int = Field(..., description="Number of questions, 1 to 20")
    userid: str = Field(..., description="Owning user id")

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "technical",
                "role": "Backend Engineer",
                "level": "senior",
                "techstack": "Go,Postgres",
                "amount": 5,
                "userid": "6650f1c2a4d3b2e1f0a9c8b7",
            }
        }
    }

    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        if value.strip().lower() not in INTERVIEW_TYPES:
            raise ValueError("Type must be Technical, Behavioral, or Mixed")
        return value

    @field_validator("role")
    @classmethod
    def check_role(cls, value: str) -> str:
        value = value.strip()
        if not 2 <= len(value) <= 100:
            raise ValueError("Role must be between 2 and 100 characters")
        return value

    @field_validator("level")
    @classmethod
    def check_level(cls, value: str) -> str:
        if value.strip().lower() not in EXPERIENCE_LEVELS:
            raise ValueError("Invalid experience level")
        return value

    @field_validator("techstack")
    @classmethod
    def check_techstack(cls, value: Union[List[str], str]) -> Union[List[str], str]:
        if isinstance(value, list) and value:
            return value
        if isinstance(value, str) and value.strip():
            return value
        raise ValueError("Tech stack is required")

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value: int) -> int:
        if not MIN_QUESTIONS <= value <= MAX_QUESTIONS:
            raise ValueError(f"Amount must be between {MIN_QUESTIONS} and {MAX_QUESTIONS}")
        return value

    @field_validator("userid")
    @classmethod
    def check_userid(cls, value: str) -> str:
        if not is_valid_object_id(value):
            raise ValueError("Invalid user ID")
        return value


class Interview(BaseModel):
    """Stored interview, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    role: str
    type: str
    level: str
    techstack: List[str]
    questions: List[str]
    user_id: str
    finalized: bool = True
    cover_image: str = ""
    created_at: str

    @classmethod
    def from_document(cls, document: dict) -> "Interview":
        return cls.model_validate(serialize_document(document))

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)
