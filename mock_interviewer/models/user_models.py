"""
User models for the authentication endpoints.
"""
from pydantic import BaseModel, EmailStr, Field, field_validator


class SignUpRequest(BaseModel):
    """Request body for ``POST /auth/signup``."""
    name: str = Field(..., description="Display name, 2 to 50 characters")
    email: EmailStr = Field(..., description="Email address, stored lower-cased")
    password: str = Field(..., description="Plain-text password, at least 6 characters")

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Ana",
                "email": "ana@x.com",
                "password": "secret1",
            }
        }
    }

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not 2 <= len(value) <= 50:
            raise ValueError("Name must be between 2 and 50 characters")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        return value


class SignInRequest(BaseModel):
    """Request body for ``POST /auth/signin``."""
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class User(BaseModel):
    """Public view of a user record."""
    id: str
    name: str
    email: str

    @classmethod
    def from_document(cls, document: dict) -> "User":
        return cls(id=str(document["_id"]), name=document["name"], email=document["email"])
