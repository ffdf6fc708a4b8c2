"""
Error taxonomy for the Mock Interviewer API.

Every error raised deliberately by the application derives from
``InterviewerError`` and carries the HTTP status it is rendered with.
"""
from typing import Any, Dict, List, Optional


class InterviewerError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(InterviewerError):
    """Malformed or out-of-range input."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class Unauthorized(InterviewerError):
    status_code = 401
    default_message = "Unauthorized"


class NotFound(InterviewerError):
    status_code = 404
    default_message = "Not found"


class Conflict(InterviewerError):
    status_code = 409
    default_message = "Conflict"


class UpstreamError(InterviewerError):
    """An external AI call failed or returned something unusable."""

    status_code = 500
    default_message = "AI generation failed"


class GenerationParseError(UpstreamError):
    """Model output could not be parsed into the expected structure."""

    default_message = "Could not parse model output"


class InternalError(InterviewerError):
    """Unexpected failure inside the service."""

    status_code = 500


class InvalidToken(Exception):
    """A session token failed signature or expiry checks."""


class ConfigurationError(RuntimeError):
    """A required setting is missing at start-up."""
