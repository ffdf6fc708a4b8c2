"""
Service layer for the Mock Interviewer.

This module contains the AI content pipelines and the client-side pieces that
drive a voice interview session.
"""

from .question_generation import QuestionGenerator
from .feedback_generation import FeedbackGenerator
from .session_controller import SessionController, CallStatus
from .api_client import ApiClient

__all__ = [
    "QuestionGenerator",
    "FeedbackGenerator",
    "SessionController",
    "CallStatus",
    "ApiClient",
]
