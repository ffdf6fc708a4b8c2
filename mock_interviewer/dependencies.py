"""
FastAPI dependencies resolving the shared resources held on ``app.state``.
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import Query, Request

from mock_interviewer.services.feedback_generation import FeedbackGenerator
from mock_interviewer.services.question_generation import QuestionGenerator
from mock_interviewer.utils.constants import DEFAULT_LATEST_LIMIT, MAX_LATEST_LIMIT
from mock_interviewer.utils.db import is_valid_object_id
from mock_interviewer.utils.errors import ValidationError
from mock_interviewer.utils.repositories import FeedbackRepository, InterviewRepository, UserRepository

logger = logging.getLogger(__name__)


async def log_request_time(request: Request):
    request.state.start_time = datetime.now()
    yield
    process_time = (datetime.now() - request.state.start_time).total_seconds() * 1000
    logger.info(f"{request.method} {request.url.path} took {process_time:.2f}ms")


def get_users(request: Request) -> UserRepository:
    return request.app.state.users


def get_interviews(request: Request) -> InterviewRepository:
    return request.app.state.interviews


def get_feedback_store(request: Request) -> FeedbackRepository:
    return request.app.state.feedback


def get_question_generator(request: Request) -> QuestionGenerator:
    return QuestionGenerator(request.app.state.interviews, request.app.state.llm)


def get_feedback_generator(request: Request) -> FeedbackGenerator:
    return FeedbackGenerator(request.app.state.feedback, request.app.state.interviews, request.app.state.llm)


def check_object_id(value: str, field: str, label: str) -> None:
    """Reject a path parameter that is not a valid ObjectId."""
    if not is_valid_object_id(value):
        raise ValidationError(errors=[{"field": field, "message": f"Invalid {label} ID"}])


def latest_limit(limit: Optional[str] = Query(None, description=f"1 to {MAX_LATEST_LIMIT}")) -> int:
    """Parse the ``limit`` query parameter of the latest-interviews listing."""
    if limit is None:
        return DEFAULT_LATEST_LIMIT
    try:
        value = int(limit)
    except ValueError:
        value = 0
    if not 1 <= value <= MAX_LATEST_LIMIT:
        raise ValidationError(errors=[{"field": "limit", "message": f"Limit must be between 1 and {MAX_LATEST_LIMIT}"}])
    return value
