"""
Shared fixtures for the Mock Interviewer tests.
"""
import os

# Settings are read at import time, so they must be in place first.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "test")

import mongomock
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from mock_interviewer.models.evaluation_rubric import FeedbackEvaluation
from mock_interviewer.utils.constants import FEEDBACK_CATEGORIES


def make_evaluation(total_score: int = 68) -> FeedbackEvaluation:
    return FeedbackEvaluation(
        total_score=total_score,
        category_scores=[
            {"name": name, "score": total_score, "comment": f"{name} was adequate"}
            for name in FEEDBACK_CATEGORIES
        ],
        strengths=["Structured answers"],
        areas_for_improvement=["Go deeper on trade-offs"],
        final_assessment="Solid but not yet senior.",
    )


@pytest.fixture
def db():
    """In-memory MongoDB database."""
    return mongomock.MongoClient()["mock_interviewer_test"]


@pytest.fixture
def llm():
    """Stand-in for the Gemini chat model."""
    mock = MagicMock()
    mock.invoke.return_value = AIMessage(
        content='```json\n["Tell me about Go.", "How do Postgres indexes work?", '
                '"Describe a hard bug.", "How do you test services?", "Why this role?"]\n```'
    )
    mock.with_structured_output.return_value.invoke.return_value = make_evaluation()
    return mock


@pytest.fixture
def client(db, llm):
    """TestClient running the app lifespan against the in-memory database."""
    from mock_interviewer.server import app
    from mock_interviewer.utils.rate_limit import limiter

    limiter.reset()
    app.state.db = db
    app.state.llm = llm
    with TestClient(app) as test_client:
        yield test_client
    app.state.db = None
    app.state.llm = None


@pytest.fixture
def signed_in(client):
    """Sign up Ana; the client now carries her session cookie."""
    response = client.post(
        "/auth/signup",
        json={"name": "Ana", "email": "ana@x.com", "password": "secret1"},
    )
    assert response.status_code == 200
    return response.json()["user"]


@pytest.fixture
def evaluation():
    return make_evaluation()
