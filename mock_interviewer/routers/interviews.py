"""
Interview listing and lookup routes.
"""
import logging

from fastapi import APIRouter, Depends

from mock_interviewer.auth.security import require_auth
from mock_interviewer.dependencies import check_object_id, get_interviews, latest_limit
from mock_interviewer.models.interview import Interview
from mock_interviewer.utils.errors import NotFound
from mock_interviewer.utils.repositories import InterviewRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interviews", tags=["Interviews"])


@router.get("/user")
def get_user_interviews(
    user_id: str = Depends(require_auth),
    interviews: InterviewRepository = Depends(get_interviews),
):
    """Interviews owned by the requester, newest first."""
    documents = interviews.list_by_user(user_id)
    return {"success": True, "interviews": [Interview.from_document(doc).to_response() for doc in documents]}


@router.get("/latest")
def get_latest_interviews(
    user_id: str = Depends(require_auth),
    limit: int = Depends(latest_limit),
    interviews: InterviewRepository = Depends(get_interviews),
):
    """Finalized interviews created by other users, newest first."""
    documents = interviews.list_latest(exclude_user_id=user_id, limit=limit)
    return {"success": True, "interviews": [Interview.from_document(doc).to_response() for doc in documents]}


@router.get("/{interview_id}")
def get_interview(
    interview_id: str,
    user_id: str = Depends(require_auth),
    interviews: InterviewRepository = Depends(get_interviews),
):
    check_object_id(interview_id, "id", "interview")
    document = interviews.get(interview_id)
    if not document:
        raise NotFound("Interview not found")
    return {"success": True, "interview": Interview.from_document(document).to_response()}
