"""
Feedback routes: submit a transcript for scoring and read stored feedback.
"""
import logging

from fastapi import APIRouter, Depends

from mock_interviewer.auth.security import require_auth
from mock_interviewer.dependencies import check_object_id, get_feedback_generator, get_feedback_store
from mock_interviewer.models.feedback import CreateFeedbackRequest, Feedback
from mock_interviewer.services.feedback_generation import FeedbackGenerator
from mock_interviewer.utils.repositories import FeedbackRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.get("/by-interview/{interview_id}")
def get_feedback_by_interview(
    interview_id: str,
    user_id: str = Depends(require_auth),
    feedback: FeedbackRepository = Depends(get_feedback_store),
):
    check_object_id(interview_id, "id", "interview")
    document = feedback.find_by_interview(interview_id, user_id)
    if not document:
        return {"success": True, "feedback": None}
    return {"success": True, "feedback": Feedback.from_document(document).to_response()}


@router.post("")
def create_feedback(
    payload: CreateFeedbackRequest,
    user_id: str = Depends(require_auth),
    generator: FeedbackGenerator = Depends(get_feedback_generator),
):
    """
    Score a transcript and store the feedback.

    With ``feedbackId`` the existing record is overwritten; otherwise a new one
    is created. The record is always owned by the authenticated user.
    """
    logger.info(f"Generating feedback for interview {payload.interview_id} ({len(payload.transcript)} turns)")
    feedback_id = generator.submit(payload, user_id)
    return {"success": True, "feedbackId": feedback_id}
