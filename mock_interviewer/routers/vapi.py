"""
Voice-workflow webhook: generates an interview from the parameters the
workflow collected by conversation.
"""
import logging

from fastapi import APIRouter, Depends

from mock_interviewer.dependencies import get_question_generator, get_users
from mock_interviewer.models.interview import GenerateInterviewRequest
from mock_interviewer.services.question_generation import QuestionGenerator
from mock_interviewer.utils.errors import NotFound
from mock_interviewer.utils.repositories import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vapi", tags=["Vapi"])


@router.post("/generate")
def generate_interview(
    payload: GenerateInterviewRequest,
    users: UserRepository = Depends(get_users),
    generator: QuestionGenerator = Depends(get_question_generator),
):
    if users.get(payload.userid) is None:
        raise NotFound("User not found")
    interview_id = generator.generate(payload)
    return {"success": True, "interviewId": interview_id}
