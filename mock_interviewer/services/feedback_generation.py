"""
Feedback generation pipeline.

Scores a finished interview transcript with the hosted LLM's structured output
and stores the result, creating a record or overwriting an existing one.
"""
import logging
from typing import Any, Iterable

from langchain_core.exceptions import OutputParserException
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError as PydanticValidationError

from mock_interviewer.ai.prompts.interview_prompts import FEEDBACK_PROMPT, FEEDBACK_SYSTEM_PROMPT
from mock_interviewer.models.evaluation_rubric import FeedbackEvaluation
from mock_interviewer.models.feedback import CreateFeedbackRequest, TranscriptTurn
from mock_interviewer.utils.db import iso_timestamp
from mock_interviewer.utils.errors import GenerationParseError, NotFound, UpstreamError
from mock_interviewer.utils.profiling import timer
from mock_interviewer.utils.repositories import FeedbackRepository, InterviewRepository
from mock_interviewer.utils.transcript import format_transcript

logger = logging.getLogger(__name__)


class FeedbackGenerator:
    """Evaluates transcripts and writes feedback under the authenticated user."""

    def __init__(self, feedback: FeedbackRepository, interviews: InterviewRepository, llm: Any):
        self.feedback = feedback
        self.interviews = interviews
        self.llm = llm

    def evaluate(self, transcript: Iterable[TranscriptTurn]) -> FeedbackEvaluation:
        """
        Ask the evaluator model to score a transcript.

        Raises:
            GenerationParseError: if the model output does not fit the schema
            UpstreamError: if the model call itself fails
        """
        messages = [
            SystemMessage(content=FEEDBACK_SYSTEM_PROMPT),
            HumanMessage(content=FEEDBACK_PROMPT.format(transcript=format_transcript(transcript))),
        ]
        try:
            with timer("llm_feedback_generation", log_level=logging.INFO):
                result = self.llm.with_structured_output(FeedbackEvaluation).invoke(messages)
        except (OutputParserException, PydanticValidationError) as e:
            raise GenerationParseError(f"Evaluator output did not match the feedback schema: {e}") from e
        except Exception as e:
            logger.error(f"Feedback generation call failed: {e}")
            raise UpstreamError("Feedback generation failed") from e

        if result is None:
            raise GenerationParseError("Evaluator returned no feedback")
        if isinstance(result, FeedbackEvaluation):
            return result
        try:
            return FeedbackEvaluation.model_validate(result)
        except PydanticValidationError as e:
            raise GenerationParseError(f"Evaluator output did not match the feedback schema: {e}") from e

    def _check_interview_access(self, interview_id: str, user_id: str) -> None:
        interview = self.interviews.get(interview_id)
        if interview is None:
            raise NotFound("Interview not found")
        if str(interview["user_id"]) != user_id and not interview.get("finalized", True):
            logger.warning(f"User {user_id} submitted feedback for unlisted interview {interview_id}")
            raise NotFound("Interview not found")

    def submit(self, request: CreateFeedbackRequest, user_id: str) -> str:
        """
        Score the transcript and store the feedback.

        Args:
            request: Validated submission
            user_id: Authenticated user id from the session gate

        Returns:
            The id of the created or overwritten feedback record

        Raises:
            NotFound: if the interview is not visible to the user, or the
                supplied feedback id does not resolve to the user's record
        """
        self._check_interview_access(request.interview_id, user_id)
        evaluation = self.evaluate(request.transcript)

        payload = {
            "interview_id": request.interview_id,
            "user_id": user_id,
            "total_score": evaluation.total_score,
            "category_scores": [category.model_dump() for category in evaluation.category_scores],
            "strengths": evaluation.strengths,
            "areas_for_improvement": evaluation.areas_for_improvement,
            "final_assessment": evaluation.final_assessment,
            "created_at": iso_timestamp(),
        }

        if request.feedback_id:
            if self.feedback.update(request.feedback_id, payload) is None:
                raise NotFound("Feedback not found")
            return request.feedback_id
        return self.feedback.create(payload)
