"""
Client-side controller for a voice interview session.

The controller wraps a voice-agent client (an event source with ``on``/``off``
subscriptions and ``start``/``stop`` calls), tracks the call state, collects the
final transcript and hands it to the feedback endpoint once the call ends.

The agent is passed in by the caller and owned by the controller for its
lifetime; handlers are attached on construction and detached by ``close()``.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from typing_extensions import Protocol

from mock_interviewer.utils.config import get_vapi_config
from mock_interviewer.utils.constants import (
    ERROR_VOICE_AGENT,
    EVENT_CALL_END,
    EVENT_CALL_START,
    EVENT_ERROR,
    EVENT_MESSAGE,
    EVENT_SPEECH_END,
    EVENT_SPEECH_START,
    INTERVIEWER_ASSISTANT,
    SESSION_MODE_GENERATE,
    SESSION_MODE_INTERVIEW,
    TRANSCRIPT_ROLES,
)
from mock_interviewer.utils.transcript import format_questions

logger = logging.getLogger(__name__)


class CallStatus(str, Enum):
    """State of the voice call."""
    INACTIVE = "INACTIVE"
    CONNECTING = "CONNECTING"
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"


class VoiceAgent(Protocol):
    """The subset of the voice-agent SDK the controller relies on."""

    def on(self, event: str, handler: Callable[..., None]) -> Any: ...

    def off(self, event: str, handler: Callable[..., None]) -> Any: ...

    def start(self, assistant: Any, assistant_overrides: Optional[Dict[str, Any]] = None) -> Any: ...

    def stop(self) -> Any: ...


FeedbackSubmitter = Callable[..., Optional[Mapping[str, Any]]]


def readable_error_message(error: Any, fallback: str) -> str:
    """Pull a human-readable message out of whatever the voice agent reported."""
    if isinstance(error, BaseException) and str(error):
        return str(error)
    if isinstance(error, str) and error.strip():
        return error
    if isinstance(error, Mapping):
        for key in ("message", "error"):
            value = error.get(key)
            if isinstance(value, str) and value.strip():
                return value
    message = getattr(error, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    return fallback


class SessionController:
    """
    Drives one voice-agent connection through
    INACTIVE -> CONNECTING -> ACTIVE -> FINISHED.

    In ``generate`` mode the agent runs a workflow that creates a new interview
    by conversation; in ``interview`` mode it conducts a prepared question list
    and the transcript is submitted for feedback when the call ends.
    """

    def __init__(
        self,
        agent: VoiceAgent,
        mode: str,
        user_name: Optional[str] = None,
        user_id: Optional[str] = None,
        interview_id: Optional[str] = None,
        feedback_id: Optional[str] = None,
        questions: Optional[List[str]] = None,
        workflow_id: Optional[str] = None,
        submit_feedback: Optional[FeedbackSubmitter] = None,
        navigate: Optional[Callable[[str], None]] = None,
        notify: Optional[Callable[[str], None]] = None,
        assistant: Optional[Dict[str, Any]] = None,
    ):
        if mode not in (SESSION_MODE_GENERATE, SESSION_MODE_INTERVIEW):
            raise ValueError(f"Unknown session mode: {mode}")
        if mode == SESSION_MODE_INTERVIEW and (submit_feedback is None or not interview_id):
            raise ValueError("Interview sessions need an interview id and a feedback submitter")

        self.agent = agent
        self.mode = mode
        self.user_name = user_name
        self.user_id = user_id
        self.interview_id = interview_id
        self.feedback_id = feedback_id
        self.questions = list(questions or [])
        self.workflow_id = workflow_id if workflow_id is not None else get_vapi_config()["workflow_id"]
        self.assistant = assistant or INTERVIEWER_ASSISTANT
        self._submit_feedback = submit_feedback
        self._navigate = navigate or (lambda path: logger.info(f"Navigate to {path}"))
        self._notify = notify or (lambda message: logger.warning(message))

        self.status = CallStatus.INACTIVE
        self.is_speaking = False
        self.last_message = ""
        self._transcript: List[Dict[str, str]] = []

        self._handlers = {
            EVENT_CALL_START: self._on_call_start,
            EVENT_CALL_END: self._on_call_end,
            EVENT_MESSAGE: self._on_message,
            EVENT_SPEECH_START: self._on_speech_start,
            EVENT_SPEECH_END: self._on_speech_end,
            EVENT_ERROR: self._on_error,
        }
        for event, handler in self._handlers.items():
            self.agent.on(event, handler)

    @property
    def transcript(self) -> List[Dict[str, str]]:
        return list(self._transcript)

    def close(self) -> None:
        """Detach from the voice agent."""
        for event, handler in self._handlers.items():
            self.agent.off(event, handler)

    # ---- commands ----

    def start(self) -> bool:
        """
        Start a call. Ignored while a call is connecting or active.

        Returns:
            True if the agent accepted the start request
        """
        if self.status in (CallStatus.CONNECTING, CallStatus.ACTIVE):
            logger.warning(f"Ignoring start request while call is {self.status.value}")
            return False

        self._transcript = []
        self.last_message = ""
        self.is_speaking = False
        self.status = CallStatus.CONNECTING

        if self.mode == SESSION_MODE_GENERATE:
            if not self.workflow_id:
                self._fail("Vapi workflow ID is missing. Set VAPI_WORKFLOW_ID.")
                return False
            target = self.workflow_id
            overrides = {"variableValues": {"username": self.user_name, "userid": self.user_id}}
            fallback = "Failed to start Vapi workflow."
        else:
            target = self.assistant
            overrides = {"variableValues": {"questions": format_questions(self.questions)}}
            fallback = "Failed to start Vapi interview."

        try:
            call = self.agent.start(target, overrides)
            if not call:
                raise RuntimeError(
                    "Unable to start the voice call. Verify your Vapi credentials and microphone permission."
                )
        except Exception as e:
            logger.error(f"Voice agent start error: {e}")
            self._fail(readable_error_message(e, fallback))
            return False
        return True

    def disconnect(self) -> None:
        """
        End the call from this side.

        The agent is stopped before the transcript is handed off, so the call
        does not stay open while feedback is generated.
        """
        if self.status == CallStatus.ACTIVE:
            self._mark_finished()
            self._stop_agent()
            self._after_call()
        elif self.status == CallStatus.CONNECTING:
            self.status = CallStatus.INACTIVE
            self._stop_agent()

    def _stop_agent(self) -> None:
        try:
            self.agent.stop()
        except Exception as e:
            logger.error(f"Voice agent stop error: {e}")
            self._notify(readable_error_message(e, "Failed to stop the voice call."))

    # ---- voice-agent events ----

    def _on_call_start(self, *args: Any) -> None:
        if self.status != CallStatus.CONNECTING:
            logger.warning(f"Unexpected call-start while {self.status.value}")
            return
        self.status = CallStatus.ACTIVE

    def _on_call_end(self, *args: Any) -> None:
        if self.status == CallStatus.ACTIVE:
            self._mark_finished()
            self._after_call()
        elif self.status == CallStatus.CONNECTING:
            logger.warning("Call ended before it started")
            self.status = CallStatus.INACTIVE

    def _on_message(self, message: Any, *args: Any) -> None:
        if self.status != CallStatus.ACTIVE or not isinstance(message, Mapping):
            return
        if message.get("type") != "transcript" or message.get("transcriptType") != "final":
            return
        role = message.get("role")
        content = message.get("transcript")
        if role not in TRANSCRIPT_ROLES or not isinstance(content, str) or not content.strip():
            logger.debug(f"Skipping unusable transcript turn from {role}")
            return
        turn = {"role": role, "content": content.strip()}
        self._transcript.append(turn)
        self.last_message = turn["content"]

    def _on_speech_start(self, *args: Any) -> None:
        self.is_speaking = True

    def _on_speech_end(self, *args: Any) -> None:
        self.is_speaking = False

    def _on_error(self, error: Any = None, *args: Any) -> None:
        logger.error(f"Voice agent error event: {error}")
        self._fail(readable_error_message(error, ERROR_VOICE_AGENT))

    # ---- internals ----

    def _fail(self, message: str) -> None:
        self._notify(message)
        self.status = CallStatus.INACTIVE
        self.is_speaking = False

    def _mark_finished(self) -> None:
        self.status = CallStatus.FINISHED
        self.is_speaking = False

    def _after_call(self) -> None:
        """Hand the finished call off: submit the transcript, then navigate."""
        if self.mode == SESSION_MODE_GENERATE:
            self._navigate("/")
            return

        try:
            result = self._submit_feedback(
                interview_id=self.interview_id,
                transcript=self.transcript,
                feedback_id=self.feedback_id,
            )
        except Exception as e:
            logger.error(f"Error saving feedback: {e}")
            result = None

        if result and result.get("success") and result.get("feedbackId"):
            self.feedback_id = result["feedbackId"]
            self._navigate(f"/interview/{self.interview_id}/feedback")
        else:
            logger.error("Error saving feedback")
            self._navigate("/")
