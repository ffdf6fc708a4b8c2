"""
Transcript utilities for the Mock Interviewer.

This module formats voice-session transcripts for the feedback evaluator and
for question lists read out by the voice assistant.
"""
import logging
from typing import Any, Iterable, List, Mapping, Union

logger = logging.getLogger(__name__)


def _turn_field(turn: Union[Mapping[str, Any], Any], name: str) -> str:
    if isinstance(turn, Mapping):
        return str(turn.get(name, ""))
    return str(getattr(turn, name, ""))


def format_transcript(transcript: Iterable[Union[Mapping[str, Any], Any]]) -> str:
    """
    Flatten transcript turns into a text block, one line per turn.

    Args:
        transcript: Turns with ``role`` and ``content`` (mappings or objects)

    Returns:
        Lines of the form ``- role: content``
    """
    return "".join(
        f"- {_turn_field(turn, 'role')}: {_turn_field(turn, 'content')}\n"
        for turn in transcript
    )


def format_questions(questions: List[str]) -> str:
    """Render a question list as bullet lines for the interviewer assistant."""
    return "\n".join(f"- {question}" for question in questions)
