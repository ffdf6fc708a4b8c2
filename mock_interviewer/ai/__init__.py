"""
AI components for the Mock Interviewer.

This package contains the prompt templates sent to the hosted LLM.
"""

from mock_interviewer.ai.prompts.interview_prompts import (
    QUESTION_GENERATION_PROMPT,
    FEEDBACK_SYSTEM_PROMPT,
    FEEDBACK_PROMPT
)

__all__ = [
    'QUESTION_GENERATION_PROMPT',
    'FEEDBACK_SYSTEM_PROMPT',
    'FEEDBACK_PROMPT'
]
