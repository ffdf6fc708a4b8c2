"""
Factory and helpers for the hosted LLM used by the content pipelines.
"""
import logging
from typing import Any

from langchain_google_genai import ChatGoogleGenerativeAI

from mock_interviewer.utils.config import get_llm_config

logger = logging.getLogger(__name__)


def create_llm(temperature: float = None) -> ChatGoogleGenerativeAI:
    """Build the Gemini chat model configured by LLM_MODEL / LLM_TEMPERATURE."""
    llm_config = get_llm_config()
    logger.info(f"Initializing LLM {llm_config['model']}")
    return ChatGoogleGenerativeAI(
        model=llm_config["model"],
        temperature=llm_config["temperature"] if temperature is None else temperature,
    )


def message_text(message: Any) -> str:
    """Return the text of a chat model response, joining multi-part content."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)
