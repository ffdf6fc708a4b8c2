"""
Profiling utilities for the Mock Interviewer.

This module provides tools for measuring the latency of the external LLM calls.
"""
import time
import logging
from contextlib import contextmanager

# Configure logging
logger = logging.getLogger(__name__)

@contextmanager
def timer(name: str, log_level: int = logging.DEBUG):
    """
    Context manager for timing code blocks.
    
    Args:
        name: Name of the operation being timed
        log_level: Logging level to use (default: DEBUG)
    
    Example:
        with timer("llm_question_generation"):
            response = model.invoke(prompt)
    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        elapsed_time = time.perf_counter() - start_time
        logger.log(log_level, f"TIMER - {name}: {elapsed_time:.4f} seconds")
