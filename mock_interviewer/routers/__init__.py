"""
FastAPI routers for the Mock Interviewer.

This module contains FastAPI routers for organizing API endpoints
into logical groups.
"""

from . import feedback, interviews, vapi

__all__ = ["feedback", "interviews", "vapi"]
