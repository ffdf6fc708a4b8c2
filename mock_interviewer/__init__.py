"""
Mock Interviewer package.

This package provides the backend API and client-side session controller for
voice-driven mock interviews with AI-generated questions and feedback.
"""

__version__ = "0.1.0"
