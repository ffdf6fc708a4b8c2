"""
Configuration module for the Mock Interviewer.

This module provides configuration settings and utilities for the API server,
the LLM pipelines and the client-side voice session.
"""
import os
import logging
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# --- System Configuration ---
SYSTEM_NAME = os.getenv("SYSTEM_NAME", "Mock Interviewer")
APP_ENV = os.getenv("APP_ENV", os.getenv("NODE_ENV", "development")).lower()

# MongoDB configuration
MONGODB_URI = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DATABASE = os.environ.get("MONGODB_DATABASE", "mock_interviewer")

# LLM configuration
LLM_MODEL = os.environ.get("LLM_MODEL", "gemini-2.0-flash-001")
LLM_TEMPERATURE = float(os.environ.get("LLM_TEMPERATURE", "0.2"))

# Auth configuration
JWT_SECRET = os.environ.get("JWT_SECRET", "")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

# Server configuration
PORT = int(os.environ.get("PORT", "4000"))
CLIENT_URL = os.environ.get("CLIENT_URL", "")
RATE_LIMIT_ENABLED = os.environ.get("RATE_LIMIT_ENABLED", "true").lower() in ("1", "true", "yes")

# Client configuration
API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:4000")
VAPI_WORKFLOW_ID = os.environ.get("VAPI_WORKFLOW_ID", "")


def is_production() -> bool:
    """Return True when the process runs in production deployment mode."""
    return APP_ENV == "production"


def get_allowed_origins() -> List[str]:
    """
    Get the CORS origins allowed to send credentialed requests.

    Returns:
        List of origins; ``["*"]`` when none are configured
    """
    origins = [origin.strip() for origin in CLIENT_URL.split(",") if origin.strip()]
    return origins or ["*"]


def get_db_config() -> Dict[str, str]:
    """
    Get MongoDB configuration.
    
    Returns:
        Dictionary with MongoDB configuration
    """
    return {
        "uri": MONGODB_URI,
        "database": MONGODB_DATABASE,
    }


def get_llm_config() -> Dict[str, Any]:
    """
    Get LLM configuration.
    
    Returns:
        Dictionary with LLM configuration
    """
    return {
        "model": LLM_MODEL,
        "temperature": LLM_TEMPERATURE,
    }


def get_auth_config() -> Dict[str, Any]:
    """
    Get session token and password hashing configuration.

    Returns:
        Dictionary with auth configuration
    """
    return {
        "secret": JWT_SECRET,
        "algorithm": JWT_ALGORITHM,
        "bcrypt_rounds": BCRYPT_ROUNDS,
        "production": is_production(),
    }


def get_server_config() -> Dict[str, Any]:
    """
    Get HTTP server configuration.

    Returns:
        Dictionary with server configuration
    """
    production = is_production()
    return {
        "port": PORT,
        "allowed_origins": get_allowed_origins(),
        "production": production,
        "rate_limit_enabled": RATE_LIMIT_ENABLED,
        "default_rate_limit": "100 per 15 minutes" if production else "1000 per 15 minutes",
        "auth_rate_limit": "5 per 15 minutes",
    }


def get_vapi_config() -> Dict[str, Optional[str]]:
    """
    Get voice-agent client configuration.

    Returns:
        Dictionary with the workflow identifier
    """
    return {
        "workflow_id": VAPI_WORKFLOW_ID or None,
    }


def log_config():
    """Log current configuration values (excluding sensitive information)."""
    logger.info(f"{SYSTEM_NAME} configuration:")
    logger.info(f"- Environment: {APP_ENV}")
    logger.info(f"- MongoDB Database: {MONGODB_DATABASE}")
    logger.info(f"- LLM Model: {LLM_MODEL}")
    logger.info(f"- LLM Temperature: {LLM_TEMPERATURE}")
    logger.info(f"- Allowed Origins: {', '.join(get_allowed_origins())}")
    logger.info(f"- Rate Limiting: {'enabled' if RATE_LIMIT_ENABLED else 'disabled'}")
    logger.info(f"- JWT Secret: {'Configured' if JWT_SECRET else 'Not configured'}")
    logger.info(f"- Vapi Workflow: {'Configured' if VAPI_WORKFLOW_ID else 'Not configured'}")
