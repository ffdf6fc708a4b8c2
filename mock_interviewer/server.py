"""
FastAPI server for the Mock Interviewer.

This module wires the routers, middleware, error handlers and shared resources
(database, LLM client, token service) into the application.
"""
import contextlib
import logging
import time
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from mock_interviewer.auth import routes as auth_routes
from mock_interviewer.auth.security import TokenService
from mock_interviewer.dependencies import log_request_time
from mock_interviewer.routers import feedback, interviews, vapi
from mock_interviewer.services.llm import create_llm
from mock_interviewer.utils.config import SYSTEM_NAME, get_server_config, is_production, log_config
from mock_interviewer.utils.constants import ERROR_GENERIC, ERROR_ROUTE_NOT_FOUND
from mock_interviewer.utils.db import get_database, get_mongodb_client, iso_timestamp
from mock_interviewer.utils.errors import InternalError, InterviewerError, ValidationError
from mock_interviewer.utils.rate_limit import limiter, rate_limit_exceeded_handler
from mock_interviewer.utils.repositories import FeedbackRepository, InterviewRepository, UserRepository

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


@contextlib.asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """
    Lifespan context manager for FastAPI app.

    Resources already placed on ``app.state`` (a database handle or an LLM
    client) are reused; anything missing is created from configuration.
    A missing JWT secret stops start-up.
    """
    log_config()
    app_instance.state.token_service = TokenService.from_config()

    client = None
    if getattr(app_instance.state, "db", None) is None:
        client = get_mongodb_client()
        app_instance.state.db = get_database(client)

    db = app_instance.state.db
    app_instance.state.users = UserRepository(db)
    app_instance.state.interviews = InterviewRepository(db)
    app_instance.state.feedback = FeedbackRepository(db)

    if getattr(app_instance.state, "llm", None) is None:
        app_instance.state.llm = create_llm()

    logger.info(f"{SYSTEM_NAME} API started")
    yield

    logger.info("Server shutting down, cleaning up resources")
    if client is not None:
        client.close()
        app_instance.state.db = None


app = FastAPI(
    title=f"{SYSTEM_NAME} API",
    description="""
    REST API for voice-driven mock interviews.

    ## Features

    * Cookie-based sessions (sign up, sign in, sign out)
    * Interview generation from a voice workflow
    * Transcript scoring with five fixed feedback categories
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_server_config()["allowed_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in (auth_routes.router, interviews.router, feedback.router, vapi.router):
    app.include_router(router, dependencies=[Depends(log_request_time)])


# ==================== Error handlers ====================

def _error_content(message: str, exc: Exception, status_code: int) -> Dict[str, Any]:
    content: Dict[str, Any] = {"success": False, "message": message}
    if status_code >= 500:
        if is_production():
            content["message"] = ERROR_GENERIC
        else:
            content["detail"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return content


@app.exception_handler(InterviewerError)
async def interviewer_error_handler(request: Request, exc: InterviewerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    content = _error_content(exc.message, exc, exc.status_code)
    if isinstance(exc, ValidationError) and exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = str(error.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": field, "message": message})
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = ERROR_ROUTE_NOT_FOUND if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": message})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    error = InternalError(str(exc))
    return JSONResponse(status_code=error.status_code, content=_error_content(error.message, exc, error.status_code))


# ==================== Health ====================

@app.get("/health", tags=["System"])
async def health_check():
    return {
        "success": True,
        "status": "ok",
        "timestamp": iso_timestamp(),
        "uptime": time.monotonic() - STARTED_AT,
    }
