"""
Authentication routes: sign-up, sign-in, sign-out and the current user.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response

from mock_interviewer.auth.security import (
    TokenService,
    cookie_options,
    get_token_service,
    hash_password,
    require_auth,
    verify_password,
)
from mock_interviewer.dependencies import get_users
from mock_interviewer.models.user_models import SignInRequest, SignUpRequest, User
from mock_interviewer.utils.constants import AUTH_COOKIE_NAME
from mock_interviewer.utils.errors import Conflict, NotFound, Unauthorized
from mock_interviewer.utils.rate_limit import AUTH_RATE_LIMIT, limiter
from mock_interviewer.utils.repositories import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_session_cookie(response: Response, tokens: TokenService, user_id: str) -> None:
    response.set_cookie(AUTH_COOKIE_NAME, tokens.issue(user_id), **cookie_options())


@router.post("/signup")
@limiter.limit(AUTH_RATE_LIMIT)
def signup(
    request: Request,
    response: Response,
    payload: SignUpRequest,
    users: UserRepository = Depends(get_users),
    tokens: TokenService = Depends(get_token_service),
):
    """Create an account and start a session for it."""
    if users.find_by_email(payload.email):
        raise Conflict("User already exists")

    document = users.create(payload.name, payload.email, hash_password(payload.password))
    user = User.from_document(document)
    _set_session_cookie(response, tokens, user.id)
    logger.info(f"User {user.id} signed up")
    return {"success": True, "user": user.model_dump(), "message": "Account created successfully"}


@router.post("/signin")
@limiter.limit(AUTH_RATE_LIMIT)
def signin(
    request: Request,
    response: Response,
    payload: SignInRequest,
    users: UserRepository = Depends(get_users),
    tokens: TokenService = Depends(get_token_service),
):
    document = users.find_by_email(payload.email)
    if not document or not verify_password(payload.password, document["password_hash"]):
        raise Unauthorized("Invalid credentials")

    user = User.from_document(document)
    _set_session_cookie(response, tokens, user.id)
    logger.info(f"User {user.id} signed in")
    return {"success": True, "user": user.model_dump(), "message": "Signed in successfully"}


@router.post("/signout")
def signout(response: Response):
    options = cookie_options()
    response.delete_cookie(
        AUTH_COOKIE_NAME,
        path=options["path"],
        secure=options["secure"],
        httponly=options["httponly"],
        samesite=options["samesite"],
    )
    return {"success": True, "message": "Signed out successfully"}


@router.get("/me")
def me(user_id: str = Depends(require_auth), users: UserRepository = Depends(get_users)):
    document = users.get(user_id)
    if not document:
        raise NotFound("User not found")
    return {"success": True, "user": User.from_document(document).model_dump()}
