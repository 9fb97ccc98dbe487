"""Registration and login: both return a JWT bearer token and the user."""

import logging

from fastapi import APIRouter, status

from tasktracker.api.deps import DbSession
from tasktracker.core.security import create_access_token
from tasktracker.models import User
from tasktracker.schemas.auth import AuthPayload, LoginRequest, RegisterRequest
from tasktracker.schemas.common import ApiResponse
from tasktracker.schemas.user import UserOut
from tasktracker.services import users as user_service

logger = logging.getLogger(__name__)
router = APIRouter()


def _auth_payload(user: User) -> AuthPayload:
    token = create_access_token(sub=user.id, role=user.role)
    return AuthPayload(token=token, user=UserOut.model_validate(user))


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    status_code=status.HTTP_201_CREATED,
)
def register(body: RegisterRequest, db: DbSession) -> ApiResponse[AuthPayload]:
    """
    Create an account with role 'user' and return a token for it.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = user_service.create_user(
        db,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return ApiResponse(message="User registered successfully", data=_auth_payload(user))


@router.post("/login", response_model=ApiResponse[AuthPayload])
def login(body: LoginRequest, db: DbSession) -> ApiResponse[AuthPayload]:
    """Authenticate with email and password; returns a JWT access token."""
    user = user_service.authenticate(db, body.email, body.password)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return ApiResponse(message="Login successful", data=_auth_payload(user))
