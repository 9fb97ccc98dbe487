"""Request dependencies: bearer-token authentication and the role gate."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tasktracker.core.database import get_db
from tasktracker.core.errors import Forbidden, Unauthorized
from tasktracker.core.security import InvalidToken, decode_access_token
from tasktracker.models import User
from tasktracker.services.users import get_user

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """
    Dependency: resolve the Bearer JWT to a live, active user row.

    The row is re-read on every request so deactivation and role changes apply
    immediately; tokens themselves are never revoked.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Access token required")
    try:
        payload = decode_access_token(credentials.credentials)
    except InvalidToken as e:
        # ExpiredToken carries "Token expired"; other failures "Invalid token".
        raise Unauthorized(e.message) from e
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise Unauthorized("Invalid token")
    user = get_user(db, user_id)
    if user is None:
        raise Unauthorized("User not found")
    if not user.is_active:
        raise Unauthorized("Account is deactivated")
    return user


def require_roles(*roles: str) -> Callable[..., User]:
    """Build a dependency that admits only authenticated users whose role is in roles."""
    allowed = frozenset(roles)

    def role_gate(
        current_user: Annotated[User | None, Depends(get_current_user)],
    ) -> User:
        if current_user is None:
            raise Unauthorized("Authentication required")
        if current_user.role not in allowed:
            logger.info(
                "Role check denied",
                extra={"user_id": current_user.id, "role": current_user.role},
            )
            raise Forbidden("Insufficient permissions")
        return current_user

    return role_gate


require_admin = require_roles("admin")

CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
DbSession = Annotated[Session, Depends(get_db)]
