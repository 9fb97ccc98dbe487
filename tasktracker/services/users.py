"""Credential store operations: registration, login checks and account updates."""

import logging

from sqlalchemy.orm import Session

from tasktracker.core.errors import BadRequest, Conflict, NotFound, Unauthorized
from tasktracker.core.security import hash_password, verify_password
from tasktracker.models import User
from tasktracker.schemas.common import page_offset

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = "user",
) -> User:
    """Persist a new account with a bcrypt hash. Raises Conflict if the email is taken."""
    email = email.strip().lower()
    if get_user_by_email(db, email) is not None:
        raise Conflict("User already exists with this email")
    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the user for valid credentials.

    Unknown email and wrong password give the same BadRequest so callers cannot
    probe which emails exist. A deactivated account is rejected after the password check.
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"reason": "invalid_credentials"})
        raise BadRequest("Invalid credentials")
    if not user.is_active:
        logger.info("Login failed", extra={"user_id": user.id, "reason": "deactivated"})
        raise Unauthorized("Account is deactivated")
    return user


def _apply_changes(db: Session, user: User, changes: dict[str, object]) -> User:
    if not changes:
        raise BadRequest("No fields to update")
    for name, value in changes.items():
        setattr(user, name, value)
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, changes: dict[str, object]) -> User:
    """Self-service update; callers pass name fields only."""
    return _apply_changes(db, user, changes)


def admin_update_user(db: Session, user_id: int, changes: dict[str, object]) -> User:
    """Admin update of names, role or active flag. Takes effect on the target's next request."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFound("User not found")
    user = _apply_changes(db, user, changes)
    logger.info(
        "User updated by admin",
        extra={"user_id": user.id, "fields": sorted(changes)},
    )
    return user


def list_users(db: Session, page: int, limit: int) -> tuple[list[User], int]:
    """One page of users, newest first, plus the total user count."""
    total = db.query(User).count()
    users = (
        db.query(User)
        .order_by(User.created_at.desc(), User.id.desc())
        .offset(page_offset(page, limit))
        .limit(limit)
        .all()
    )
    return users, total
