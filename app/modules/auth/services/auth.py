import logging
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidCredentials, Unauthenticated, ValidationError
from app.core.security import (
    generate_session_token, get_password_hash, is_valid_email, verify_password
)
from app.db.session import storage_errors
from app.modules.auth.schemas.auth import SessionInfo
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate
from app.modules.user_management.services.user import (
    check_email_exists, check_username_exists, get_user_by_email, get_user_by_session_token
)

logger = logging.getLogger("app")

def register_user(db: Session, user_in: UserCreate) -> SessionInfo:
    """
    Create an account and log it in.

    Raises ValidationError for a malformed email, an empty username or
    password, or an email/username that is already claimed.
    """
    email = (user_in.email or "").strip()
    username = (user_in.username or "").strip()

    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    if not username:
        raise ValidationError("Username is required")
    if not user_in.password:
        raise ValidationError("Password is required")

    with storage_errors(db, "check existing accounts"):
        if check_email_exists(db, email):
            raise ValidationError("Email is already registered")
        if check_username_exists(db, username):
            raise ValidationError("Username is already taken")

    token = generate_session_token()
    user = User(
        id=str(uuid.uuid4()),
        email=email,
        username=username,
        hashed_password=get_password_hash(user_in.password),
        session_token=token,
    )

    with storage_errors(db, "create user"):
        try:
            db.add(user)
            db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email/username
            db.rollback()
            logger.info(f"Registration for {email} hit a uniqueness constraint")
            raise ValidationError("Email or username is already registered") from e

    logger.info(f"Registered user {user.id} ({username})")
    return SessionInfo(user_id=user.id, username=user.username, token=token)

def authenticate_user(db: Session, email: str, password: str) -> SessionInfo:
    """
    Check credentials and rotate the user's session token.

    Any earlier token stops resolving, so a user has one live session.
    """
    with storage_errors(db, "look up user"):
        user = get_user_by_email(db, email=(email or "").strip())
    if not user:
        raise InvalidCredentials()

    if not verify_password(password or "", user.hashed_password):
        logger.info(f"Failed login for user {user.id}")
        raise InvalidCredentials()

    token = generate_session_token()
    with storage_errors(db, "rotate session token"):
        user.session_token = token
        db.commit()

    logger.info(f"User {user.id} logged in")
    return SessionInfo(user_id=user.id, username=user.username, token=token)

def resolve_session(db: Session, token: Optional[str]) -> SessionInfo:
    """Map a session token to its user or raise Unauthenticated"""
    if not token:
        raise Unauthenticated()

    with storage_errors(db, "resolve session"):
        user = get_user_by_session_token(db, token)
    if not user:
        raise Unauthenticated()

    return SessionInfo(user_id=user.id, username=user.username, token=token)

def revoke_session(db: Session, token: Optional[str]) -> bool:
    """Forget a session token if some user still holds it"""
    if not token:
        return False

    with storage_errors(db, "revoke session"):
        user = get_user_by_session_token(db, token)
        if not user:
            return False
        user.session_token = None
        db.commit()

    logger.info(f"User {user.id} logged out")
    return True
