# Implements security-related functionality:
# Password hashing and verification using bcrypt
# Opaque session token generation
# Email syntax check used at registration
# Input sanitizing shared by posts and comments

import html
import logging
import re
import uuid

from passlib.context import CryptContext

logger = logging.getLogger("app")

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        # Unrecognized or corrupt hash in the users table
        logger.warning(f"Password hash could not be verified: {e}")
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def generate_session_token() -> str:
    return str(uuid.uuid4())

def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_REGEX.match(email) is not None

def sanitize_input(value: str) -> str:
    """HTML-escape user text and strip surrounding whitespace."""
    if value is None:
        return ""
    return html.escape(value).strip()
