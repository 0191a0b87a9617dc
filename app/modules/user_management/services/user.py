from typing import Optional
from sqlalchemy.orm import Session

from app.modules.user_management.models.user import User

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get user by username"""
    return db.query(User).filter(User.username == username).first()

def get_user_by_session_token(db: Session, token: str) -> Optional[User]:
    """Get the user currently holding a session token"""
    if not token:
        return None
    return db.query(User).filter(User.session_token == token).first()

def check_email_exists(db: Session, email: str) -> bool:
    return get_user_by_email(db, email) is not None

def check_username_exists(db: Session, username: str) -> bool:
    return get_user_by_username(db, username) is not None
