from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import Unauthenticated
from app.db.session import get_db
from app.modules.auth.schemas.auth import SessionInfo
from app.modules.auth.services.auth import resolve_session

def get_session_token(request: Request) -> Optional[str]:
    """Read the session token from its cookie"""
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None

def get_current_session(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_session_token),
) -> SessionInfo:
    """
    Dependency for routes that need a logged-in user
    """
    return resolve_session(db, token)

def get_optional_session(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_session_token),
) -> Optional[SessionInfo]:
    """
    Dependency for pages that render for guests too
    """
    if not token:
        return None
    try:
        return resolve_session(db, token)
    except Unauthenticated:
        return None
