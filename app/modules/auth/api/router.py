"""Authentication router: registration, login and logout pages"""
import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import InvalidCredentials, ValidationError
from app.core.templates import render
from app.db.session import get_db
from app.deps import get_session_token
from app.modules.auth.services.auth import authenticate_user, register_user, revoke_session
from app.modules.user_management.schemas.user import UserCreate

router = APIRouter()
logger = logging.getLogger("app")

def _login_redirect(token: str) -> RedirectResponse:
    """Redirect home carrying a fresh session cookie"""
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
    )
    return response

@router.get("/register")
def register_page(request: Request):
    return render(request, "register.html")

@router.post("/register")
def register(
    request: Request,
    db: Session = Depends(get_db),
    email: str = Form(""),
    username: str = Form(""),
    password: str = Form(""),
):
    """Register a user and log them straight in"""
    try:
        session = register_user(db, UserCreate(email=email, username=username, password=password))
    except ValidationError as e:
        return render(
            request,
            "register.html",
            {"error": e.message, "email": email, "username": username},
            status_code=e.status_code,
        )
    return _login_redirect(session.token)

@router.get("/login")
def login_page(request: Request):
    return render(request, "login.html")

@router.post("/login")
def login(
    request: Request,
    db: Session = Depends(get_db),
    email: str = Form(""),
    password: str = Form(""),
):
    try:
        session = authenticate_user(db, email, password)
    except InvalidCredentials as e:
        return render(
            request,
            "login.html",
            {"error": e.message, "email": email},
            status_code=e.status_code,
        )
    return _login_redirect(session.token)

@router.post("/logout")
def logout(
    db: Session = Depends(get_db),
    token: str = Depends(get_session_token),
):
    """Clear the session cookie and forget the token server-side"""
    revoke_session(db, token)
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
