from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_session
from app.modules.auth.schemas.auth import SessionInfo
from app.modules.posts.comments.services.comment import create_comment, get_comment
from app.modules.posts.reactions.schemas.reaction import TargetKind
from app.modules.posts.reactions.services.reaction import (
    dislike_comment, like_comment, refresh_counters
)

router = APIRouter()

def _post_page(post_id: str) -> RedirectResponse:
    return RedirectResponse(url=f"/post?id={quote(post_id or '')}", status_code=status.HTTP_303_SEE_OTHER)

@router.post("/create_comment")
def create_new_comment(
    db: Session = Depends(get_db),
    post_id: str = Form(""),
    content: str = Form(""),
    session: SessionInfo = Depends(get_current_session),
):
    """Add a comment and return to the post page"""
    create_comment(db, post_id, session.user_id, content)
    return _post_page(post_id)

@router.post("/like_comment")
def like_a_comment(
    db: Session = Depends(get_db),
    comment_id: str = Form(""),
    post_id: str = Form(""),
    session: SessionInfo = Depends(get_current_session),
):
    like_comment(db, session.user_id, comment_id)
    refresh_counters(db, TargetKind.comment, comment_id)
    return _post_page(post_id or get_comment(db, comment_id).post_id)

@router.post("/dislike_comment")
def dislike_a_comment(
    db: Session = Depends(get_db),
    comment_id: str = Form(""),
    post_id: str = Form(""),
    session: SessionInfo = Depends(get_current_session),
):
    dislike_comment(db, session.user_id, comment_id)
    refresh_counters(db, TargetKind.comment, comment_id)
    return _post_page(post_id or get_comment(db, comment_id).post_id)
