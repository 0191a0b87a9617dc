from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.exceptions import ForumError
from app.core.storage import image_storage
from app.core.templates import render
from app.db.session import get_db
from app.deps import get_current_session, get_optional_session
from app.modules.auth.schemas.auth import SessionInfo
from app.modules.categories.services.category import get_all_categories
from app.modules.posts.comments.services.comment import get_comments_for_post
from app.modules.posts.reactions.schemas.reaction import TargetKind
from app.modules.posts.reactions.services.reaction import (
    dislike_post, like_post, refresh_counters
)
from app.modules.posts.services.post import (
    create_post, get_filtered_posts, get_liked_posts, get_post, get_user_posts
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _back(request: Request) -> RedirectResponse:
    """Redirect to the page the form was submitted from"""
    referer = request.headers.get("referer") or "/"
    return RedirectResponse(url=referer, status_code=status.HTTP_303_SEE_OTHER)

def _posts_page(request: Request, db: Session, posts, session: Optional[SessionInfo], **extra):
    context = {
        "posts": posts,
        "categories": get_all_categories(db),
        "logged_in": session is not None,
        "username": session.username if session else "",
        "selected_category": "",
        "selected_filter": "",
    }
    context.update(extra)
    return render(request, "index.html", context)

@router.get("/")
def read_posts(
    request: Request,
    db: Session = Depends(get_db),
    category: Optional[str] = Query(None),
    session: Optional[SessionInfo] = Depends(get_optional_session),
):
    """
    Main page: every post newest first, optionally filtered to one category.
    """
    posts = get_filtered_posts(db, category=category, viewer_id=session.user_id if session else None)
    return _posts_page(request, db, posts, session, selected_category=category or "")

@router.get("/post")
def read_post(
    request: Request,
    db: Session = Depends(get_db),
    id: str = Query(""),
    session: Optional[SessionInfo] = Depends(get_optional_session),
):
    """
    Post page with its comments.
    """
    viewer_id = session.user_id if session else None
    post = get_post(db, id, viewer_id=viewer_id)
    comments = get_comments_for_post(db, post.id, viewer_id=viewer_id)
    return render(
        request,
        "post.html",
        {
            "post": post,
            "comments": comments,
            "logged_in": session is not None,
            "username": session.username if session else "",
        },
    )

@router.post("/create_post")
async def create_new_post(
    request: Request,
    db: Session = Depends(get_db),
    content: str = Form(""),
    image: Optional[UploadFile] = File(None),
    session: SessionInfo = Depends(get_current_session),
):
    """
    Create new post with its categories and an optional image.
    """
    form = await request.form()
    categories: List[str] = form.getlist("categories") + form.getlist("categories[]")

    image_path = None
    if image is not None and image.filename:
        image_path = await image_storage.save_image(image)

    try:
        create_post(db, session.user_id, content, categories, image_path=image_path)
    except ForumError:
        if image_path:
            image_storage.delete_image(image_path)
        raise

    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)

@router.post("/like")
def like(
    request: Request,
    db: Session = Depends(get_db),
    post_id: str = Form(""),
    session: SessionInfo = Depends(get_current_session),
):
    like_post(db, session.user_id, post_id)
    refresh_counters(db, TargetKind.post, post_id)
    return _back(request)

@router.post("/dislike")
def dislike(
    request: Request,
    db: Session = Depends(get_db),
    post_id: str = Form(""),
    session: SessionInfo = Depends(get_current_session),
):
    dislike_post(db, session.user_id, post_id)
    refresh_counters(db, TargetKind.post, post_id)
    return _back(request)

@router.get("/my_posts")
def read_my_posts(
    request: Request,
    db: Session = Depends(get_db),
    session: SessionInfo = Depends(get_current_session),
):
    """Posts created by the logged-in user"""
    posts = get_user_posts(db, session.user_id)
    return _posts_page(request, db, posts, session, selected_filter="my_posts")

@router.get("/liked_posts")
def read_liked_posts(
    request: Request,
    db: Session = Depends(get_db),
    session: SessionInfo = Depends(get_current_session),
):
    """Posts the logged-in user has liked"""
    posts = get_liked_posts(db, session.user_id)
    return _posts_page(request, db, posts, session, selected_filter="liked_posts")
