from typing import List, Optional
import uuid
import logging

from sqlalchemy.orm import Query, Session

from app.core.exceptions import NotFound, ValidationError
from app.core.security import sanitize_input
from app.db.session import storage_errors
from app.modules.categories.models.category import PostCategory
from app.modules.categories.services.category import (
    add_category_to_post, get_categories_for_post, get_category, resolve_categories
)
from app.modules.posts.models.post import Post
from app.modules.posts.reactions.models.reaction import PostReaction
from app.modules.posts.reactions.schemas.reaction import TargetKind
from app.modules.posts.reactions.services.reaction import get_user_reactions
from app.modules.posts.schemas.post import PostView
from app.modules.user_management.models.user import User

logger = logging.getLogger("app")

DATE_FORMAT = "%d.%m.%Y %H:%M"

def _base_query(db: Session) -> Query:
    """Posts joined to their author's username, newest first"""
    return (
        db.query(Post, User.username)
        .join(User, User.id == Post.user_id)
        .order_by(Post.created_at.desc())
    )

def _to_post_view(db: Session, post: Post, author: str) -> PostView:
    """Transform a post row into the view handed to templates"""
    return PostView(
        id=post.id,
        content=post.content,
        author=author,
        created_at=post.created_at,
        created_at_formatted=post.created_at.strftime(DATE_FORMAT) if post.created_at else "",
        likes=post.likes or 0,
        dislikes=post.dislikes or 0,
        image_path=post.image_path,
        categories=get_categories_for_post(db, post.id),
    )

def _collect(db: Session, query: Query, viewer_id: Optional[str] = None) -> List[PostView]:
    with storage_errors(db, "list posts"):
        views = [_to_post_view(db, post, author) for post, author in query.all()]
    _annotate_reactions(db, views, viewer_id)
    return views

def _annotate_reactions(db: Session, views: List[PostView], viewer_id: Optional[str]) -> None:
    if not viewer_id or not views:
        return
    reactions = get_user_reactions(db, viewer_id, TargetKind.post, [view.id for view in views])
    for view in views:
        reaction = reactions.get(view.id)
        view.user_reaction = reaction.value if reaction else None

def create_post(
    db: Session,
    author_id: str,
    content: str,
    categories: List[str],
    image_path: Optional[str] = None,
) -> Post:
    """
    Create a post and link it to its categories.

    Content is escaped and trimmed; empty content, no categories or an
    unknown category raise ValidationError before anything is written.
    """
    content = sanitize_input(content)
    if not content or not categories:
        raise ValidationError("Content and at least one category are required to create a post")

    resolved = resolve_categories(db, categories)
    if not resolved:
        raise ValidationError("Content and at least one category are required to create a post")

    logger.info(f"Creating post for author ID: {author_id}")
    post = Post(
        id=str(uuid.uuid4()),
        user_id=author_id,
        content=content,
        image_path=image_path or None,
    )
    with storage_errors(db, "create post"):
        db.add(post)
        db.flush()
        for category in resolved:
            add_category_to_post(db, post.id, category.id)
        db.commit()
        db.refresh(post)
    return post

def get_post(db: Session, post_id: str, viewer_id: Optional[str] = None) -> PostView:
    """Get a single post by ID or raise NotFound"""
    if not post_id:
        raise NotFound("Post not found")
    with storage_errors(db, "fetch post"):
        row = _base_query(db).filter(Post.id == post_id).first()
        if not row:
            raise NotFound("Post not found")
        view = _to_post_view(db, *row)
    _annotate_reactions(db, [view], viewer_id)
    return view

def get_filtered_posts(db: Session, category: Optional[str] = None, viewer_id: Optional[str] = None) -> List[PostView]:
    """
    Get all posts newest first, optionally only those in one category.

    ``category`` may be a category ID or name; an unknown one yields no posts.
    """
    query = _base_query(db)
    if category:
        selected = get_category(db, category)
        if not selected:
            return []
        query = query.join(PostCategory, PostCategory.post_id == Post.id).filter(
            PostCategory.category_id == selected.id
        )
    return _collect(db, query, viewer_id)

def get_user_posts(db: Session, user_id: str) -> List[PostView]:
    """Get posts authored by a user"""
    logger.info(f"Getting posts for user ID: {user_id}")
    query = _base_query(db).filter(Post.user_id == user_id)
    return _collect(db, query, viewer_id=user_id)

def get_liked_posts(db: Session, user_id: str) -> List[PostView]:
    """Get posts the user has liked (dislikes are left out)"""
    logger.info(f"Getting liked posts for user ID: {user_id}")
    query = (
        _base_query(db)
        .join(PostReaction, PostReaction.post_id == Post.id)
        .filter(PostReaction.user_id == user_id, PostReaction.is_like == True)
    )
    return _collect(db, query, viewer_id=user_id)
