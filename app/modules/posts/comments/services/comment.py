from typing import List, Optional
import uuid
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationError
from app.core.security import sanitize_input
from app.db.session import storage_errors
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.schemas.comment import CommentView
from app.modules.posts.models.post import Post
from app.modules.posts.reactions.schemas.reaction import TargetKind
from app.modules.posts.reactions.services.reaction import get_user_reactions
from app.modules.posts.services.post import DATE_FORMAT
from app.modules.user_management.models.user import User

logger = logging.getLogger("app")

def get_comment(db: Session, comment_id: str) -> Comment:
    """Get comment by ID or raise NotFound"""
    with storage_errors(db, "fetch comment"):
        comment = db.query(Comment).filter(Comment.id == comment_id).first() if comment_id else None
    if not comment:
        raise NotFound("Comment not found")
    return comment

def create_comment(db: Session, post_id: str, user_id: str, content: str) -> Comment:
    """Create a new comment under an existing post"""
    content = sanitize_input(content)
    if not content:
        raise ValidationError("Content is required to create a comment")

    with storage_errors(db, "create comment"):
        post_exists = db.query(Post.id).filter(Post.id == post_id).first() if post_id else None
        if not post_exists:
            raise NotFound("Post not found")

        comment = Comment(
            id=str(uuid.uuid4()),
            post_id=post_id,
            user_id=user_id,
            content=content,
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)

    logger.info(f"User {user_id} commented on post {post_id}")
    return comment

def get_comments_for_post(db: Session, post_id: str, viewer_id: Optional[str] = None) -> List[CommentView]:
    """Get a post's comments, oldest first, with author usernames"""
    with storage_errors(db, "list comments"):
        rows = (
            db.query(Comment, User.username)
            .join(User, User.id == Comment.user_id)
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc())
            .all()
        )

    comments = [
        CommentView(
            id=comment.id,
            post_id=comment.post_id,
            content=comment.content,
            author=author,
            created_at=comment.created_at,
            created_at_formatted=comment.created_at.strftime(DATE_FORMAT) if comment.created_at else "",
            likes=comment.likes or 0,
            dislikes=comment.dislikes or 0,
        )
        for comment, author in rows
    ]

    if viewer_id and comments:
        reactions = get_user_reactions(db, viewer_id, TargetKind.comment, [c.id for c in comments])
        for comment in comments:
            reaction = reactions.get(comment.id)
            comment.user_reaction = reaction.value if reaction else None

    return comments
