"""
Like/dislike ledger for posts and comments.

``set_reaction`` toggles a user's row in the ledger; ``refresh_counters``
recounts the ledger and overwrites the cached totals on the post or comment.
Routes call the two back to back; they are separate commits.
"""

from typing import Dict, List, Optional, Tuple
import logging
import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound
from app.db.session import storage_errors
from app.modules.posts.models.post import Post
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.models.reaction import PostReaction, CommentReaction
from app.modules.posts.reactions.schemas.reaction import ReactionType, TargetKind, ReactionCounts

logger = logging.getLogger("app")

# kind -> (ledger model, ledger target column, target model)
_LEDGERS = {
    TargetKind.post: (PostReaction, PostReaction.post_id, Post),
    TargetKind.comment: (CommentReaction, CommentReaction.comment_id, Comment),
}

def _ledger(kind: TargetKind) -> Tuple:
    return _LEDGERS[TargetKind(kind)]

def _get_target(db: Session, kind: TargetKind, target_id: str):
    _, _, target_model = _ledger(kind)
    target = db.query(target_model).filter(target_model.id == target_id).first()
    if not target:
        raise NotFound(f"{TargetKind(kind).value.capitalize()} not found")
    return target

def get_reaction(db: Session, user_id: str, kind: TargetKind, target_id: str):
    """Get the ledger row for (user, target), if any"""
    model, target_column, _ = _ledger(kind)
    return (
        db.query(model)
        .filter(model.user_id == user_id, target_column == target_id)
        .first()
    )

def get_user_reaction(db: Session, user_id: str, kind: TargetKind, target_id: str) -> Optional[ReactionType]:
    """Get the user's current reaction to a target, or None"""
    with storage_errors(db, "look up reaction"):
        reaction = get_reaction(db, user_id, kind, target_id)
    return ReactionType.from_is_like(reaction.is_like) if reaction else None

def get_user_reactions(db: Session, user_id: str, kind: TargetKind, target_ids: List[str]) -> Dict[str, ReactionType]:
    """Get the user's reactions to many targets at once, keyed by target ID"""
    if not user_id or not target_ids:
        return {}
    model, target_column, _ = _ledger(kind)
    with storage_errors(db, "look up reactions"):
        rows = (
            db.query(target_column, model.is_like)
            .filter(model.user_id == user_id, target_column.in_(target_ids))
            .all()
        )
    return {target_id: ReactionType.from_is_like(is_like) for target_id, is_like in rows}

def set_reaction(
    db: Session,
    user_id: str,
    kind: TargetKind,
    target_id: str,
    reaction_type: ReactionType,
) -> Optional[ReactionType]:
    """
    Toggle a user's reaction to a post or comment.

    - no row yet: insert one with ``reaction_type``
    - row with the same polarity: delete it (undo)
    - row with the opposite polarity: flip it in place

    Returns the reaction left in the ledger, or None when it was undone.
    Cached counters are not touched; call ``refresh_counters`` afterwards.
    """
    reaction_type = ReactionType(reaction_type)
    model, target_column, _ = _ledger(kind)

    with storage_errors(db, f"set {reaction_type.value} on {TargetKind(kind).value}"):
        _get_target(db, kind, target_id)
        existing = get_reaction(db, user_id, kind, target_id)

        if existing is None:
            reaction = model(id=str(uuid.uuid4()), user_id=user_id, is_like=reaction_type.is_like)
            setattr(reaction, target_column.key, target_id)
            db.add(reaction)
            result = reaction_type
        elif existing.is_like == reaction_type.is_like:
            db.delete(existing)
            result = None
        else:
            existing.is_like = reaction_type.is_like
            result = reaction_type

        db.commit()

    logger.debug(f"User {user_id} {kind} {target_id} reaction is now {result}")
    return result

def refresh_counters(db: Session, kind: TargetKind, target_id: str) -> ReactionCounts:
    """Recount the ledger for one target and overwrite its cached like/dislike totals"""
    model, target_column, _ = _ledger(kind)

    with storage_errors(db, f"refresh {TargetKind(kind).value} counters"):
        target = _get_target(db, kind, target_id)
        rows = (
            db.query(model.is_like, func.count(model.id))
            .filter(target_column == target_id)
            .group_by(model.is_like)
            .all()
        )
        totals = {bool(is_like): count for is_like, count in rows}
        counts = ReactionCounts(likes=totals.get(True, 0), dislikes=totals.get(False, 0))

        target.likes = counts.likes
        target.dislikes = counts.dislikes
        db.commit()

    return counts

def like_post(db: Session, user_id: str, post_id: str) -> Optional[ReactionType]:
    return set_reaction(db, user_id, TargetKind.post, post_id, ReactionType.like)

def dislike_post(db: Session, user_id: str, post_id: str) -> Optional[ReactionType]:
    return set_reaction(db, user_id, TargetKind.post, post_id, ReactionType.dislike)

def like_comment(db: Session, user_id: str, comment_id: str) -> Optional[ReactionType]:
    return set_reaction(db, user_id, TargetKind.comment, comment_id, ReactionType.like)

def dislike_comment(db: Session, user_id: str, comment_id: str) -> Optional[ReactionType]:
    return set_reaction(db, user_id, TargetKind.comment, comment_id, ReactionType.dislike)
