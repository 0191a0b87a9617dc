from typing import Dict, Iterable, List, Optional
import logging
import uuid

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.db.session import storage_errors
from app.modules.categories.models.category import Category, PostCategory

logger = logging.getLogger("app")

def get_all_categories(db: Session) -> List[Category]:
    """Get the whole category vocabulary"""
    with storage_errors(db, "list categories"):
        return db.query(Category).order_by(Category.name).all()

def get_category(db: Session, key: str) -> Optional[Category]:
    """Get a category by ID or by name"""
    if not key:
        return None
    with storage_errors(db, "look up category"):
        return db.query(Category).filter(or_(Category.id == key, Category.name == key)).first()

def resolve_categories(db: Session, keys: Iterable[str]) -> List[Category]:
    """
    Turn submitted category IDs or names into Category rows.

    Duplicates collapse to one entry; an unknown key raises ValidationError.
    """
    resolved: Dict[str, Category] = {}
    for key in keys:
        key = (key or "").strip()
        if not key:
            continue
        category = get_category(db, key)
        if not category:
            raise ValidationError(f"Unknown category: {key}")
        resolved.setdefault(category.id, category)
    return list(resolved.values())

def add_category_to_post(db: Session, post_id: str, category_id: str) -> PostCategory:
    """Link a category to a post (caller commits)"""
    link = PostCategory(post_id=post_id, category_id=category_id)
    db.add(link)
    return link

def get_categories_for_post(db: Session, post_id: str) -> List[str]:
    """Get the names of a post's categories"""
    rows = (
        db.query(Category.name)
        .join(PostCategory, PostCategory.category_id == Category.id)
        .filter(PostCategory.post_id == post_id)
        .order_by(Category.name)
        .all()
    )
    return [name for (name,) in rows]

def seed_categories(db: Session, names: Iterable[str]) -> int:
    """Insert any missing vocabulary entries; returns how many were added"""
    existing = {name for (name,) in db.query(Category.name).all()}
    added = 0
    for name in names:
        if name in existing:
            continue
        db.add(Category(id=str(uuid.uuid4()), name=name))
        existing.add(name)
        added += 1
    db.commit()
    if added:
        logger.info(f"Seeded {added} categories")
    return added
