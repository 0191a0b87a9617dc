import logging
from sqlalchemy import inspect

from app.core.config import settings
from app.db.session import engine, Base, SessionLocal
import app.db.base  # noqa: F401  registers every model on Base.metadata
from app.modules.categories.services.category import seed_categories

logger = logging.getLogger(__name__)

def create_all_tables(bind=None) -> bool:
    """Create missing tables and seed the category vocabulary"""
    bind = bind or engine
    try:
        existing_tables = inspect(bind).get_table_names()

        Base.metadata.create_all(bind=bind)

        new_tables = set(inspect(bind).get_table_names()) - set(existing_tables)
        if new_tables:
            logger.info(f"Created new tables: {new_tables}")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        return False

    db = SessionLocal(bind=bind)
    try:
        seed_categories(db, settings.DEFAULT_CATEGORIES)
    except Exception as e:
        db.rollback()
        logger.error(f"Error seeding categories: {e}")
        return False
    finally:
        db.close()

    return True
