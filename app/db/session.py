from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
import logging

from app.core.config import settings
from app.core.exceptions import StorageError

logger = logging.getLogger("app")
logger.info(f"Connecting to database with URL: {settings.DATABASE_URL}")

if not settings.DATABASE_URL:
    logger.error("DATABASE_URL is not set or empty!")
    raise ValueError("DATABASE_URL environment variable is required")

# SQLite connections are handed between worker threads by FastAPI
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

try:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Check connection before using from pool
        connect_args=connect_args,
    )
    logger.info("Database engine created successfully")
except Exception as e:
    logger.error(f"Failed to create database engine: {e}")
    raise

# Create session factory for database interactions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all SQLAlchemy models
Base = declarative_base()

# Database session dependency for FastAPI
def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def storage_errors(db: Session, action: str) -> Iterator[Session]:
    """
    Roll back and re-raise any database failure inside the block as StorageError.
    """
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage failure while trying to {action}: {e}")
        raise StorageError(f"Storage failure while trying to {action}") from e
