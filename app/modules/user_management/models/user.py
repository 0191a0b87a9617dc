from datetime import datetime
from sqlalchemy import Column, String, DateTime

from app.db.session import Base

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    session_token = Column(String, unique=True, index=True, nullable=True)  # replaced on every login
    created_at = Column(DateTime, default=datetime.now)
