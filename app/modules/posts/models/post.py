from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Integer, ForeignKey

from app.db.session import Base

class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    image_path = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.now, index=True)

    # Cached projection of post_likes, written only by refresh_counters
    likes = Column(Integer, nullable=False, default=0)
    dislikes = Column(Integer, nullable=False, default=0)
