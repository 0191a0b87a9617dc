from sqlalchemy import Boolean, Column, String, ForeignKey, UniqueConstraint

from app.db.session import Base

class PostReaction(Base):
    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_post_likes_user_post"),)

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    post_id = Column(String, ForeignKey("posts.id"), nullable=False, index=True)
    is_like = Column(Boolean, nullable=False)  # False means dislike


class CommentReaction(Base):
    __tablename__ = "comment_likes"
    __table_args__ = (UniqueConstraint("user_id", "comment_id", name="uq_comment_likes_user_comment"),)

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    comment_id = Column(String, ForeignKey("comments.id"), nullable=False, index=True)
    is_like = Column(Boolean, nullable=False)
