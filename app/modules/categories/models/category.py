from sqlalchemy import Column, String, ForeignKey

from app.db.session import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)


class PostCategory(Base):
    __tablename__ = "post_categories"

    post_id = Column(String, ForeignKey("posts.id"), primary_key=True)
    category_id = Column(String, ForeignKey("categories.id"), primary_key=True, index=True)
