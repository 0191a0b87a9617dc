# Import all models here so Base.metadata knows every table
from app.db.session import Base

from app.modules.user_management.models.user import User
from app.modules.categories.models.category import Category, PostCategory
from app.modules.posts.models.post import Post
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.models.reaction import PostReaction, CommentReaction
