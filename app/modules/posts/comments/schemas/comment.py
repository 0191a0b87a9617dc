from typing import Optional
from datetime import datetime
from pydantic import BaseModel

class CommentView(BaseModel):
    """Comment as rendered under a post"""
    id: str
    post_id: str
    content: str
    author: str
    created_at: datetime
    created_at_formatted: str
    likes: int = 0
    dislikes: int = 0
    user_reaction: Optional[str] = None
