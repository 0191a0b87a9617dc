from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel

class PostView(BaseModel):
    """Post as rendered in listings and on the post page"""
    id: str
    content: str
    author: str
    created_at: datetime
    created_at_formatted: str
    likes: int = 0
    dislikes: int = 0
    image_path: Optional[str] = None
    categories: List[str] = []
    user_reaction: Optional[str] = None  # viewer's own like/dislike, if logged in
