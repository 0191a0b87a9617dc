from enum import Enum
from pydantic import BaseModel

class ReactionType(str, Enum):
    like = "like"
    dislike = "dislike"

    @property
    def is_like(self) -> bool:
        return self is ReactionType.like

    @classmethod
    def from_is_like(cls, is_like: bool) -> "ReactionType":
        return cls.like if is_like else cls.dislike


class TargetKind(str, Enum):
    post = "post"
    comment = "comment"


class ReactionCounts(BaseModel):
    """Like/dislike totals counted from the ledger"""
    likes: int = 0
    dislikes: int = 0
