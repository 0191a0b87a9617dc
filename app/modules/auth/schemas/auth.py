from pydantic import BaseModel

class SessionInfo(BaseModel):
    """Identity resolved from a session token"""
    user_id: str
    username: str
    token: str
