from pydantic import BaseModel

class UserBase(BaseModel):
    email: str
    username: str

class UserCreate(UserBase):
    """Registration form fields, validated by the auth service"""
    password: str
