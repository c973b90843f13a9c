"""
Pydantic schemas for user endpoints.
"""
from pydantic import BaseModel
from typing import Optional

class CreateUserIn(BaseModel):
    """
    Request model for registering a user coming from the external sign-in provider.
    """
    externalId: str  # Identity key issued by the sign-in provider
    name: str
    username: str
    email: Optional[str] = None
    picture: Optional[str] = None

class UserOut(BaseModel):
    id: str
    externalId: str
    name: str
    username: str
    email: Optional[str] = None
    picture: Optional[str] = None
    reputation: int
    joinedAt: str  # ISO format
