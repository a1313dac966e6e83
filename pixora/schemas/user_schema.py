from pydantic import Field, StringConstraints
from typing import Annotated, Optional
from pixora.schemas.base import CamelModel

class UserPublic(CamelModel):
    id: int
    username: str
    display_name: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

class UserStats(CamelModel):
    """User statistics"""
    posts: int = 0
    likes_given: int = 0

class UserMe(UserPublic):
    stats: UserStats

class UserUpdate(CamelModel):
    display_name: Optional[Annotated[str, StringConstraints(strip_whitespace=True)]] = Field(None, min_length=2, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    avatar_url: Optional[str] = Field(None, max_length=500)
