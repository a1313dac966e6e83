from pydantic import Field
from typing import Optional, List
from datetime import datetime
from pixora.schemas.base import CamelModel
from pixora.schemas.comment_schema import CommentView

class PostCreate(CamelModel):
    # Blank values are rejected by PostService with a single message
    image_url: Optional[str] = Field(None, max_length=500)
    caption: Optional[str] = None

class AuthorSummary(CamelModel):
    id: int
    username: str
    display_name: str
    avatar_url: Optional[str] = None

class PostView(CamelModel):
    id: int
    image_url: str
    caption: str
    created_at: datetime
    author: AuthorSummary
    likes_count: int = 0
    is_liked: bool = False
    comments: List[CommentView] = []

class DeleteResponse(CamelModel):
    success: bool = True
