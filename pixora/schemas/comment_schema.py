from pydantic import Field
from typing import Optional
from datetime import datetime
from pixora.schemas.base import CamelModel

class CommentCreate(CamelModel):
    text: Optional[str] = Field(None, max_length=2000)

class CommentAuthor(CamelModel):
    id: int
    username: str
    display_name: str

class CommentView(CamelModel):
    id: int
    text: str
    created_at: datetime
    author: CommentAuthor
