"""
Application state for the serverless client.

Everything the feed needs lives on one ``AppState`` instance that is passed
to every operation; ``LocalStore`` loads and saves it.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

DEFAULT_BIO = "Just vibing on Pixora."

class LocalRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class LocalUser(LocalRecord):
    username: str
    display_name: str
    bio: str = DEFAULT_BIO

class LocalComment(LocalRecord):
    id: str
    author_username: str
    text: str
    created_at: int  # epoch milliseconds

class LocalPost(LocalRecord):
    id: str
    author_username: str
    author_display_name: str
    image_url: str
    caption: str
    likes: List[str] = Field(default_factory=list)  # usernames
    comments: List[LocalComment] = Field(default_factory=list)
    created_at: int  # epoch milliseconds

class AppState(LocalRecord):
    current_user: Optional[LocalUser] = None
    posts: List[LocalPost] = Field(default_factory=list)  # newest first
    filter: Literal["all", "mine"] = "all"
    search: str = ""

    def find_post(self, post_id: str) -> Optional[LocalPost]:
        for post in self.posts:
            if post.id == post_id:
                return post
        return None
