"""
Models package for Pixora API
"""
from pixora.db.base import Base, BaseModel
from pixora.models.user import User
from pixora.models.post import Post
from pixora.models.comment import Comment
from pixora.models.like import Like

__all__ = [
    'Base',
    'BaseModel',
    'User',
    'Post',
    'Comment',
    'Like',
]
