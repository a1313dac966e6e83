from sqlalchemy import Column, String, Text, Index
from sqlalchemy.orm import relationship
from pixora.db.base import BaseModel

DEFAULT_BIO = "Just vibing on Pixora."

class User(BaseModel):
    __tablename__ = "users"
    
    username = Column(String(50), nullable=False)
    # Case-folded username; the unique index makes "Alice" and "alice" collide.
    # Folding can lengthen a name ("ß" -> "ss"), at most threefold
    username_key = Column(String(150), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    display_name = Column(String(100), nullable=False)
    bio = Column(Text, default=DEFAULT_BIO)
    avatar_url = Column(String(500))
    
    # Relationships
    posts = relationship("Post", back_populates="author")
    comments = relationship("Comment", back_populates="author")
    likes = relationship("Like", back_populates="user")
    
    # Additional indexes
    __table_args__ = (
        Index('ix_users_created_at', 'created_at'),
    )

    @staticmethod
    def make_username_key(username: str) -> str:
        return username.casefold()
