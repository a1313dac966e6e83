from sqlalchemy import Column, Text, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship
from pixora.db.base import BaseModel

class Comment(BaseModel):
    __tablename__ = "comments"
    
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    text = Column(Text, nullable=False)
    
    # Relationships
    post = relationship("Post", back_populates="comments")
    author = relationship("User", back_populates="comments")
    
    # Indexes for better performance
    __table_args__ = (
        Index('ix_comments_post_id', 'post_id'),
        Index('ix_comments_user_id', 'user_id'),
        Index('ix_comments_created_at', 'created_at'),
    )
