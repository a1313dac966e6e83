from typing import Dict, Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from sqlalchemy import select, asc
import logging

from pixora.errors import Forbidden, NotFound, ValidationError
from pixora.models.comment import Comment
from pixora.models.post import Post

logger = logging.getLogger(__name__)

class CommentService:
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def create_comment(self, post: Post, user_id: int, text: Optional[str]) -> Comment:
        """Create a new comment"""
        text = (text or "").strip()
        if not text:
            raise ValidationError("Comment text required")
        
        comment = Comment(post_id=post.id, user_id=user_id, text=text)
        
        try:
            self.db.add(comment)
            await self.db.commit()
        except Exception as e:
            logger.error(f"Error creating comment: {e}")
            await self.db.rollback()
            raise
        
        logger.info(f"Created comment {comment.id} by user {user_id} on post {post.id}")
        return comment
    
    async def get_comment(self, comment_id: int) -> Optional[Comment]:
        """Get a comment by ID"""
        stmt = select(Comment).where(Comment.id == comment_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
    
    async def delete_comment(self, post: Post, comment_id: int, viewer_id: int) -> None:
        """Delete a comment; its author and the post's author may do so"""
        comment = await self.get_comment(comment_id)
        if not comment or comment.post_id != post.id:
            raise NotFound("Comment not found")
        
        is_comment_owner = comment.user_id == viewer_id
        is_post_owner = post.user_id == viewer_id
        if not is_comment_owner and not is_post_owner:
            raise Forbidden("Not allowed")
        
        await self.db.delete(comment)
        await self.db.commit()
        
        logger.info(f"User {viewer_id} deleted comment {comment_id} on post {post.id}")
    
    async def get_comments_by_post(self, post_ids: Iterable[int]) -> Dict[int, List[Comment]]:
        """One query for every comment of the given posts, authors joined, oldest first"""
        stmt = select(Comment).options(
            joinedload(Comment.author)
        ).where(
            Comment.post_id.in_(list(post_ids))
        ).order_by(
            asc(Comment.created_at), asc(Comment.id)
        )
        result = await self.db.execute(stmt)
        
        comments: Dict[int, List[Comment]] = {}
        for comment in result.scalars().all():
            comments.setdefault(comment.post_id, []).append(comment)
        return comments
