from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from sqlalchemy import select, delete, desc
import logging

from pixora.errors import Forbidden, NotFound, ValidationError
from pixora.models.post import Post
from pixora.models.like import Like
from pixora.models.comment import Comment
from pixora.schemas.post_schema import PostCreate

logger = logging.getLogger(__name__)

SCOPE_ALL = "all"
SCOPE_MINE = "mine"

class PostService:
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def create_post(self, user_id: int, post_data: PostCreate) -> Post:
        """Create a new post"""
        image_url = (post_data.image_url or "").strip()
        caption = (post_data.caption or "").strip()
        if not image_url or not caption:
            raise ValidationError("imageUrl and caption required")
        
        post = Post(
            user_id=user_id,
            image_url=image_url,
            caption=caption,
        )
        
        self.db.add(post)
        await self.db.commit()
        
        logger.info(f"User {user_id} created post {post.id}")
        
        # Reload with the author attached for the view
        return await self.get_post_or_404(post.id)
    
    async def get_post(self, post_id: int) -> Optional[Post]:
        """Get a post by ID, author loaded"""
        stmt = select(Post).options(joinedload(Post.author)).where(Post.id == post_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
    
    async def get_post_or_404(self, post_id: int) -> Post:
        post = await self.get_post(post_id)
        if not post:
            raise NotFound("Post not found")
        return post
    
    async def list_posts(self, viewer_id: int, scope: str = SCOPE_ALL) -> List[Post]:
        """Posts newest first; ``mine`` keeps only the viewer's own"""
        stmt = select(Post).options(joinedload(Post.author))
        
        if scope == SCOPE_MINE:
            stmt = stmt.where(Post.user_id == viewer_id)
        elif scope != SCOPE_ALL:
            raise ValidationError("scope must be 'all' or 'mine'")
        
        stmt = stmt.order_by(desc(Post.created_at), desc(Post.id))
        
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
    
    async def delete_post(self, post_id: int, viewer_id: int) -> None:
        """Delete a post with its likes and comments in one transaction"""
        post = await self.get_post_or_404(post_id)
        
        if post.user_id != viewer_id:
            raise Forbidden("Not your post")
        
        try:
            # Children first so no reader sees likes or comments of a missing post
            await self.db.execute(delete(Like).where(Like.post_id == post_id))
            await self.db.execute(delete(Comment).where(Comment.post_id == post_id))
            await self.db.execute(delete(Post).where(Post.id == post_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        
        logger.info(f"User {viewer_id} deleted post {post_id}")
