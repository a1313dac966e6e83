from typing import Dict, Iterable, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy import select, delete, and_
import logging

from pixora.errors import Internal
from pixora.models.like import Like

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_CONFLICT_AWARE_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

class LikeService:
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def like_post(self, post_id: int, user_id: int) -> bool:
        """
        Like a post.

        A repeated like is absorbed by the (post_id, user_id) unique
        constraint inside the insert itself, so concurrent requests cannot
        both succeed. Returns True when a new row was written.
        """
        try:
            result = await self._insert_like(post_id, user_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error creating like: user={user_id}, post={post_id}: {e}")
            raise Internal("Failed to like post")
        
        created = result.rowcount == 1
        if created:
            logger.info(f"User {user_id} liked post {post_id}")
        else:
            logger.debug(f"User {user_id} already liked post {post_id}")
        return created
    
    async def _insert_like(self, post_id: int, user_id: int):
        dialect = self.db.get_bind().dialect.name
        insert = _CONFLICT_AWARE_INSERTS.get(dialect)
        if insert is None:
            raise Internal(f"Unsupported database dialect: {dialect}")
        
        stmt = insert(Like.__table__).values(post_id=post_id, user_id=user_id).on_conflict_do_nothing(
            index_elements=["post_id", "user_id"]
        )
        return await self.db.execute(stmt)
    
    async def unlike_post(self, post_id: int, user_id: int) -> bool:
        """Remove a like; absent likes are not an error"""
        stmt = delete(Like).where(
            and_(Like.post_id == post_id, Like.user_id == user_id)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        
        removed = result.rowcount > 0
        if removed:
            logger.info(f"User {user_id} unliked post {post_id}")
        return removed
    
    async def get_likers_by_post(self, post_ids: Iterable[int]) -> Dict[int, List[int]]:
        """One query for every like of the given posts, grouped by post id"""
        stmt = select(Like.post_id, Like.user_id).where(Like.post_id.in_(list(post_ids)))
        result = await self.db.execute(stmt)
        
        likers: Dict[int, List[int]] = {}
        for post_id, user_id in result.all():
            likers.setdefault(post_id, []).append(user_id)
        return likers
