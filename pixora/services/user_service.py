"""
User Service for handling user-related business logic
"""
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func

from pixora.errors import Conflict, ValidationError
from pixora.models.user import User
from pixora.models.post import Post
from pixora.models.like import Like
from pixora.schemas.user_schema import UserUpdate, UserStats

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID"""
        return await self.db.get(User, user_id)
    
    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, ignoring case"""
        stmt = select(User).where(User.username_key == User.make_username_key(username))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
    
    async def create_user(self, username: str, hashed_password: str, display_name: str) -> User:
        """Insert a user; the unique username key catches racing registrations"""
        user = User(
            username=username,
            username_key=User.make_username_key(username),
            hashed_password=hashed_password,
            display_name=display_name,
        )
        
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Username already taken")
        await self.db.refresh(user)
        
        return user
    
    async def update_profile(self, user: User, user_update: UserUpdate) -> User:
        """Apply the supplied profile fields to the caller's own record"""
        update_data = user_update.model_dump(exclude_unset=True)
        
        if "display_name" in update_data and update_data["display_name"] is None:
            raise ValidationError("Display name too short")
        
        for field, value in update_data.items():
            setattr(user, field, value)
        
        await self.db.commit()
        await self.db.refresh(user)
        
        logger.info(f"Updated profile of user {user.id}: {sorted(update_data)}")
        return user
    
    async def get_stats(self, user_id: int) -> UserStats:
        """Post count and likes given"""
        posts_stmt = select(func.count()).select_from(Post).where(Post.user_id == user_id)
        likes_stmt = select(func.count()).select_from(Like).where(Like.user_id == user_id)
        
        posts = (await self.db.execute(posts_stmt)).scalar() or 0
        likes_given = (await self.db.execute(likes_stmt)).scalar() or 0
        
        return UserStats(posts=posts, likes_given=likes_given)
