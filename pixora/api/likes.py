from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from pixora.errors import PixoraError, Internal
from pixora.schemas.post_schema import PostView
from pixora.services.like_service import LikeService
from pixora.services.post_service import PostService
from pixora.services.feed_service import FeedService
from pixora.services.auth_service import get_current_user
from pixora.db.session import get_db
from pixora.db.base import MAX_ID
from pixora.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/{post_id}/like", response_model=PostView)
async def like_post(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Like a post; liking twice leaves a single like"""
    try:
        post = await PostService(db).get_post_or_404(post_id)
        await LikeService(db).like_post(post.id, current_user.id)
        return await FeedService(db).assemble_one(post, current_user.id)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Like post error: {e}")
        raise Internal("Failed to like post")

@router.post("/{post_id}/unlike", response_model=PostView)
async def unlike_post(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Unlike a post; unliking a post never liked is a no-op"""
    try:
        post = await PostService(db).get_post_or_404(post_id)
        await LikeService(db).unlike_post(post.id, current_user.id)
        return await FeedService(db).assemble_one(post, current_user.id)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Unlike post error: {e}")
        raise Internal("Failed to unlike post")
