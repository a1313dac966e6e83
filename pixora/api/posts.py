from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal
from pixora.errors import PixoraError, Internal
from pixora.schemas.post_schema import PostCreate, PostView, DeleteResponse
from pixora.services.post_service import PostService, SCOPE_ALL
from pixora.services.feed_service import FeedService
from pixora.services.auth_service import get_current_user
from pixora.db.session import get_db
from pixora.db.base import MAX_ID
from pixora.models.user import User
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[PostView])
async def list_posts(
    scope: Literal["all", "mine"] = Query(SCOPE_ALL),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List posts newest first, optionally only the caller's own"""
    try:
        posts = await PostService(db).list_posts(current_user.id, scope)
        return await FeedService(db).assemble(posts, current_user.id)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"List posts error: {e}")
        raise Internal("Failed to load posts")

@router.post("", response_model=PostView, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new post"""
    try:
        post = await PostService(db).create_post(current_user.id, post_data)
        return await FeedService(db).assemble_one(post, current_user.id)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Create post error: {e}")
        raise Internal("Failed to create post")

@router.get("/{post_id}", response_model=PostView)
async def get_post(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a post by ID"""
    try:
        post = await PostService(db).get_post_or_404(post_id)
        return await FeedService(db).assemble_one(post, current_user.id)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Get post error: {e}")
        raise Internal("Failed to get post")

@router.delete("/{post_id}", response_model=DeleteResponse)
async def delete_post(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete one of the caller's posts along with its likes and comments"""
    try:
        await PostService(db).delete_post(post_id, current_user.id)
        return DeleteResponse(success=True)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Delete post error: {e}")
        raise Internal("Failed to delete post")
