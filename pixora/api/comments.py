from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from pixora.errors import PixoraError, Internal
from pixora.schemas.comment_schema import CommentCreate
from pixora.schemas.post_schema import PostView
from pixora.services.comment_service import CommentService
from pixora.services.post_service import PostService
from pixora.services.feed_service import FeedService
from pixora.services.auth_service import get_current_user
from pixora.db.session import get_db
from pixora.db.base import MAX_ID
from pixora.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "/{post_id}/comments",
    response_model=PostView,
    status_code=status.HTTP_201_CREATED
)
async def add_comment(
    comment_data: CommentCreate,
    post_id: int = Path(..., ge=1, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Comment on a post"""
    try:
        post = await PostService(db).get_post_or_404(post_id)
        await CommentService(db).create_comment(post, current_user.id, comment_data.text)
        return await FeedService(db).assemble_one(post, current_user.id)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Add comment error: {e}")
        raise Internal("Failed to add comment")

@router.delete("/{post_id}/comments/{comment_id}", response_model=PostView)
async def delete_comment(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    comment_id: int = Path(..., ge=1, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a comment; allowed for its author and for the post's author"""
    try:
        post = await PostService(db).get_post_or_404(post_id)
        await CommentService(db).delete_comment(post, comment_id, current_user.id)
        return await FeedService(db).assemble_one(post, current_user.id)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Delete comment error: {e}")
        raise Internal("Failed to delete comment")
