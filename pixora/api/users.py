from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from pixora.errors import PixoraError, Internal
from pixora.schemas.user_schema import UserMe, UserPublic, UserUpdate
from pixora.services.user_service import UserService
from pixora.services.auth_service import get_current_user
from pixora.db.session import get_db
from pixora.models.user import User
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=UserMe)
async def read_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Current user with post and like counts"""
    try:
        stats = await UserService(db).get_stats(current_user.id)
        return UserMe(
            **UserPublic.model_validate(current_user).model_dump(),
            stats=stats,
        )
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"/me error: {e}")
        raise Internal("Failed to fetch user")

@router.put("", response_model=UserPublic)
async def update_me(
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update the caller's display name, bio or avatar"""
    try:
        user = await UserService(db).update_profile(current_user, user_update)
        return UserPublic.model_validate(user)
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Update profile error: {e}")
        raise Internal("Update failed")
