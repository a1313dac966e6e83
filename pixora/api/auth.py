from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from pixora.errors import PixoraError, Internal
from pixora.schemas.auth_schema import RegisterRequest, LoginRequest, TokenResponse
from pixora.schemas.user_schema import UserPublic
from pixora.services.auth_service import AuthService
from pixora.db.session import get_db
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user and sign them in"""
    try:
        auth_service = AuthService(db)
        user = await auth_service.register(user_data)
        
        return TokenResponse(
            token=auth_service.create_access_token(user.id),
            user=UserPublic.model_validate(user),
        )
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Registration error: {e}")
        raise Internal("Registration failed")

@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Login user and return a token"""
    try:
        auth_service = AuthService(db)
        
        user = await auth_service.authenticate_user(
            credentials.username,
            credentials.password
        )
        
        return TokenResponse(
            token=auth_service.create_access_token(user.id),
            user=UserPublic.model_validate(user),
        )
    except PixoraError:
        raise
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise Internal("Login failed")
