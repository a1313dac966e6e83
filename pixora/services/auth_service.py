from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from pixora.config import settings
from pixora.errors import Conflict, InvalidCredentials, Unauthorized
from pixora.schemas.auth_schema import RegisterRequest, TokenData
from pixora.models.user import User
from pixora.db.session import get_db
from pixora.services.user_service import UserService

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False,
)

class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserService(db)
    
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return pwd_context.verify(plain_password, hashed_password)
    
    def get_password_hash(self, password: str) -> str:
        """Hash a password"""
        return pwd_context.hash(password)
    
    async def register(self, data: RegisterRequest) -> User:
        """Create an account; usernames are unique ignoring case"""
        existing = await self.users.get_user_by_username(data.username)
        if existing:
            raise Conflict("Username already taken")
        
        user = await self.users.create_user(
            username=data.username,
            hashed_password=self.get_password_hash(data.password),
            display_name=data.username,
        )
        logger.info(f"Registered user {user.id} ({user.username})")
        return user
    
    async def authenticate_user(self, username: str, password: str) -> User:
        """Authenticate a user, raising one generic error for any mismatch"""
        user = await self.users.get_user_by_username(username)
        
        if not user or not self.verify_password(password, user.hashed_password):
            raise InvalidCredentials()
        
        return user
    
    def create_access_token(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token"""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        
        expire = datetime.now(timezone.utc) + expires_delta
        to_encode = {"sub": str(user_id), "exp": expire}
        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.ALGORITHM)
    
    def verify_token(self, token: str) -> Optional[TokenData]:
        """Verify a JWT token; signature and expiry are checked by jose"""
        try:
            payload = jwt.decode(token, settings.secret_key, algorithms=[settings.ALGORITHM])
        except JWTError:
            return None
        
        subject = payload.get("sub")
        if subject is None:
            return None
        
        try:
            return TokenData(user_id=int(subject), exp=payload.get("exp"))
        except ValueError:
            return None

async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Dependency to get current authenticated user"""
    if not token:
        raise Unauthorized("No token provided")
    
    auth_service = AuthService(db)
    token_data = auth_service.verify_token(token)
    
    if token_data is None:
        raise Unauthorized("Invalid token")
    
    user = await auth_service.users.get_user_by_id(token_data.user_id)
    
    if user is None:
        raise Unauthorized("Invalid token user")
    
    return user
