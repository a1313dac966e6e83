from pydantic import Field, StringConstraints
from typing import Annotated, Optional
from pixora.schemas.base import CamelModel
from pixora.schemas.user_schema import UserPublic

class RegisterRequest(CamelModel):
    """Schema for registration request"""
    username: Annotated[str, StringConstraints(strip_whitespace=True)] = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Username (at least 3 characters)"
    )
    password: str = Field(..., min_length=1, max_length=100, description="Password")

class LoginRequest(CamelModel):
    """Schema for login request"""
    username: Annotated[str, StringConstraints(strip_whitespace=True)] = Field(..., description="Username, matched case-insensitively")
    password: str = Field(..., description="Password")

class TokenResponse(CamelModel):
    """Schema for token response"""
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserPublic

class TokenData(CamelModel):
    """Schema for token payload data"""
    user_id: int = Field(..., description="User ID")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
