"""
Authentication models for the Interview AI service.

The account service issues JWTs; this service only validates them and
resolves the caller's user id.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """
    JWT token payload structure.
    
    Required claims:
        - exp: Expiration timestamp
        - sub: User ID, or the legacy ``{"user": {"id": ...}}`` claim
        
    Optional claims:
        - iat, iss: Issued-at timestamp and issuer
        - name, email: Display information
    """
    exp: float = Field(..., description="Expiration timestamp (Unix epoch, may be fractional)")
    sub: Optional[str] = Field(default=None, description="Subject - user ID")
    user: Optional[Dict[str, Any]] = Field(default=None, description="Legacy user claim")
    
    iat: Optional[float] = Field(default=None, description="Issued at timestamp")
    iss: Optional[str] = Field(default=None, description="Issuer identifier")
    
    name: Optional[str] = Field(default=None, description="User display name")
    email: Optional[str] = Field(default=None, description="User email")
    
    @property
    def user_id(self) -> Optional[str]:
        """Subject claim, falling back to the legacy user.id claim."""
        if self.sub:
            return self.sub
        if self.user and self.user.get("id") is not None:
            return str(self.user["id"])
        return None


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user.
    
    This is injected into route handlers after successful authentication.
    """
    user_id: str = Field(..., description="User ID from token")
    name: Optional[str] = None
    email: Optional[str] = None
    token_exp: int = Field(..., description="Token expiration timestamp")
    token_iss: Optional[str] = None


class AuthConfig(BaseModel):
    """Authentication configuration."""
    secret_key: str = Field(..., description="JWT secret key (shared with the account service)")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    verify_exp: bool = Field(default=True, description="Verify token expiration")
    leeway: int = Field(default=30, description="Leeway for exp/iat validation")
