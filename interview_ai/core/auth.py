"""
Core authentication module for the Interview AI service.

Validates bearer JWTs issued by the account service and resolves them to
the owner id used by the interview core. Credential storage and token
issuance live outside this service.
"""
import logging
import time
from datetime import timedelta
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError as PydanticValidationError

from interview_ai.core.config import get_settings
from interview_ai.models.auth import (
    TokenPayload,
    AuthenticatedUser,
    AuthConfig,
)

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI
security_scheme = HTTPBearer(
    scheme_name="JWT",
    description="JWT token from the account service. Format: Bearer <token>",
    auto_error=False,
)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_auth_config() -> AuthConfig:
    """Load auth configuration from settings."""
    settings = get_settings()
    
    return AuthConfig(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        verify_exp=True,
        leeway=30,
    )


def decode_token(token: str, config: Optional[AuthConfig] = None) -> TokenPayload:
    """
    Decode and validate a JWT token.
    
    Args:
        token: The JWT token string
        config: Auth configuration (uses default if not provided)
        
    Returns:
        TokenPayload with decoded claims
        
    Raises:
        HTTPException: If token is invalid, expired, or malformed
    """
    if config is None:
        config = get_auth_config()
    
    try:
        payload = jwt.decode(
            token,
            config.secret_key,
            algorithms=[config.algorithm],
            options={
                "verify_exp": config.verify_exp,
                "verify_aud": False,
                "require": ["exp"],
            },
            leeway=timedelta(seconds=config.leeway),
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token expired")
        raise _unauthorized("Token has expired")
    except jwt.DecodeError as e:
        logger.warning(f"Token decode error: {e}")
        raise _unauthorized("Invalid token format")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        raise _unauthorized("Invalid token")
    
    try:
        token_payload = TokenPayload(**payload)
    except PydanticValidationError as e:
        logger.warning(f"Unexpected token claims: {e.error_count()} invalid field(s)")
        raise _unauthorized("Invalid token")
    
    if token_payload.user_id is None:
        logger.warning("Token carries no user id")
        raise _unauthorized("Invalid token")
    
    return token_payload


def create_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[dict] = None,
) -> str:
    """
    Create a JWT token.
    
    Provided for tests and local development. In production the account
    service issues tokens.
    """
    settings = get_settings()
    config = get_auth_config()
    
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)
    
    now_ts = int(time.time())
    payload = {
        "sub": subject,
        "iat": now_ts,
        "exp": now_ts + int(expires_delta.total_seconds()),
        "iss": "interview-ai",
    }
    
    if additional_claims:
        payload.update(additional_claims)
    
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> AuthenticatedUser:
    """
    FastAPI dependency to get the current authenticated user.
    
    When auth_enabled=False in settings, returns a fixed development user.
    """
    settings = get_settings()
    
    if not settings.auth_enabled:
        return AuthenticatedUser(
            user_id="dev-user",
            name="Development User",
            email="dev@localhost",
            token_exp=9999999999,
            token_iss="dev-mode",
        )
    
    if credentials is None:
        raise _unauthorized("Not authenticated")
    
    token_payload = decode_token(credentials.credentials)
    
    return AuthenticatedUser(
        user_id=token_payload.user_id,
        name=token_payload.name,
        email=token_payload.email,
        token_exp=int(token_payload.exp),
        token_iss=token_payload.iss,
    )
