"""
Authentication dependencies for FastAPI.
Resolves the bearer token to a stored user and enforces roles.
"""

from typing import Optional, Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from agency_api.config import Settings, get_settings
from agency_api.domain.models.base import ValidationError
from agency_api.domain.models.user import User
from agency_api.infrastructure.auth.jwt_handler import JWTHandler
from agency_api.infrastructure.db.database import get_db
from agency_api.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


# Security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


def get_jwt_handler(settings: Annotated[Settings, Depends(get_settings)]) -> JWTHandler:
    """Dependency to get JWT handler."""
    return JWTHandler(settings)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _load_user(token: str, jwt_handler: JWTHandler, db: Session) -> User:
    try:
        user_id = jwt_handler.get_user_id(token)
    except ValidationError as e:
        raise _unauthorized(e.message)

    user = SQLAlchemyUserRepository(db).get_by_id(user_id)
    if not user or not user.is_active:
        raise _unauthorized("Invalid token or user not found")
    return user


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Access token required")
    return _load_user(credentials.credentials, jwt_handler, db)


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)],
    db: Annotated[Session, Depends(get_db)],
) -> Optional[User]:
    """
    FastAPI dependency to optionally get the authenticated user.
    Returns None if no token or invalid token.
    """
    if credentials is None or not credentials.credentials:
        return None
    try:
        return _load_user(credentials.credentials, jwt_handler, db)
    except HTTPException:
        return None


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Only admins may pass."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


async def require_client(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Only clients may pass."""
    if not user.is_client:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Client access required",
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
AdminUser = Annotated[User, Depends(require_admin)]
ClientUser = Annotated[User, Depends(require_client)]
