"""
Authentication infrastructure module.
Handles JWT validation, user authentication, and authorization.
"""

from .jwt_handler import JWTHandler
from .dependencies import (
    get_jwt_handler,
    get_current_user,
    get_optional_user,
    require_admin,
    require_client,
    CurrentUser,
    OptionalUser,
    AdminUser,
    ClientUser,
)

__all__ = [
    "JWTHandler",
    "get_jwt_handler",
    "get_current_user",
    "get_optional_user",
    "require_admin",
    "require_client",
    "CurrentUser",
    "OptionalUser",
    "AdminUser",
    "ClientUser",
]
