"""
JWT token handler.
Issues and validates bearer tokens whose subject is the user id.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt as jose_jwt

from agency_api.config import Settings
from agency_api.domain.models.base import ValidationError


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, settings: Settings):
        self.jwt_secret = settings.jwt_secret_key
        self.jwt_algorithm = settings.jwt_algorithm
        self.expire_minutes = settings.jwt_access_token_expire_minutes

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string

        Returns:
            Dict containing token payload

        Raises:
            ValidationError: If token is invalid or expired
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise ValidationError(f"Invalid token: {str(e)}")

        if not payload.get('sub'):
            raise ValidationError("Token missing user ID (sub claim)")

        return payload

    def get_user_id(self, token: str) -> str:
        """
        Extract user ID from JWT token.

        Raises:
            ValidationError: If token is invalid
        """
        return self.verify_token(token)['sub']

    def get_token_payload(self, token: str) -> Optional[Dict[str, Any]]:
        """Get full token payload, or None when the token is invalid."""
        try:
            return self.verify_token(token)
        except ValidationError:
            return None

    def create_access_token(
        self,
        user_id: str,
        role: Optional[str] = None,
        expires_minutes: Optional[int] = None,
    ) -> str:
        """
        Issue a signed access token for a user.

        Used by tooling and tests; the login flow lives outside this service.
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_minutes or self.expire_minutes)

        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        if role:
            payload["role"] = role

        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
