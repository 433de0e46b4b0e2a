"""
User domain model.
Represents a client or an admin of the agency.
"""

from dataclasses import dataclass
from typing import Optional

from agency_api.domain.models.base import (
    BaseEntity,
    Email,
    UserRole,
    ValidationError,
)


@dataclass(eq=False)
class User(BaseEntity):
    """A person who signs in to the dashboard."""

    name: str
    email: str
    role: UserRole = UserRole.CLIENT
    company: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True

    def __post_init__(self):
        super().__post_init__()
        self.role = UserRole(self.role)

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Name is required", "name")
        Email(self.email)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_client(self) -> bool:
        return self.role == UserRole.CLIENT

    def to_summary(self) -> dict:
        """Reference shape used when another document embeds a user."""
        return {"id": self.id, "name": self.name, "email": self.email}
