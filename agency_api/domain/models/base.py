"""
Base entity and value objects for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Dict
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import re
import uuid


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the store keeps naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Generate an opaque document identifier."""
    return uuid.uuid4().hex


class UserRole(str, Enum):
    """Authorization scope of a user."""
    CLIENT = "client"
    ADMIN = "admin"


class Priority(str, Enum):
    """Priority shared by notifications, messages and projects."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass(kw_only=True)
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = utcnow()
        if self.updated_at is None:
            self.updated_at = self.created_at

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utcnow()

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary representation."""
        data = {}
        for key, value in self.__dict__.items():
            if key.startswith('_'):
                continue
            if isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, list):
                data[key] = [
                    item.to_dict() if hasattr(item, "to_dict") else item
                    for item in value
                ]
            else:
                data[key] = value
        return data


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class DuplicateEntityError(BusinessRuleViolation):
    """Exception raised when a unique field value is already taken."""

    def __init__(self, entity_type: str, field: str, value: Any):
        super().__init__(f"{entity_type} with {field} '{value}' already exists")
        self.code = "DUPLICATE_ENTITY"
        self.entity_type = entity_type
        self.field = field


class AuthorizationError(DomainException):
    """Exception raised when the caller lacks the role or ownership required."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, "FORBIDDEN")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any = None, message: Optional[str] = None):
        if message is None:
            message = f"{entity_type} not found"
            if entity_id is not None:
                message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass


EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def validate(self) -> None:
        """Validate email format."""
        if not self.value:
            raise ValidationError("Email cannot be empty", "email")

        if not EMAIL_PATTERN.match(self.value):
            raise ValidationError(f"Invalid email format: {self.value}", "email")

        if len(self.value) > 255:
            raise ValidationError("Email too long (max 255 characters)", "email")

    def __str__(self) -> str:
        return self.value

    @property
    def domain(self) -> str:
        """Get the domain part of the email."""
        return self.value.split('@')[1]


@dataclass(frozen=True)
class InvoiceNumber(ValueObject):
    """Invoice number value object, formatted as PREFIX-0001."""

    prefix: str
    number: int
    width: int = 4

    def validate(self) -> None:
        """Validate invoice number format."""
        if self.number <= 0:
            raise ValidationError("Invoice number must be positive", "number")

        if self.prefix and len(self.prefix) > 10:
            raise ValidationError("Invoice prefix too long (max 10 characters)", "prefix")

    def __str__(self) -> str:
        """Format invoice number as string."""
        padded = str(self.number).zfill(self.width)
        return f"{self.prefix}-{padded}" if self.prefix else padded

