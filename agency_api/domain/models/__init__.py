"""
Domain models for the agency management system.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    AuthorizationError,
    EntityNotFoundError,
    DuplicateEntityError,
    ValueObject,
    Email,
    InvoiceNumber,
    UserRole,
    Priority,
)

# Domain entities
from .user import User
from .project import Project, ProjectStatus, ProjectCategory
from .invoice import (
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    InvoiceTotals,
    PaymentMethod,
    compute_invoice_totals,
)
from .notification import (
    Notification,
    NotificationPayload,
    NotificationType,
)
from .message import Message, MessageStatus
from .push_subscription import PushSubscription
from .contact import Contact, ContactStatus, ContactSubject
from .feedback import Feedback, FeedbackStatus, ServiceCategory

__all__ = [
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "AuthorizationError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ValueObject",
    "Email",
    "InvoiceNumber",
    "UserRole",
    "Priority",
    "User",
    "Project",
    "ProjectStatus",
    "ProjectCategory",
    "Invoice",
    "InvoiceLineItem",
    "InvoiceStatus",
    "InvoiceTotals",
    "PaymentMethod",
    "compute_invoice_totals",
    "Notification",
    "NotificationPayload",
    "NotificationType",
    "Message",
    "MessageStatus",
    "PushSubscription",
    "Contact",
    "ContactStatus",
    "ContactSubject",
    "Feedback",
    "FeedbackStatus",
    "ServiceCategory",
]
