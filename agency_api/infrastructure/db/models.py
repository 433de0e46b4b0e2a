"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Float, ForeignKey, JSON, Enum as SQLEnum, Index,
)
from sqlalchemy.orm import relationship

from agency_api.domain.models.base import UserRole, Priority, utcnow, new_id
from agency_api.domain.models.contact import ContactStatus, ContactSubject
from agency_api.domain.models.feedback import FeedbackStatus, ServiceCategory
from agency_api.domain.models.invoice import InvoiceStatus, PaymentMethod
from agency_api.domain.models.message import MessageStatus
from agency_api.domain.models.notification import NotificationType
from agency_api.domain.models.project import ProjectStatus, ProjectCategory

from .database import Base


def _enum(enum_cls):
    """Store enum values (e.g. "in-progress") rather than member names."""
    return SQLEnum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=32,
    )


class UserModel(Base):
    """User table"""
    __tablename__ = 'users'

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(_enum(UserRole), nullable=False, default=UserRole.CLIENT)
    company = Column(String(100))
    phone = Column(String(50))
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    projects = relationship("ProjectModel", back_populates="client", passive_deletes=True)

    __table_args__ = (
        Index('idx_users_role_active', 'role', 'is_active'),
    )


class ProjectModel(Base):
    """Project table"""
    __tablename__ = 'projects'

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    client_id = Column(String(32), ForeignKey('users.id'), nullable=False)
    status = Column(_enum(ProjectStatus), nullable=False, default=ProjectStatus.PLANNING)
    priority = Column(_enum(Priority), nullable=False, default=Priority.MEDIUM)
    category = Column(_enum(ProjectCategory), nullable=False)
    start_date = Column(DateTime)
    deadline = Column(DateTime, nullable=False)
    completed_date = Column(DateTime)
    budget = Column(Float)
    progress = Column(Integer, nullable=False, default=0)
    notes = Column(JSON, nullable=False, default=list)

    # Portfolio showcase
    featured = Column(Boolean, nullable=False, default=False)
    technologies = Column(JSON, nullable=False, default=list)
    link = Column(String(255))
    github = Column(String(255))
    users_label = Column(String(20), nullable=False, default="10+")
    rating = Column(Float, nullable=False, default=4.8)
    completion_year = Column(String(4))

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    client = relationship("UserModel", back_populates="projects")
    invoices = relationship("InvoiceModel", back_populates="project", passive_deletes=True)

    __table_args__ = (
        Index('idx_projects_client_status', 'client_id', 'status'),
    )


class InvoiceModel(Base):
    """Invoice table"""
    __tablename__ = 'invoices'

    id = Column(String(32), primary_key=True, default=new_id)
    invoice_number = Column(String(20), nullable=False, unique=True)
    client_id = Column(String(32), ForeignKey('users.id'), nullable=False)
    project_id = Column(String(32), ForeignKey('projects.id'), nullable=False)

    # Invoice details
    amount = Column(Float, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(_enum(InvoiceStatus), nullable=False, default=InvoiceStatus.DRAFT)
    payment_method = Column(_enum(PaymentMethod))
    notes = Column(Text)

    # Line items as a list of {description, quantity, rate, amount}
    items = Column(JSON, nullable=False, default=list)

    # Derived amounts
    tax_rate = Column(Float, nullable=False, default=0)
    tax_amount = Column(Float, nullable=False, default=0)
    subtotal = Column(Float, nullable=False, default=0)
    total = Column(Float, nullable=False, default=0)

    # Dates
    issue_date = Column(DateTime, nullable=False, default=utcnow)
    due_date = Column(DateTime, nullable=False)
    payment_date = Column(DateTime)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    client = relationship("UserModel")
    project = relationship("ProjectModel", back_populates="invoices")

    __table_args__ = (
        Index('idx_invoices_client_status_issued', 'client_id', 'status', 'issue_date'),
    )


class NotificationModel(Base):
    """Notification table, one row per recipient"""
    __tablename__ = 'notifications'

    id = Column(String(32), primary_key=True, default=new_id)
    recipient_id = Column(String(32), ForeignKey('users.id'), nullable=False)
    sender_id = Column(String(32), ForeignKey('users.id'))
    title = Column(String(100), nullable=False)
    message = Column(String(500), nullable=False)
    type = Column(_enum(NotificationType), nullable=False, default=NotificationType.INFO)
    priority = Column(_enum(Priority), nullable=False, default=Priority.MEDIUM)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime)

    related_project_id = Column(String(32))
    related_invoice_id = Column(String(32))
    related_message_id = Column(String(32))
    action_url = Column(String(500))
    action_text = Column(String(100))
    expires_at = Column(DateTime)

    # "metadata" is reserved on declarative classes
    meta = Column('metadata', JSON, default=dict)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_notifications_recipient_read_created', 'recipient_id', 'is_read', 'created_at'),
        Index('idx_notifications_expires', 'expires_at'),
        Index('idx_notifications_sender', 'sender_id'),
    )


class MessageModel(Base):
    """Message table"""
    __tablename__ = 'messages'

    id = Column(String(32), primary_key=True, default=new_id)
    from_id = Column(String(32), ForeignKey('users.id'), nullable=False)
    to_id = Column(String(32), ForeignKey('users.id'))
    from_role = Column(_enum(UserRole), nullable=False)
    to_role = Column(_enum(UserRole), nullable=False)
    subject = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    project_id = Column(String(32), ForeignKey('projects.id'))
    status = Column(_enum(MessageStatus), nullable=False, default=MessageStatus.UNREAD)
    priority = Column(_enum(Priority), nullable=False, default=Priority.MEDIUM)
    read_at = Column(DateTime)
    reply_to_id = Column(String(32), ForeignKey('messages.id'))

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_messages_to_role_status', 'to_role', 'status'),
        Index('idx_messages_from', 'from_id'),
    )


class PushSubscriptionModel(Base):
    """Web-push subscription table"""
    __tablename__ = 'push_subscriptions'

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey('users.id'), nullable=False)
    endpoint = Column(String(1000), nullable=False, unique=True)
    p256dh = Column(String(255), nullable=False)
    auth = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_used_at = Column(DateTime, default=utcnow)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_push_subscriptions_user_active', 'user_id', 'is_active'),
    )


class ContactModel(Base):
    """Contact form submissions"""
    __tablename__ = 'contacts'

    id = Column(String(32), primary_key=True, default=new_id)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    company = Column(String(100), default="")
    subject = Column(_enum(ContactSubject), nullable=False)
    message = Column(String(2000), nullable=False)
    status = Column(_enum(ContactStatus), nullable=False, default=ContactStatus.UNREAD)
    admin_notes = Column(Text, default="")

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_contacts_status_created', 'status', 'created_at'),
    )


class FeedbackModel(Base):
    """Client feedback table"""
    __tablename__ = 'feedback'

    id = Column(String(32), primary_key=True, default=new_id)
    client_id = Column(String(32), ForeignKey('users.id'), nullable=False)
    project_id = Column(String(32), ForeignKey('projects.id'))
    rating = Column(Integer, nullable=False)
    title = Column(String(100), nullable=False)
    content = Column(String(1000), nullable=False)
    service_category = Column(_enum(ServiceCategory), nullable=False)
    status = Column(_enum(FeedbackStatus), nullable=False, default=FeedbackStatus.PENDING)
    is_public = Column(Boolean, nullable=False, default=False)
    approved_by = Column(String(32), ForeignKey('users.id'))
    approved_at = Column(DateTime)
    rejection_reason = Column(String(500))
    display_name = Column(String(100))
    company_name = Column(String(100))

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_feedback_status_public', 'status', 'is_public'),
        Index('idx_feedback_client', 'client_id'),
    )
