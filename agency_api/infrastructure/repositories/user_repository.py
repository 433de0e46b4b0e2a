"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session

from agency_api.domain.models.base import (
    EntityNotFoundError,
    DuplicateEntityError,
    UserRole,
    new_id,
)
from agency_api.domain.models.user import User
from agency_api.domain.repositories.user_repository import UserRepository
from agency_api.infrastructure.db.models import UserModel
from agency_api.infrastructure.mappers.user_mapper import UserMapper


class SQLAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()

    def save(self, user: User) -> User:
        """Save a user entity."""
        if user.is_new:
            # Check for duplicate email
            existing = self.session.query(UserModel).filter_by(email=user.email).first()
            if existing:
                raise DuplicateEntityError("User", "email", user.email)

            user.id = new_id()
            self.session.add(self.mapper.domain_to_model(user))
        else:
            model = self.session.query(UserModel).filter_by(id=user.id).first()
            if not model:
                raise EntityNotFoundError("User", user.id)
            self.mapper.update_model(model, user)

        self.session.flush()
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        model = self.session.query(UserModel).filter_by(id=user_id).first()
        return self.mapper.model_to_domain(model) if model else None

    def get_by_email(self, email: str) -> Optional[User]:
        model = self.session.query(UserModel).filter_by(email=email.strip().lower()).first()
        return self.mapper.model_to_domain(model) if model else None

    def get_by_ids(self, user_ids: List[str], role: Optional[UserRole] = None) -> List[User]:
        if not user_ids:
            return []

        query = self.session.query(UserModel).filter(UserModel.id.in_(user_ids))
        if role is not None:
            query = query.filter(UserModel.role == role)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def list_by_role(self, role: UserRole, active_only: bool = True) -> List[User]:
        query = self.session.query(UserModel).filter(UserModel.role == role)
        if active_only:
            query = query.filter(UserModel.is_active.is_(True))

        models = query.order_by(UserModel.created_at).all()
        return [self.mapper.model_to_domain(model) for model in models]
