"""
User mapper for converting between domain entities and database models.
"""

from agency_api.domain.models.user import User
from agency_api.infrastructure.db.models import UserModel


class UserMapper:
    """Maps between User domain entity and UserModel database model."""

    def domain_to_model(self, user: User) -> UserModel:
        model = UserModel(id=user.id)
        self.update_model(model, user)
        return model

    def update_model(self, model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.role = user.role
        model.company = user.company
        model.phone = user.phone
        model.is_active = user.is_active
        model.created_at = user.created_at
        model.updated_at = user.updated_at

    def model_to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            company=model.company,
            phone=model.phone,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
