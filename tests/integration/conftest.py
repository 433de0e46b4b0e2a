"""
Fixtures for API tests.
Each test gets a fresh application bound to its own in-memory database.
"""

from datetime import datetime
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agency_api.config import Settings, get_settings
from agency_api.domain.models.base import UserRole
from agency_api.domain.models.project import Project, ProjectCategory, ProjectStatus
from agency_api.domain.models.user import User
from agency_api.infrastructure.auth.jwt_handler import JWTHandler
from agency_api.infrastructure.db.database import build_engine, create_all_tables, get_db
from agency_api.infrastructure.push import push_service as push_module
from agency_api.infrastructure.repositories import (
    SQLAlchemyProjectRepository,
    SQLAlchemyUserRepository,
)
from agency_api.main import create_application


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_all_tables(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def pushed(monkeypatch):
    """Records every web-push attempt instead of contacting a push service."""
    calls = []

    class Response:
        status_code = 201

    def fake_webpush(**kwargs):
        calls.append(kwargs)
        return Response()

    monkeypatch.setattr(push_module, "webpush", fake_webpush)
    return calls


@pytest.fixture
def app(session_factory, pushed):
    settings = Settings(
        database_url="sqlite://",
        environment="testing",
        vapid_public_key="test-public-key",
        vapid_private_key="test-private-key",
        frontend_url="https://portal.example.com",
        admin_email="owner@example.com",
    )
    application = create_application(settings)

    def override_get_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def settle(client):
    """Wait for fire-and-forget deliveries scheduled by earlier requests."""
    def wait():
        client.portal.call(client.app.state.dispatcher.wait_for_pending)
    return wait


@pytest.fixture
def sent_emails(app):
    return app.state.email_service.sent_emails


class Seeder:
    """Writes fixtures straight to the database."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self.jwt = JWTHandler(get_settings())

    def user(self, name: str, email: str, role: UserRole = UserRole.CLIENT, is_active: bool = True) -> User:
        session = self.session_factory()
        try:
            user = SQLAlchemyUserRepository(session).save(
                User(name=name, email=email, role=role, is_active=is_active)
            )
            session.commit()
            return user
        finally:
            session.close()

    def project(self, client: User, title: str = "Company website",
                status: ProjectStatus = ProjectStatus.IN_PROGRESS, **fields) -> Project:
        session = self.session_factory()
        try:
            values = {
                "title": title,
                "description": "Marketing site",
                "client_id": client.id,
                "category": ProjectCategory.WEB_DEVELOPMENT,
                "deadline": datetime(2030, 6, 30),
                "status": status,
            }
            values.update(fields)
            project = SQLAlchemyProjectRepository(session).save(Project(**values))
            session.commit()
            return project
        finally:
            session.close()

    def headers(self, user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.jwt.create_access_token(user.id)}"}


@pytest.fixture
def seed(session_factory):
    return Seeder(session_factory)


@pytest.fixture
def admin(seed):
    return seed.user("Ada Admin", "ada@example.com", UserRole.ADMIN)


@pytest.fixture
def client_user(seed):
    return seed.user("Dana Client", "dana@example.com")


@pytest.fixture
def other_client(seed):
    return seed.user("Lee Client", "lee@example.com")
