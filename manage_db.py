#!/usr/bin/env python3
"""
Database management script for the agency backend.
Handles schema creation, seeding and housekeeping.
"""

import sys

from agency_api.application.use_cases.notification_use_cases import PurgeExpiredNotificationsUseCase
from agency_api.config import get_settings
from agency_api.domain.models.base import UserRole
from agency_api.domain.models.user import User
from agency_api.infrastructure.auth.jwt_handler import JWTHandler
from agency_api.infrastructure.db.database import SessionLocal, create_all_tables, drop_all_tables
from agency_api.infrastructure.repositories import (
    SQLAlchemyNotificationRepository,
    SQLAlchemyUserRepository,
)


def init_database():
    """Create every missing table."""
    print("Creating tables...")
    create_all_tables()
    print("Database ready.")


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        print("Resetting database...")
        drop_all_tables()
        create_all_tables()
    else:
        print("Database reset cancelled.")


def create_user(email: str, name: str, role: UserRole):
    """Create a user, or promote an existing one to the given role."""
    session = SessionLocal()
    try:
        repository = SQLAlchemyUserRepository(session)
        user = repository.get_by_email(email)
        if user:
            user.role = role
            user.mark_as_updated()
        else:
            user = User(name=name, email=email, role=role)
            user.validate()
        repository.save(user)
        session.commit()
        print(f"{role.value.capitalize()} {user.email} ready (id {user.id})")
    finally:
        session.close()


def issue_token(email: str):
    """Print an access token for an existing user."""
    session = SessionLocal()
    try:
        user = SQLAlchemyUserRepository(session).get_by_email(email)
        if not user:
            print(f"No user with email {email}")
            return
        print(JWTHandler(get_settings()).create_access_token(user.id, user.role.value))
    finally:
        session.close()


def purge_expired_notifications():
    session = SessionLocal()
    try:
        deleted = PurgeExpiredNotificationsUseCase(SQLAlchemyNotificationRepository(session)).execute()
        session.commit()
        print(f"Deleted {deleted} expired notification(s)")
    finally:
        session.close()


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  init                      - Create database tables")
        print("  reset                     - Reset database (WARNING: drops all data)")
        print("  seed-admin <email> [name] - Create or promote an admin user")
        print("  seed-client <email> [name]- Create a client user")
        print("  token <email>             - Print an access token for a user")
        print("  purge-expired             - Delete expired notifications")
        return

    command_name = sys.argv[1]

    if command_name == "init":
        init_database()
    elif command_name == "reset":
        reset_database()
    elif command_name in ("seed-admin", "seed-client"):
        if len(sys.argv) < 3:
            print(f"Usage: python manage_db.py {command_name} <email> [name]")
            return
        email = sys.argv[2]
        name = " ".join(sys.argv[3:]) if len(sys.argv) > 3 else email.split("@")[0]
        role = UserRole.ADMIN if command_name == "seed-admin" else UserRole.CLIENT
        create_user(email, name, role)
    elif command_name == "token":
        if len(sys.argv) < 3:
            print("Usage: python manage_db.py token <email>")
            return
        issue_token(sys.argv[2])
    elif command_name == "purge-expired":
        purge_expired_notifications()
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
