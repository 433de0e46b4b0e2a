"""
Infrastructure layer for the agency management API.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy)
- Bearer token authentication (JWT)
- Email delivery (SMTP with Jinja2 templates)
- Web push (VAPID)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
