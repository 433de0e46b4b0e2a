"""
Database infrastructure for the agency API.
"""

from .database import engine, SessionLocal, get_db, Base, create_all_tables, drop_all_tables
from .models import *

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "create_all_tables",
    "drop_all_tables",
]
