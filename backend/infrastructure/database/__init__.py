from .connection import Database, create_database, get_db
from .models import Base

__all__ = [
    "Base",
    "Database",
    "create_database",
    "get_db",
]
