from .database import Database, get_database, reset_database
from .migrations import init_db
from .models import OverlayDocument
from .utils import get_db, transaction_scope

__all__ = [
    "Database",
    "get_database",
    "reset_database",
    "init_db",
    "OverlayDocument",
    "get_db",
    "transaction_scope",
]
