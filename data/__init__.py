"""Template store - SQLAlchemy models, connections and repository."""

from .db_models import Base, RecurringDocument
from .database import (
    DatabaseManager,
    get_db_manager,
    init_database,
    session_scope,
)
from .repositories import TemplateRepository

__all__ = [
    'Base',
    'RecurringDocument',
    'DatabaseManager',
    'get_db_manager',
    'init_database',
    'session_scope',
    'TemplateRepository',
]
