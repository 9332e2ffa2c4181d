"""
Template store connection handling.

One DatabaseManager owns the engine and session factory for the store; the
module-level helpers share a lazily created instance configured from
settings.
"""
import logging
from contextlib import contextmanager
from typing import Dict, Generator, List

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from config.settings import settings
from core.models import Template
from .db_models import Base
from .repositories import TemplateRepository

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> Dict:
    if not database_url.startswith('sqlite'):
        return {}
    options = {'connect_args': {'check_same_thread': False}}
    # In-memory databases live on a single connection
    if database_url in ('sqlite://', 'sqlite:///:memory:'):
        options['poolclass'] = StaticPool
    return options


class DatabaseManager:
    """Engine and sessions for one template store."""

    def __init__(self, database_url: str = None):
        """
        Args:
            database_url: SQLAlchemy database URL (default: DATABASE_URL setting)
        """
        self.database_url = database_url or settings.database_url
        self.engine = create_engine(
            self.database_url,
            echo=False,
            **_engine_options(self.database_url)
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_tables(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info("Template store tables ready at %s", self.database_url)

    def drop_tables(self):
        """Drop every template store table. Destroys all stored templates."""
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("Template store tables dropped from %s", self.database_url)

    def table_names(self) -> List[str]:
        return sorted(inspect(self.engine).get_table_names())

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session committed on success and rolled back on error."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def load_templates(self, user_id: str) -> List[Template]:
        """A user's templates as core values, in matching order."""
        with self.session() as session:
            return TemplateRepository(session).list_for_user(user_id)


_db_manager = None


def get_db_manager(database_url: str = None) -> DatabaseManager:
    """Shared manager; `database_url` only applies on the first call."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


def init_database(database_url: str = None):
    get_db_manager(database_url).create_tables()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Session from the shared manager.

    Usage:
        with session_scope() as session:
            TemplateRepository(session).add(user_id, payload)
    """
    with get_db_manager().session() as session:
        yield session
