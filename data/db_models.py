"""
Database models for recurring document template storage.

Each row stores one user's template: its identifying phrases as columns and
the header/data row definition as JSON, in the camelCase shape the template
schemas validate.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime, JSON, UniqueConstraint
from sqlalchemy.ext.declarative import declarative_base

Base = declarative_base()


def generate_uuid():
    """Generate UUID string for primary keys."""
    return str(uuid.uuid4())


class RecurringDocument(Base):
    """A user's recurring document template."""

    __tablename__ = 'recurring_documents'
    __table_args__ = (
        UniqueConstraint('user_id', 'name', name='uq_recurring_documents_user_name'),
        UniqueConstraint('user_id', 'id_phrase', name='uq_recurring_documents_user_id_phrase'),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, nullable=False, index=True)

    # Matching precedence within the user's template list
    position = Column(Integer, nullable=False, default=0)

    name = Column(String(100), nullable=False)
    id_phrase = Column(String(100), nullable=False)
    id_phrase2 = Column(String(100))

    # {'header': [...], 'dataRows': [...]}
    definition = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<RecurringDocument(id={self.id}, name={self.name}, user={self.user_id})>"

    def to_dict(self):
        """Convert to the template store's camelCase document shape."""
        return {
            'name': self.name,
            'idPhrase': self.id_phrase,
            'idPhrase2': self.id_phrase2,
            'header': self.definition.get('header', []),
            'dataRows': self.definition.get('dataRows', []),
        }
