"""
Repository pattern for data access.

Provides clean separation between template storage and the extraction
engine: templates leave the store validated and converted to core values.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from api.schemas import RecurringDocSchema
from core.models import Template
from data.db_models import RecurringDocument

logger = logging.getLogger(__name__)


class TemplateRepository:
    """Repository for recurring document templates."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, user_id: str, payload: dict) -> RecurringDocument:
        """
        Validate and store a template at the end of the user's list.

        Raises:
            pydantic.ValidationError: If the template is malformed
        """
        schema = RecurringDocSchema.model_validate(payload)
        position = self.session.query(RecurringDocument).filter(
            RecurringDocument.user_id == user_id
        ).count()

        record = RecurringDocument(
            user_id=user_id,
            position=position,
            name=schema.name,
            id_phrase=schema.id_phrase,
            id_phrase2=schema.id_phrase2,
            definition=schema.model_dump(
                by_alias=True,
                mode='json',
                include={'header', 'data_rows'}
            )
        )
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        logger.debug("Stored template %r for user %s", record.name, user_id)
        return record

    def list_records(self, user_id: str) -> List[RecurringDocument]:
        """List a user's stored templates in matching order."""
        return self.session.query(RecurringDocument)\
            .filter(RecurringDocument.user_id == user_id)\
            .order_by(RecurringDocument.position, RecurringDocument.created_at)\
            .all()

    def list_for_user(self, user_id: str) -> List[Template]:
        """List a user's templates as core values, in matching order."""
        return [
            RecurringDocSchema.model_validate(record.to_dict()).to_core()
            for record in self.list_records(user_id)
        ]
