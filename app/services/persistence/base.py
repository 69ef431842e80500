"""Shared create/get/update plumbing for record persistence services."""
import logging
from typing import Any, List, Mapping, Optional, Type, Union
from uuid import uuid4
from pydantic import ValidationError
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidArgument, NotFound, StorageFailure
from app.db.models import utc_timestamp
from app.services.persistence.patches import RecordPatch

logger = logging.getLogger(__name__)

# Patch field names that differ from the model attribute they set
_ATTRIBUTE_NAMES = {"metadata": "metadata_"}


class RecordPersistenceService:
    """Base service for one record kind.

    Every write commits a single record. Database errors roll the session back
    and surface as ``StorageFailure``.
    """

    model = None
    id_attr: str = ""
    id_prefix: str = ""
    patch_model: Type[RecordPatch] = RecordPatch

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def kind(self) -> str:
        return self.model.__name__.lower()

    def new_id(self) -> str:
        """Generate a fresh identity for this record kind."""
        return f"{self.id_prefix}-{uuid4()}"

    async def _create(self, **fields: Any):
        """Persist a new record with a generated identity and creation time."""
        record = self.model(
            **{self.id_attr: self.new_id()},
            created_at=utc_timestamp(),
            **fields,
        )
        self.db.add(record)
        await self._commit(f"create {self.kind}", record)
        logger.debug(f"[STORE] Created {self.kind} {getattr(record, self.id_attr)}")
        return record

    async def _get(self, record_id: str):
        """Fetch a record by identity, or None."""
        try:
            return await self.db.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not read {self.kind} {record_id}: {e}") from e

    async def _update(self, record_id: str, updates: Union[RecordPatch, Mapping[str, Any]]):
        """Apply only the supplied fields and return the full updated record."""
        changes = self._validate_patch(updates)
        record = await self._get(record_id)
        if record is None:
            raise NotFound(f"{self.kind} {record_id} not found")

        for name, value in changes.items():
            setattr(record, _ATTRIBUTE_NAMES.get(name, name), value)
        await self._commit(f"update {self.kind} {record_id}", record)
        logger.debug(f"[STORE] Updated {self.kind} {record_id}: {sorted(changes)}")
        return record

    async def _list(self, *criteria, limit: int) -> List[Any]:
        """Return matching records, newest first."""
        try:
            result = await self.db.execute(
                select(self.model)
                .where(*criteria)
                .order_by(desc(self.model.created_at))
                .limit(limit)
            )
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not list {self.kind} records: {e}") from e
        return list(result.scalars().all())

    def _validate_patch(self, updates: Union[RecordPatch, Mapping[str, Any], None]) -> dict:
        if updates is None:
            raise InvalidArgument("No updates provided")
        if isinstance(updates, RecordPatch):
            if not isinstance(updates, self.patch_model):
                raise InvalidArgument(
                    f"{type(updates).__name__} cannot update a {self.kind}"
                )
            patch = updates
        else:
            try:
                patch = self.patch_model.model_validate(dict(updates))
            except ValidationError as e:
                raise InvalidArgument(f"Invalid {self.kind} update: {e}") from e

        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            raise InvalidArgument("No updates provided")
        return changes

    async def _commit(self, action: str, record=None) -> None:
        try:
            await self.db.commit()
            if record is not None:
                await self.db.refresh(record)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageFailure(f"Could not {action}: {e}") from e
