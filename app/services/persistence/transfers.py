"""Transfer persistence service."""
from typing import Any, Dict, List, Mapping, Optional, Union
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import StorageFailure
from app.db.models import Transfer
from app.services.persistence.base import RecordPersistenceService
from app.services.persistence.patches import TransferPatch


class TransferPersistenceService(RecordPersistenceService):
    """Service for persisting warm transfers."""

    model = Transfer
    id_attr = "transfer_id"
    id_prefix = "xfer"
    patch_model = TransferPatch

    async def create_transfer(
        self,
        call_id: str,
        from_agent_id: Optional[str],
        to_agent: Optional[str],
        to_agent_type: Optional[str],
        transfer_room: Optional[str],
        summary_id: Optional[str],
        extra: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> Transfer:
        """Persist a newly initiated transfer."""
        return await self._create(
            call_id=call_id,
            from_agent_id=from_agent_id,
            to_agent=to_agent,
            to_agent_type=to_agent_type,
            transfer_room=transfer_room,
            summary_id=summary_id,
            status="initiated",
            extra=extra or {},
            idempotency_key=idempotency_key,
        )

    async def get_transfer(self, transfer_id: str) -> Optional[Transfer]:
        return await self._get(transfer_id)

    async def get_transfer_by_idempotency_key(self, key: str) -> Optional[Transfer]:
        """Get the transfer created with the given idempotency key."""
        try:
            result = await self.db.execute(
                select(Transfer).where(Transfer.idempotency_key == key)
            )
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not read transfer for key {key}: {e}") from e
        return result.scalar_one_or_none()

    async def update_transfer(
        self, transfer_id: str, updates: Union[TransferPatch, Mapping[str, Any]]
    ) -> Transfer:
        return await self._update(transfer_id, updates)

    async def list_transfers_by_call(self, call_id: str, limit: int = 20) -> List[Transfer]:
        return await self._list(Transfer.call_id == call_id, limit=limit)
