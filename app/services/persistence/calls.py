"""Call persistence service."""
from typing import Any, Dict, List, Mapping, Optional, Union

from app.db.models import Call
from app.services.persistence.base import RecordPersistenceService
from app.services.persistence.patches import CallPatch


class CallPersistenceService(RecordPersistenceService):
    """Service for persisting call sessions."""

    model = Call
    id_attr = "call_id"
    id_prefix = "call"
    patch_model = CallPatch

    async def create_call(
        self,
        caller_id: Optional[str] = None,
        agent_a_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Call:
        """Create a new active call."""
        return await self._create(
            caller_id=caller_id,
            agent_a_id=agent_a_id,
            status="active",
            metadata_=metadata or {},
        )

    async def get_call(self, call_id: str) -> Optional[Call]:
        """Get call by ID."""
        return await self._get(call_id)

    async def update_call(
        self, call_id: str, updates: Union[CallPatch, Mapping[str, Any]]
    ) -> Call:
        """Apply a partial update to a call."""
        return await self._update(call_id, updates)

    async def list_calls_by_agent(self, agent_a_id: str, limit: int = 50) -> List[Call]:
        """Get an agent's calls, newest first."""
        return await self._list(Call.agent_a_id == agent_a_id, limit=limit)
