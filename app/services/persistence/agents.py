"""Agent persistence service."""
from typing import Any, Dict, List, Mapping, Optional, Union

from app.core.errors import InvalidArgument
from app.db.models import Agent
from app.services.persistence.base import RecordPersistenceService
from app.services.persistence.patches import AgentPatch


class AgentPersistenceService(RecordPersistenceService):
    """Service for persisting call-center agents."""

    model = Agent
    id_attr = "agent_id"
    id_prefix = "agent"
    patch_model = AgentPatch

    async def create_agent(
        self,
        name: str,
        phone_number: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Agent:
        """Create a new active agent."""
        if not name:
            raise InvalidArgument("name required to create agent")
        return await self._create(
            name=name,
            phone_number=phone_number,
            active=True,
            metadata_=metadata or {},
        )

    async def get_agent(self, agent_id: str) -> Optional[Agent]:
        return await self._get(agent_id)

    async def update_agent(
        self, agent_id: str, updates: Union[AgentPatch, Mapping[str, Any]]
    ) -> Agent:
        return await self._update(agent_id, updates)

    async def list_agents(self, active: Optional[bool] = True, limit: int = 100) -> List[Agent]:
        """List agents, optionally filtered by the active flag."""
        criteria = [] if active is None else [Agent.active == active]
        return await self._list(*criteria, limit=limit)
