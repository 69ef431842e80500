"""Summary persistence service."""
from typing import Any, Dict, List, Mapping, Optional, Union

from app.db.models import Summary
from app.services.persistence.base import RecordPersistenceService
from app.services.persistence.patches import SummaryPatch


class SummaryPersistenceService(RecordPersistenceService):
    """Service for persisting generated summaries."""

    model = Summary
    id_attr = "summary_id"
    id_prefix = "sum"
    patch_model = SummaryPatch

    async def create_summary(
        self,
        call_id: str,
        summary_text: str,
        model: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Summary:
        """Persist a summary for a call."""
        return await self._create(
            call_id=call_id,
            summary_text=summary_text,
            model=model,
            metadata_=metadata or {},
        )

    async def get_summary(self, summary_id: str) -> Optional[Summary]:
        return await self._get(summary_id)

    async def update_summary(
        self, summary_id: str, updates: Union[SummaryPatch, Mapping[str, Any]]
    ) -> Summary:
        return await self._update(summary_id, updates)

    async def list_summaries_by_call(self, call_id: str, limit: int = 20) -> List[Summary]:
        return await self._list(Summary.call_id == call_id, limit=limit)
