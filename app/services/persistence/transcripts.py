"""Transcript persistence service."""
from typing import Any, Dict, List, Mapping, Optional, Union

from app.core.errors import InvalidArgument
from app.db.models import Transcript
from app.services.persistence.base import RecordPersistenceService
from app.services.persistence.patches import TranscriptPatch


class TranscriptPersistenceService(RecordPersistenceService):
    """Service for persisting call transcripts."""

    model = Transcript
    id_attr = "transcript_id"
    id_prefix = "tx"
    patch_model = TranscriptPatch

    async def create_transcript(
        self,
        call_id: str,
        text: str,
        source: str = "manual",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Transcript:
        """Persist a transcript for a call."""
        if not call_id or not text:
            raise InvalidArgument("callId and text are required for transcript")
        return await self._create(
            call_id=call_id,
            text=text,
            source=source,
            metadata_=metadata or {},
        )

    async def get_transcript(self, transcript_id: str) -> Optional[Transcript]:
        return await self._get(transcript_id)

    async def update_transcript(
        self, transcript_id: str, updates: Union[TranscriptPatch, Mapping[str, Any]]
    ) -> Transcript:
        return await self._update(transcript_id, updates)

    async def list_transcripts_by_call(self, call_id: str, limit: int = 50) -> List[Transcript]:
        return await self._list(Transcript.call_id == call_id, limit=limit)
