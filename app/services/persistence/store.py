"""Record store facade grouping the per-kind persistence services."""
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.persistence.agents import AgentPersistenceService
from app.services.persistence.calls import CallPersistenceService
from app.services.persistence.summaries import SummaryPersistenceService
from app.services.persistence.transcripts import TranscriptPersistenceService
from app.services.persistence.transfers import TransferPersistenceService


class RecordStore:
    """Typed accessors for every record kind over one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.calls = CallPersistenceService(db)
        self.summaries = SummaryPersistenceService(db)
        self.transfers = TransferPersistenceService(db)
        self.transcripts = TranscriptPersistenceService(db)
        self.agents = AgentPersistenceService(db)
