"""FastAPI dependencies."""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.database import get_db
from app.services.persistence.store import RecordStore
from app.services.rooms.base import RoomProvider
from app.services.rooms.livekit_provider import LiveKitRoomProvider
from app.services.summary.summarizer import SummarizerService
from app.services.transfer.orchestrator import TransferOrchestrator


def build_room_provider() -> RoomProvider:
    """Create the process-wide room provider."""
    return LiveKitRoomProvider(
        api_url=settings.livekit_api_url,
        api_key=settings.livekit_api_key,
        api_secret=settings.livekit_api_secret,
        default_ttl_seconds=settings.token_ttl_seconds,
    )


def build_summarizer() -> SummarizerService:
    """Create the process-wide summarizer."""
    return SummarizerService(
        api_key=settings.openai_api_key,
        model=settings.llm_model,
        max_tokens=settings.summary_max_tokens,
        temperature=settings.summary_temperature,
    )


def get_room_provider(request: Request) -> RoomProvider:
    """Get the room provider created at startup."""
    return request.app.state.room_provider


def get_summarizer(request: Request) -> SummarizerService:
    """Get the summarizer created at startup."""
    return request.app.state.summarizer


def get_record_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """Get a record store bound to the request's session."""
    return RecordStore(db)


def get_transfer_orchestrator(
    store: RecordStore = Depends(get_record_store),
    room_provider: RoomProvider = Depends(get_room_provider),
    summarizer: SummarizerService = Depends(get_summarizer),
) -> TransferOrchestrator:
    """Get a transfer orchestrator for one request."""
    return TransferOrchestrator(
        store=store,
        room_provider=room_provider,
        summarizer=summarizer,
    )
