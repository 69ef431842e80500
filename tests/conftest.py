"""Shared test fixtures and configuration."""
import pytest
import os
from typing import List, Optional
from unittest.mock import Mock, AsyncMock
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("LIVEKIT_API_URL", "http://livekit.test")
os.environ.setdefault("LIVEKIT_API_KEY", "test-livekit-key")
os.environ.setdefault("LIVEKIT_API_SECRET", "test-livekit-secret-0123456789abcdef")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from app.main import app
from app.db.database import get_db
from app.db.models import Base
from app.core.dependencies import get_room_provider, get_summarizer
from app.core.errors import ProviderUnavailable
from app.services.persistence.store import RecordStore
from app.services.rooms.base import RoomProvider
from app.services.transfer.orchestrator import TransferOrchestrator


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeRoomProvider(RoomProvider):
    """In-process room provider that records what it was asked to do."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.rooms: set[str] = set()
        self.ensure_calls: List[str] = []
        self.minted: List[tuple] = []

    async def ensure_room(self, room_id: str) -> str:
        self.ensure_calls.append(room_id)
        if self.fail:
            raise ProviderUnavailable("livekit", "room service unreachable")
        self.rooms.add(room_id)
        return room_id

    def mint_token(
        self,
        room_id: str,
        identity: str,
        is_moderator: bool = False,
        ttl_seconds: Optional[int] = None,
    ) -> str:
        self.minted.append((room_id, identity))
        return f"token:{room_id}:{identity}"


class FakeSummarizer:
    """Summarizer that echoes its input."""

    model = "test-model"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.inputs: List[str] = []

    async def summarize(self, transcript_text: str) -> str:
        self.inputs.append(transcript_text)
        if self.fail:
            raise ProviderUnavailable("openai", "quota exceeded")
        return f"- Summary of: {transcript_text}"


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def store(test_db):
    """Record store over the test database."""
    return RecordStore(test_db)


@pytest.fixture
def room_provider():
    return FakeRoomProvider()


@pytest.fixture
def summarizer():
    return FakeSummarizer()


@pytest.fixture
def orchestrator(store, room_provider, summarizer):
    """Transfer orchestrator wired to the test store and fake providers."""
    return TransferOrchestrator(
        store=store,
        room_provider=room_provider,
        summarizer=summarizer,
    )


@pytest.fixture
async def active_call(store):
    """An active call handled by agent-A."""
    return await store.calls.create_call(caller_id="caller-1", agent_a_id="agent-A")


@pytest.fixture
async def api_client(test_db, room_provider, summarizer):
    """HTTP client for the app with test database and fake providers."""
    async def _override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_room_provider] = lambda: room_provider
    app.dependency_overrides[get_summarizer] = lambda: summarizer

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    # Clear overrides
    app.dependency_overrides.clear()


@pytest.fixture
def mock_openai():
    """Mock OpenAI API client."""
    mock_client = Mock()
    mock_completion = Mock()
    mock_completion.choices = [
        Mock(
            message=Mock(
                content="- Customer wants a refund\n- Order #123 arrived damaged"
            )
        )
    ]
    mock_client.chat.completions.create = AsyncMock(return_value=mock_completion)
    return mock_client
