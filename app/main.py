"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.api import health, transfers
from app.api.errors import register_exception_handlers
from app.core.dependencies import build_room_provider, build_summarizer
from app.core.logging import setup_logging
from app.db.database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    app.state.room_provider = build_room_provider()
    app.state.summarizer = build_summarizer()
    yield
    # Shutdown
    await app.state.room_provider.aclose()


app = FastAPI(
    title="Warm Transfer Backend",
    description="Call-center backend for warm transfers between agents",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(transfers.router, tags=["transfers"])
