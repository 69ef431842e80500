"""Database models."""
from datetime import datetime, timezone
from typing import Any, Dict
from sqlalchemy import Boolean, Column, String, Text, JSON
from sqlalchemy.orm import declarative_base

from app.core.config import settings

Base = declarative_base()


def utc_timestamp() -> str:
    """Return the current UTC time as a sortable ISO-8601 string."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class RecordMixin:
    """Serialization shared by every record kind."""

    # attribute name -> stored field name
    _record_fields = {}

    def to_record(self) -> Dict[str, Any]:
        """Return the record as a flat camelCase mapping."""
        return {field: getattr(self, attr) for attr, field in self._record_fields.items()}


class Call(RecordMixin, Base):
    """Call session model."""

    __tablename__ = settings.calls_table
    _record_fields = {
        "call_id": "callId",
        "caller_id": "callerId",
        "agent_a_id": "agentAId",
        "status": "status",  # active, transferring, transferred, ended
        "created_at": "createdAt",
        "metadata_": "metadata",
        "latest_transcript": "latestTranscript",
        "last_summary_id": "lastSummaryId",
        "transfer_id": "transferId",
    }

    call_id = Column(String, primary_key=True)
    caller_id = Column(String, nullable=True)
    agent_a_id = Column(String, nullable=True, index=True)
    status = Column(String, default="active", nullable=False)
    created_at = Column(String, default=utc_timestamp, nullable=False)
    metadata_ = Column("metadata", JSON, default=dict, nullable=False)
    latest_transcript = Column(Text, nullable=True)
    last_summary_id = Column(String, nullable=True)
    transfer_id = Column(String, nullable=True)


class Summary(RecordMixin, Base):
    """Generated call summary model."""

    __tablename__ = settings.summaries_table
    _record_fields = {
        "summary_id": "summaryId",
        "call_id": "callId",
        "summary_text": "summaryText",
        "model": "model",
        "created_at": "createdAt",
        "metadata_": "metadata",
    }

    summary_id = Column(String, primary_key=True)
    call_id = Column(String, nullable=False, index=True)
    summary_text = Column(Text, nullable=False)
    model = Column(String, nullable=False)
    created_at = Column(String, default=utc_timestamp, nullable=False)
    metadata_ = Column("metadata", JSON, default=dict, nullable=False)


class Transfer(RecordMixin, Base):
    """Warm transfer model."""

    __tablename__ = settings.transfers_table
    _record_fields = {
        "transfer_id": "transferId",
        "call_id": "callId",
        "from_agent_id": "fromAgentId",
        "to_agent": "toAgent",
        "to_agent_type": "toAgentType",
        "transfer_room": "transferRoom",
        "summary_id": "summaryId",
        "status": "status",  # initiated, completed, failed
        "created_at": "createdAt",
        "extra": "extra",
        "idempotency_key": "idempotencyKey",
    }

    transfer_id = Column(String, primary_key=True)
    call_id = Column(String, nullable=False, index=True)
    from_agent_id = Column(String, nullable=True)
    to_agent = Column(String, nullable=True)  # agent id or phone number
    to_agent_type = Column(String, nullable=True)  # agent, phone
    transfer_room = Column(String, nullable=True)
    summary_id = Column(String, nullable=True)
    status = Column(String, default="initiated", nullable=False)
    created_at = Column(String, default=utc_timestamp, nullable=False)
    extra = Column(JSON, default=dict, nullable=False)
    idempotency_key = Column(String, nullable=True, unique=True)


class Transcript(RecordMixin, Base):
    """Call transcript model."""

    __tablename__ = settings.transcripts_table
    _record_fields = {
        "transcript_id": "transcriptId",
        "call_id": "callId",
        "text": "text",
        "source": "source",
        "created_at": "createdAt",
        "metadata_": "metadata",
    }

    transcript_id = Column(String, primary_key=True)
    call_id = Column(String, nullable=False, index=True)
    text = Column(Text, nullable=False)
    source = Column(String, default="manual", nullable=False)
    created_at = Column(String, default=utc_timestamp, nullable=False)
    metadata_ = Column("metadata", JSON, default=dict, nullable=False)


class Agent(RecordMixin, Base):
    """Call-center agent model."""

    __tablename__ = settings.agents_table
    _record_fields = {
        "agent_id": "agentId",
        "name": "name",
        "phone_number": "phoneNumber",
        "active": "active",
        "created_at": "createdAt",
        "metadata_": "metadata",
    }

    agent_id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    phone_number = Column(String, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(String, default=utc_timestamp, nullable=False)
    metadata_ = Column("metadata", JSON, default=dict, nullable=False)
