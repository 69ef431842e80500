"""Partial-update structures for each record kind.

Only fields that may change after a record is created are listed. Keys are
accepted in either the stored camelCase form or snake_case; anything else is
rejected. Fields in ``not_null`` may be omitted but never set to null.
"""
from typing import Any, ClassVar, Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class RecordPatch(BaseModel):
    """Base patch model."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    not_null: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        nulled = [
            name for name in self.not_null
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"fields cannot be null: {', '.join(nulled)}")
        return self


class CallPatch(RecordPatch):
    """Mutable call fields."""

    not_null: ClassVar[Tuple[str, ...]] = ("status", "metadata")

    status: Optional[str] = None
    caller_id: Optional[str] = None
    agent_a_id: Optional[str] = None
    latest_transcript: Optional[str] = None
    last_summary_id: Optional[str] = None
    transfer_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AgentPatch(RecordPatch):
    """Mutable agent fields."""

    not_null: ClassVar[Tuple[str, ...]] = ("name", "active", "metadata")

    name: Optional[str] = None
    phone_number: Optional[str] = None
    active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


class TransferPatch(RecordPatch):
    """Mutable transfer fields."""

    not_null: ClassVar[Tuple[str, ...]] = ("status", "extra")

    status: Optional[str] = None
    extra: Optional[Dict[str, Any]] = None


class SummaryPatch(RecordPatch):
    """Summaries are immutable apart from their metadata."""

    not_null: ClassVar[Tuple[str, ...]] = ("metadata",)

    metadata: Optional[Dict[str, Any]] = None


class TranscriptPatch(RecordPatch):
    """Transcripts are immutable apart from their metadata."""

    not_null: ClassVar[Tuple[str, ...]] = ("metadata",)

    metadata: Optional[Dict[str, Any]] = None
