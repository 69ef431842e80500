"""Unit tests for the record store."""
import re
import pytest

from app.core.errors import InvalidArgument, NotFound
from app.services.persistence.patches import CallPatch, TransferPatch


ISO_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestCallPersistence:
    """Test call persistence service."""

    @pytest.mark.asyncio
    async def test_create_call(self, store):
        """Test creating a new call record."""
        call = await store.calls.create_call(
            caller_id="caller-1", agent_a_id="agent-A", metadata={"channel": "web"}
        )

        assert call.call_id.startswith("call-")
        assert call.caller_id == "caller-1"
        assert call.agent_a_id == "agent-A"
        assert call.status == "active"
        assert call.metadata_ == {"channel": "web"}
        assert ISO_TIMESTAMP.match(call.created_at)

    @pytest.mark.asyncio
    async def test_create_call_generates_unique_ids(self, store):
        call1 = await store.calls.create_call()
        call2 = await store.calls.create_call()

        assert call1.call_id != call2.call_id

    @pytest.mark.asyncio
    async def test_get_call(self, store):
        """Test retrieving call by ID."""
        created = await store.calls.create_call(agent_a_id="agent-A")

        retrieved = await store.calls.get_call(created.call_id)

        assert retrieved is not None
        assert retrieved.call_id == created.call_id

    @pytest.mark.asyncio
    async def test_get_missing_call_returns_none(self, store):
        assert await store.calls.get_call("call-missing") is None

    @pytest.mark.asyncio
    async def test_update_call_applies_only_supplied_fields(self, store):
        """Test partial update leaves other fields untouched."""
        call = await store.calls.create_call(caller_id="caller-1", metadata={"a": 1})
        created_at = call.created_at

        updated = await store.calls.update_call(
            call.call_id, {"status": "transferring", "lastSummaryId": "sum-1"}
        )

        assert updated.status == "transferring"
        assert updated.last_summary_id == "sum-1"
        assert updated.caller_id == "caller-1"
        assert updated.metadata_ == {"a": 1}
        assert updated.transfer_id is None
        assert updated.created_at == created_at

    @pytest.mark.asyncio
    async def test_update_call_accepts_snake_case_and_patch(self, store):
        call = await store.calls.create_call()

        await store.calls.update_call(call.call_id, {"latest_transcript": "hello"})
        updated = await store.calls.update_call(call.call_id, CallPatch(transfer_id="xfer-1"))

        assert updated.latest_transcript == "hello"
        assert updated.transfer_id == "xfer-1"

    @pytest.mark.asyncio
    async def test_update_call_metadata(self, store):
        call = await store.calls.create_call(metadata={"a": 1})

        updated = await store.calls.update_call(call.call_id, {"metadata": {"b": 2}})

        assert updated.metadata_ == {"b": 2}

    @pytest.mark.asyncio
    async def test_update_call_rejects_unknown_fields(self, store):
        call = await store.calls.create_call()

        with pytest.raises(InvalidArgument):
            await store.calls.update_call(call.call_id, {"createdAt": "2000-01-01T00:00:00.000Z"})
        with pytest.raises(InvalidArgument):
            await store.calls.update_call(call.call_id, {"color": "blue"})

    @pytest.mark.asyncio
    async def test_update_call_rejects_other_kind_patch(self, store):
        call = await store.calls.create_call()

        with pytest.raises(InvalidArgument):
            await store.calls.update_call(call.call_id, TransferPatch(status="completed"))

    @pytest.mark.asyncio
    async def test_update_missing_call_raises_not_found(self, store):
        with pytest.raises(NotFound):
            await store.calls.update_call("call-missing", {"status": "ended"})

    @pytest.mark.asyncio
    async def test_list_calls_by_agent_newest_first(self, store, test_db):
        """Test listing is reverse-chronological and bounded."""
        timestamps = [
            "2026-01-01T10:00:00.000Z",
            "2026-01-01T12:00:00.000Z",
            "2026-01-01T11:00:00.000Z",
        ]
        for ts in timestamps:
            call = await store.calls.create_call(agent_a_id="agent-A")
            call.created_at = ts
        await test_db.commit()
        await store.calls.create_call(agent_a_id="agent-Z")

        calls = await store.calls.list_calls_by_agent("agent-A")
        limited = await store.calls.list_calls_by_agent("agent-A", limit=2)

        assert [c.created_at for c in calls] == sorted(timestamps, reverse=True)
        assert len(limited) == 2
        assert limited[0].created_at == "2026-01-01T12:00:00.000Z"

    @pytest.mark.asyncio
    async def test_to_record_uses_stored_field_names(self, store):
        call = await store.calls.create_call(caller_id="caller-1", agent_a_id="agent-A")

        record = call.to_record()

        assert record["callId"] == call.call_id
        assert record["agentAId"] == "agent-A"
        assert record["metadata"] == {}
        assert record["lastSummaryId"] is None


class TestOtherRecordKinds:
    """Test summary, transfer, transcript and agent persistence."""

    @pytest.mark.asyncio
    async def test_create_and_get_summary(self, store):
        summary = await store.summaries.create_summary(
            call_id="call-1", summary_text="- refund", model="gpt-4o-mini"
        )

        retrieved = await store.summaries.get_summary(summary.summary_id)

        assert summary.summary_id.startswith("sum-")
        assert retrieved.summary_text == "- refund"
        assert retrieved.model == "gpt-4o-mini"
        assert retrieved.metadata_ == {}

    @pytest.mark.asyncio
    async def test_list_summaries_by_call(self, store):
        await store.summaries.create_summary(call_id="call-1", summary_text="a", model="m")
        await store.summaries.create_summary(call_id="call-1", summary_text="b", model="m")
        await store.summaries.create_summary(call_id="call-2", summary_text="c", model="m")

        summaries = await store.summaries.list_summaries_by_call("call-1")

        assert {s.summary_text for s in summaries} == {"a", "b"}

    @pytest.mark.asyncio
    async def test_create_transfer_defaults(self, store):
        transfer = await store.transfers.create_transfer(
            call_id="call-1",
            from_agent_id="agent-A",
            to_agent=None,
            to_agent_type=None,
            transfer_room="transfer-1",
            summary_id="sum-1",
        )

        assert transfer.transfer_id.startswith("xfer-")
        assert transfer.status == "initiated"
        assert transfer.extra == {}
        assert transfer.to_agent is None

    @pytest.mark.asyncio
    async def test_update_transfer_status(self, store):
        transfer = await store.transfers.create_transfer(
            call_id="call-1",
            from_agent_id="agent-A",
            to_agent="agent-B",
            to_agent_type="agent",
            transfer_room="transfer-1",
            summary_id="sum-1",
        )

        updated = await store.transfers.update_transfer(transfer.transfer_id, {"status": "completed"})

        assert updated.status == "completed"
        assert updated.to_agent == "agent-B"

    @pytest.mark.asyncio
    async def test_get_transfer_by_idempotency_key(self, store):
        transfer = await store.transfers.create_transfer(
            call_id="call-1",
            from_agent_id="agent-A",
            to_agent=None,
            to_agent_type=None,
            transfer_room="transfer-1",
            summary_id="sum-1",
            idempotency_key="key-1",
        )

        found = await store.transfers.get_transfer_by_idempotency_key("key-1")

        assert found.transfer_id == transfer.transfer_id
        assert await store.transfers.get_transfer_by_idempotency_key("key-2") is None

    @pytest.mark.asyncio
    async def test_create_transcript(self, store):
        transcript = await store.transcripts.create_transcript(call_id="call-1", text="Hi there")

        assert transcript.transcript_id.startswith("tx-")
        assert transcript.source == "manual"
        transcripts = await store.transcripts.list_transcripts_by_call("call-1")
        assert [t.transcript_id for t in transcripts] == [transcript.transcript_id]

    @pytest.mark.asyncio
    async def test_create_transcript_requires_text(self, store):
        with pytest.raises(InvalidArgument):
            await store.transcripts.create_transcript(call_id="call-1", text="")

    @pytest.mark.asyncio
    async def test_create_and_update_agent(self, store):
        agent = await store.agents.create_agent(name="Dana", phone_number="+15550100")

        updated = await store.agents.update_agent(agent.agent_id, {"active": False})

        assert agent.agent_id.startswith("agent-")
        assert updated.active is False
        assert updated.name == "Dana"
        assert updated.phone_number == "+15550100"

    @pytest.mark.asyncio
    async def test_list_agents_filters_active(self, store):
        dana = await store.agents.create_agent(name="Dana")
        lee = await store.agents.create_agent(name="Lee")
        await store.agents.update_agent(lee.agent_id, {"active": False})

        active = await store.agents.list_agents()
        everyone = await store.agents.list_agents(active=None)

        assert [a.agent_id for a in active] == [dana.agent_id]
        assert len(everyone) == 2

    @pytest.mark.asyncio
    async def test_create_agent_requires_name(self, store):
        with pytest.raises(InvalidArgument):
            await store.agents.create_agent(name="")


@pytest.mark.parametrize("kind", ["calls", "summaries", "transfers", "transcripts", "agents"])
@pytest.mark.parametrize("updates", [{}, None])
@pytest.mark.asyncio
async def test_empty_update_fails_for_every_kind(store, kind, updates):
    """An update with no fields is an error, never a silent no-op."""
    service = getattr(store, kind)
    update = getattr(service, f"update_{service.kind}")

    with pytest.raises(InvalidArgument):
        await update("any-id", updates)


@pytest.mark.parametrize(
    "kind, updates",
    [
        ("calls", {"status": None}),
        ("calls", {"metadata": None}),
        ("agents", {"name": None}),
        ("agents", {"active": None}),
        ("agents", {"metadata": None}),
        ("transfers", {"status": None}),
        ("transfers", {"extra": None}),
        ("summaries", {"metadata": None}),
        ("transcripts", {"metadata": None}),
    ],
)
@pytest.mark.asyncio
async def test_null_for_required_field_is_invalid(store, kind, updates):
    """Required fields can be left out of an update but not set to null."""
    service = getattr(store, kind)
    update = getattr(service, f"update_{service.kind}")

    with pytest.raises(InvalidArgument):
        await update("any-id", updates)


@pytest.mark.asyncio
async def test_null_status_leaves_call_unchanged(store):
    call = await store.calls.create_call()

    with pytest.raises(InvalidArgument):
        await store.calls.update_call(call.call_id, {"status": None, "transferId": "xfer-1"})

    stored = await store.calls.get_call(call.call_id)
    assert stored.status == "active"
    assert stored.transfer_id is None


@pytest.mark.asyncio
async def test_nullable_call_fields_can_be_cleared(store):
    call = await store.calls.create_call(caller_id="caller-1")
    await store.calls.update_call(call.call_id, {"lastSummaryId": "sum-1"})

    updated = await store.calls.update_call(
        call.call_id, {"lastSummaryId": None, "callerId": None}
    )

    assert updated.last_summary_id is None
    assert updated.caller_id is None
    assert updated.status == "active"
