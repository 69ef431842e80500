"""Warm transfer workflow."""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from uuid import uuid4

from app.core.errors import InvalidArgument, NotFound, StorageFailure
from app.db.models import Transfer
from app.services.persistence.patches import CallPatch
from app.services.persistence.store import RecordStore
from app.services.rooms.base import RoomProvider
from app.services.summary.summarizer import SummarizerService
from app.services.transfer.constants import (
    CALL_STATUS_TRANSFERRING,
    NO_TRANSCRIPT_PLACEHOLDER,
    PLACEHOLDER_AGENT_PREFIX,
    TRANSCRIPT_HINT_MAX_CHARS,
    TRANSFER_ROOM_PREFIX,
    WORKFLOW_ID,
)
from app.services.transfer.models import (
    AgentTarget,
    TransferResult,
    TransferTarget,
    resolve_target,
    target_from_fields,
    target_to_fields,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_step(step: str):
    """Tag store failures with the workflow step that hit them."""
    try:
        yield
    except (StorageFailure, NotFound) as e:
        logger.error(f"[TRANSFER] Storage failure at step '{step}': {e}")
        raise StorageFailure(str(e), step=step) from e


class TransferOrchestrator:
    """
    Drives a warm transfer: new room, handoff summary, transfer record,
    call update and join tokens for both agents.

    Steps run strictly in order. A failure aborts the remaining steps and
    nothing already written is undone.
    """

    def __init__(
        self,
        store: RecordStore,
        room_provider: RoomProvider,
        summarizer: SummarizerService,
    ):
        self.store = store
        self.room_provider = room_provider
        self.summarizer = summarizer

    async def initiate_transfer(
        self,
        call_id: Optional[str],
        from_agent_id: Optional[str],
        to_agent_id: Optional[str] = None,
        to_agent_phone: Optional[str] = None,
        transcript_text: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> TransferResult:
        """
        Start a warm transfer of a call to another agent.

        Args:
            call_id: Call being transferred
            from_agent_id: Agent currently on the call
            to_agent_id: Receiving agent, if known
            to_agent_phone: Receiving phone number, used when no agent id is given
            transcript_text: Transcript to summarize instead of the stored one
            idempotency_key: Replays the earlier transfer created with this key

        Returns:
            TransferResult with the room, record ids, both tokens and the summary
        """
        if not call_id or not from_agent_id:
            raise InvalidArgument("callId and agentAId are required")

        target = resolve_target(to_agent_id, to_agent_phone)
        logger.info(
            f"[TRANSFER] Initiating transfer - call: {call_id}, from: {from_agent_id}, "
            f"target: {target.kind}"
        )

        if idempotency_key:
            async with storage_step("find_transfer"):
                existing = await self.store.transfers.get_transfer_by_idempotency_key(
                    idempotency_key
                )
            if existing is not None:
                return await self._replay(existing, call_id)

        # 1) room for the handoff
        transfer_room = f"{TRANSFER_ROOM_PREFIX}-{uuid4()}"
        transfer_room = await self.room_provider.ensure_room(transfer_room)

        # 2) text to summarize
        source_text = await self._resolve_transcript(call_id, transcript_text)

        # 3) summary
        summary_text = await self.summarizer.summarize(source_text or NO_TRANSCRIPT_PLACEHOLDER)

        # 4) summary and transfer records
        async with storage_step("create_summary"):
            summary = await self.store.summaries.create_summary(
                call_id=call_id,
                summary_text=summary_text,
                model=self.summarizer.model,
                metadata={"generatedBy": WORKFLOW_ID},
            )

        to_agent, to_agent_type = target_to_fields(target)
        hint = source_text[:TRANSCRIPT_HINT_MAX_CHARS] if source_text else None
        async with storage_step("create_transfer"):
            transfer = await self.store.transfers.create_transfer(
                call_id=call_id,
                from_agent_id=from_agent_id,
                to_agent=to_agent,
                to_agent_type=to_agent_type,
                transfer_room=transfer_room,
                summary_id=summary.summary_id,
                extra={"transcriptHint": hint},
                idempotency_key=idempotency_key,
            )

        # 5) point the call at the new transfer
        await self._mark_call_transferring(call_id, transfer)

        logger.info(
            f"[TRANSFER] Transfer {transfer.transfer_id} ready in room {transfer_room}"
        )
        # 6) tokens for both agents
        return self._build_result(transfer, summary_text, from_agent_id, target)

    async def _resolve_transcript(
        self, call_id: str, transcript_text: Optional[str]
    ) -> Optional[str]:
        """Return the inline transcript, else the call's latest one, else None."""
        if transcript_text:
            return transcript_text

        async with storage_step("read_call"):
            call = await self.store.calls.get_call(call_id)
        if call is None:
            logger.warning(f"[TRANSFER] Call {call_id} not found, summarizing without transcript")
            return None
        return call.latest_transcript or None

    async def _mark_call_transferring(self, call_id: str, transfer: Transfer) -> None:
        async with storage_step("update_call"):
            await self.store.calls.update_call(
                call_id,
                CallPatch(
                    status=CALL_STATUS_TRANSFERRING,
                    last_summary_id=transfer.summary_id,
                    transfer_id=transfer.transfer_id,
                ),
            )

    async def _replay(self, transfer: Transfer, call_id: str) -> TransferResult:
        """Finish and return a transfer that was already created with the same key."""
        if transfer.call_id != call_id:
            raise InvalidArgument("idempotencyKey was already used for a different call")

        logger.info(f"[TRANSFER] Replaying transfer {transfer.transfer_id} for call {call_id}")
        await self.room_provider.ensure_room(transfer.transfer_room)

        async with storage_step("read_summary"):
            summary = await self.store.summaries.get_summary(transfer.summary_id)
            if summary is None:
                raise NotFound(f"summary {transfer.summary_id} not found")

        async with storage_step("read_call"):
            call = await self.store.calls.get_call(call_id)
        if call is None or call.transfer_id != transfer.transfer_id:
            await self._mark_call_transferring(call_id, transfer)

        target = target_from_fields(transfer.to_agent, transfer.to_agent_type)
        return self._build_result(transfer, summary.summary_text, transfer.from_agent_id, target)

    def _build_result(
        self,
        transfer: Transfer,
        summary_text: str,
        from_agent_id: str,
        target: TransferTarget,
    ) -> TransferResult:
        if isinstance(target, AgentTarget):
            target_identity = target.agent_id
        else:
            target_identity = f"{PLACEHOLDER_AGENT_PREFIX}-{uuid4()}"

        return TransferResult(
            transfer_id=transfer.transfer_id,
            transfer_room=transfer.transfer_room,
            summary_id=transfer.summary_id,
            token_a=self.room_provider.mint_token(transfer.transfer_room, from_agent_id),
            token_b=self.room_provider.mint_token(transfer.transfer_room, target_identity),
            summary_text=summary_text,
        )
