"""Warm transfer API endpoints."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.dependencies import get_transfer_orchestrator
from app.core.errors import InvalidArgument, ServiceError
from app.services.transfer.orchestrator import TransferOrchestrator


router = APIRouter()
logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Model exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InitiateTransferRequest(CamelModel):
    """Initiate transfer request model."""

    # Required fields are checked by the workflow so a missing one is a 400
    call_id: Optional[str] = None
    agent_a_id: Optional[str] = None
    agent_b_id: Optional[str] = None
    transcript_text: Optional[str] = None
    to_agent_phone: Optional[str] = None
    idempotency_key: Optional[str] = None


class TransferInfo(CamelModel):
    transfer_id: str
    transfer_room: str
    summary_id: str


class TransferTokens(CamelModel):
    token_a: str
    token_b: str


class InitiateTransferResponse(CamelModel):
    """Initiate transfer response model."""

    ok: bool = True
    transfer: TransferInfo
    tokens: TransferTokens
    summary_text: str


@router.post(
    "/api/transfers/initiate",
    response_model=InitiateTransferResponse,
    status_code=201,
)
async def initiate_transfer(
    body: InitiateTransferRequest,
    request: Request,
    orchestrator: TransferOrchestrator = Depends(get_transfer_orchestrator),
):
    """Start a warm transfer of a call to another agent."""
    logger.info(
        f"[TRANSFERS] Initiate requested - call: {body.call_id}, from: {body.agent_a_id}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        result = await orchestrator.initiate_transfer(
            call_id=body.call_id,
            from_agent_id=body.agent_a_id,
            to_agent_id=body.agent_b_id,
            to_agent_phone=body.to_agent_phone,
            transcript_text=body.transcript_text,
            idempotency_key=body.idempotency_key,
        )
    except InvalidArgument as e:
        logger.warning(f"[TRANSFERS] Rejected initiate request - {e}")
        raise
    except ServiceError as e:
        logger.error(
            f"[TRANSFERS] Error initiating transfer - call: {body.call_id}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise

    return InitiateTransferResponse(
        transfer=TransferInfo(
            transfer_id=result.transfer_id,
            transfer_room=result.transfer_room,
            summary_id=result.summary_id,
        ),
        tokens=TransferTokens(token_a=result.token_a, token_b=result.token_b),
        summary_text=result.summary_text,
    )
