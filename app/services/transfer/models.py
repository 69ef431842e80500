"""Transfer workflow models."""
from typing import Literal, Optional, Tuple, Union
from pydantic import BaseModel


class AgentTarget(BaseModel):
    """Transfer to a known agent."""

    kind: Literal["agent"] = "agent"
    agent_id: str


class PhoneTarget(BaseModel):
    """Transfer to a raw phone number."""

    kind: Literal["phone"] = "phone"
    phone_number: str


class UnassignedTarget(BaseModel):
    """No target chosen yet; someone claims the second seat later."""

    kind: Literal["unassigned"] = "unassigned"


TransferTarget = Union[AgentTarget, PhoneTarget, UnassignedTarget]


def resolve_target(
    to_agent_id: Optional[str] = None, to_agent_phone: Optional[str] = None
) -> TransferTarget:
    """Pick the transfer target; an agent id wins over a phone number."""
    if to_agent_id:
        return AgentTarget(agent_id=to_agent_id)
    if to_agent_phone:
        return PhoneTarget(phone_number=to_agent_phone)
    return UnassignedTarget()


def target_to_fields(target: TransferTarget) -> Tuple[Optional[str], Optional[str]]:
    """Return the stored (toAgent, toAgentType) pair for a target."""
    if isinstance(target, AgentTarget):
        return target.agent_id, target.kind
    if isinstance(target, PhoneTarget):
        return target.phone_number, target.kind
    return None, None


def target_from_fields(to_agent: Optional[str], to_agent_type: Optional[str]) -> TransferTarget:
    """Rebuild a target from stored transfer fields."""
    if not to_agent:
        return UnassignedTarget()
    if to_agent_type == "phone":
        return PhoneTarget(phone_number=to_agent)
    return AgentTarget(agent_id=to_agent)


class TransferResult(BaseModel):
    """Everything the two agents need to meet in the transfer room."""

    transfer_id: str
    transfer_room: str
    summary_id: str
    token_a: str
    token_b: str
    summary_text: str
