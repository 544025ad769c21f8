"""Wire contracts for the signaling WebSocket."""
from __future__ import annotations

import enum
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClientEventType(str, enum.Enum):
    JOIN_ROOM = "join-room"
    OFFER = "offer"
    ANSWER = "answer"
    ICE_CANDIDATE = "ice-candidate"


class ServerEventType(str, enum.Enum):
    CONNECTED = "connected"
    USER_JOINED = "user-joined"
    EXISTING_USERS = "existing-users"
    USER_LEFT = "user-left"
    OFFER = "offer"
    ANSWER = "answer"
    ICE_CANDIDATE = "ice-candidate"


class SignalKind(str, enum.Enum):
    """Session-negotiation messages relayed between two peers."""

    OFFER = "offer"
    ANSWER = "answer"
    ICE_CANDIDATE = "ice-candidate"


class ClientEnvelope(BaseModel):
    type: ClientEventType
    payload: dict[str, Any] = Field(default_factory=dict)


class JoinRoomRequest(_CamelModel):
    room_id: str = Field(..., description="Room to join")
    user_name: str = Field(..., description="Display name shown to other members")


class OfferMessage(_CamelModel):
    offer: Any
    target_user_id: str


class AnswerMessage(_CamelModel):
    answer: Any
    target_user_id: str


class IceCandidateMessage(_CamelModel):
    candidate: Any
    target_user_id: str


class ConnectedEvent(_CamelModel):
    user_id: str


class PeerInfo(_CamelModel):
    user_id: str
    user_name: str


class OfferEvent(_CamelModel):
    offer: Any
    from_user_id: str
    from_user_name: str | None = None


class AnswerEvent(_CamelModel):
    answer: Any
    from_user_id: str


class IceCandidateEvent(_CamelModel):
    candidate: Any
    from_user_id: str


def envelope(event_type: ServerEventType, payload: BaseModel | Sequence[BaseModel]) -> dict[str, Any]:
    """Wrap an outbound event in the ``{"type", "payload"}`` frame sent to clients."""

    if isinstance(payload, BaseModel):
        body: Any = payload.model_dump(by_alias=True)
    else:
        body = [item.model_dump(by_alias=True) for item in payload]
    return {"type": event_type.value, "payload": body}
