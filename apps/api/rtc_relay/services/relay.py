"""Point-to-point forwarding of offers, answers and ICE candidates."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from ..schemas.signaling import (
    AnswerEvent,
    IceCandidateEvent,
    OfferEvent,
    ServerEventType,
    SignalKind,
    envelope,
)
from .registry import ConnectionId

logger = logging.getLogger(__name__)


class Recipient(Protocol):
    def deliver(self, message: dict) -> bool:
        ...


RecipientLookup = Callable[[ConnectionId], Optional[Recipient]]


def build_signal(
    kind: SignalKind,
    payload: Any,
    sender: ConnectionId,
    sender_name: str | None = None,
) -> dict:
    """Return the frame a target receives for a relayed signaling message."""

    if kind is SignalKind.OFFER:
        return envelope(
            ServerEventType.OFFER,
            OfferEvent(offer=payload, from_user_id=str(sender), from_user_name=sender_name),
        )
    if kind is SignalKind.ANSWER:
        return envelope(ServerEventType.ANSWER, AnswerEvent(answer=payload, from_user_id=str(sender)))
    return envelope(
        ServerEventType.ICE_CANDIDATE,
        IceCandidateEvent(candidate=payload, from_user_id=str(sender)),
    )


class SignalingRelay:
    """Forward a signaling payload to one explicitly addressed connection.

    Holds no state of its own; targets are resolved through ``lookup``. A target
    that is not live is dropped without error since peers may vanish at any time.
    """

    def __init__(self, lookup: RecipientLookup) -> None:
        self._lookup = lookup

    def relay(
        self,
        kind: SignalKind,
        payload: Any,
        target: ConnectionId,
        sender: ConnectionId,
        sender_name: str | None = None,
    ) -> bool:
        recipient = self._lookup(target)
        if recipient is None:
            logger.debug("Dropping %s from %s: target %s is not connected", kind.value, sender, target)
            return False
        return recipient.deliver(build_signal(kind, payload, sender, sender_name))
