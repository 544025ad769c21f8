"""In-memory WebRTC signaling manager."""
from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Dict

from ..core.config import settings
from ..schemas.signaling import PeerInfo, ServerEventType, SignalKind, envelope
from .registry import ConnectionId, ConnectionRegistry, User
from .relay import Recipient, SignalingRelay
from .rooms import RoomDirectory

logger = logging.getLogger(__name__)


class ConnectionState(str, enum.Enum):
    CONNECTED = "connected"
    JOINED = "joined"
    DISCONNECTED = "disconnected"


class SignalingManager:
    """Manage connection lifecycles, room presence and peer-to-peer relays.

    The registry and room directory are only touched under ``self._lock``.
    Outbound frames are handed to each connection's ``Recipient``, which must
    queue them without awaiting.
    """

    def __init__(
        self,
        registry: ConnectionRegistry | None = None,
        directory: RoomDirectory | None = None,
        *,
        unknown_user_name: str | None = None,
    ) -> None:
        self._registry = registry if registry is not None else ConnectionRegistry()
        self._directory = directory if directory is not None else RoomDirectory()
        self._recipients: Dict[ConnectionId, Recipient] = {}
        self._relay = SignalingRelay(self._recipients.get)
        self._unknown_user_name = unknown_user_name or settings.unknown_user_name
        self._lock = asyncio.Lock()

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    @property
    def directory(self) -> RoomDirectory:
        return self._directory

    def state_of(self, conn_id: ConnectionId) -> ConnectionState:
        if conn_id in self._registry:
            return ConnectionState.JOINED
        if conn_id in self._recipients:
            return ConnectionState.CONNECTED
        return ConnectionState.DISCONNECTED

    async def connect(self, conn_id: ConnectionId, recipient: Recipient) -> None:
        """Make a freshly opened connection addressable."""

        async with self._lock:
            self._recipients[conn_id] = recipient
        logger.info("User connected: %s", conn_id)

    async def join(self, conn_id: ConnectionId, room_id: str, user_name: str) -> list[PeerInfo]:
        """Join a room, announce the newcomer and send it the current members.

        A connection that already joined a room leaves it first. Returns the
        snapshot sent to the joiner.
        """

        async with self._lock:
            if conn_id not in self._recipients:
                logger.debug("Ignoring join-room from closed connection %s", conn_id)
                return []

            previous = self._registry.get(conn_id)
            if previous is not None:
                self._detach(conn_id, previous)

            self._registry.set(conn_id, room_id, user_name)
            self._directory.join(room_id, conn_id)

            others = self._directory.broadcast_targets(room_id, conn_id)
            self._fan_out(
                others,
                envelope(ServerEventType.USER_JOINED, PeerInfo(user_id=str(conn_id), user_name=user_name)),
            )
            existing = [PeerInfo(user_id=str(member), user_name=self._name_of(member)) for member in others]
            self._send(conn_id, envelope(ServerEventType.EXISTING_USERS, existing))

        logger.info("%s joined room %s", user_name, room_id)
        return existing

    async def relay(
        self,
        kind: SignalKind,
        payload: Any,
        target: ConnectionId,
        sender: ConnectionId,
    ) -> bool:
        """Forward an offer, answer or ICE candidate to ``target``."""

        async with self._lock:
            user = self._registry.get(sender)
            return self._relay.relay(kind, payload, target, sender, user.user_name if user else None)

    async def disconnect(self, conn_id: ConnectionId) -> None:
        """Tear down every trace of a connection; safe to call more than once."""

        async with self._lock:
            known = self._recipients.pop(conn_id, None) is not None
            user = self._registry.get(conn_id)
            if user is not None:
                self._detach(conn_id, user)

        if user is not None:
            logger.info("%s left room %s", user.user_name, user.room_id)
        if known:
            logger.info("User disconnected: %s", conn_id)

    def room_members(self, room_id: str) -> tuple[ConnectionId, ...]:
        return self._directory.members(room_id)

    def _detach(self, conn_id: ConnectionId, user: User) -> None:
        self._directory.leave(user.room_id, conn_id)
        remaining = self._directory.members(user.room_id)
        if remaining:
            self._fan_out(
                remaining,
                envelope(ServerEventType.USER_LEFT, PeerInfo(user_id=str(conn_id), user_name=user.user_name)),
            )
        self._registry.remove(conn_id)

    def _name_of(self, conn_id: ConnectionId) -> str:
        user = self._registry.get(conn_id)
        return user.user_name if user else self._unknown_user_name

    def _fan_out(self, targets: tuple[ConnectionId, ...], message: dict) -> None:
        for target in targets:
            self._send(target, message)

    def _send(self, conn_id: ConnectionId, message: dict) -> None:
        recipient = self._recipients.get(conn_id)
        if recipient is not None:
            recipient.deliver(message)


manager = SignalingManager()


def get_signaling_manager() -> SignalingManager:
    """FastAPI dependency returning the process-wide manager."""

    return manager
