"""Room membership directory."""
from __future__ import annotations

from typing import Dict

from .registry import ConnectionId


class RoomDirectory:
    """Track which connections are joined to each room.

    Rooms are created on first join and dropped as soon as their last member
    leaves, so the directory never holds an empty room. Members keep their
    join order.
    """

    def __init__(self) -> None:
        self._rooms: Dict[str, Dict[ConnectionId, None]] = {}

    def join(self, room_id: str, conn_id: ConnectionId) -> None:
        """Add a connection to the room, creating the room if needed."""

        self._rooms.setdefault(room_id, {})[conn_id] = None

    def leave(self, room_id: str, conn_id: ConnectionId) -> None:
        """Remove a connection from the room, cleaning up empty rooms."""

        members = self._rooms.get(room_id)
        if not members:
            return
        members.pop(conn_id, None)
        if not members:
            self._rooms.pop(room_id, None)

    def members(self, room_id: str) -> tuple[ConnectionId, ...]:
        """Return the room's members in join order (empty for unknown rooms)."""

        return tuple(self._rooms.get(room_id, ()))

    def broadcast_targets(self, room_id: str, excluding: ConnectionId) -> tuple[ConnectionId, ...]:
        """Members that should receive a fan-out originating from ``excluding``."""

        return tuple(member for member in self.members(room_id) if member != excluding)

    def room_ids(self) -> list[str]:
        return list(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
