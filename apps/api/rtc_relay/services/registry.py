"""Connection identities and the per-connection user registry."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class ConnectionId:
    """Opaque, process-unique identity of one live client channel.

    Compared by value and never tied to a transport handle, so the room logic
    can be exercised without a socket.
    """

    value: str

    @classmethod
    def new(cls) -> "ConnectionId":
        return cls(uuid4().hex)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class User:
    room_id: str
    user_name: str


class ConnectionRegistry:
    """Map connection identities to the room and display name they joined with."""

    def __init__(self) -> None:
        self._users: Dict[ConnectionId, User] = {}

    def set(self, conn_id: ConnectionId, room_id: str, user_name: str) -> User:
        user = User(room_id=room_id, user_name=user_name)
        self._users[conn_id] = user
        return user

    def get(self, conn_id: ConnectionId) -> Optional[User]:
        return self._users.get(conn_id)

    def remove(self, conn_id: ConnectionId) -> None:
        self._users.pop(conn_id, None)

    def items(self) -> list[tuple[ConnectionId, User]]:
        return list(self._users.items())

    def __contains__(self, conn_id: object) -> bool:
        return conn_id in self._users

    def __len__(self) -> int:
        return len(self._users)
