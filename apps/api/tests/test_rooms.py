from rtc_relay.services.registry import ConnectionId
from rtc_relay.services.rooms import RoomDirectory

A = ConnectionId("a")
B = ConnectionId("b")
C = ConnectionId("c")


def test_join_creates_room_and_is_idempotent():
    directory = RoomDirectory()

    directory.join("room-1", A)
    directory.join("room-1", A)

    assert "room-1" in directory
    assert directory.members("room-1") == (A,)


def test_members_of_unknown_room_is_empty():
    directory = RoomDirectory()

    assert directory.members("nowhere") == ()
    assert "nowhere" not in directory


def test_leave_collects_empty_rooms():
    directory = RoomDirectory()
    directory.join("room-1", A)
    directory.join("room-1", B)

    directory.leave("room-1", A)
    assert directory.members("room-1") == (B,)

    directory.leave("room-1", B)
    assert "room-1" not in directory
    assert len(directory) == 0


def test_leave_unknown_room_or_member_is_noop():
    directory = RoomDirectory()
    directory.join("room-1", A)

    directory.leave("room-2", A)
    directory.leave("room-1", B)

    assert directory.members("room-1") == (A,)
    assert directory.room_ids() == ["room-1"]


def test_broadcast_targets_excludes_sender_and_keeps_join_order():
    directory = RoomDirectory()
    for conn in (C, A, B):
        directory.join("room-1", conn)

    assert directory.broadcast_targets("room-1", A) == (C, B)
    assert directory.broadcast_targets("room-1", ConnectionId("other")) == (C, A, B)
    assert directory.broadcast_targets("empty", A) == ()
