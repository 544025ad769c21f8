from rtc_relay.services.registry import ConnectionId, ConnectionRegistry, User


def test_connection_ids_compare_by_value():
    assert ConnectionId("abc") == ConnectionId("abc")
    assert ConnectionId("abc") != ConnectionId("abd")
    assert str(ConnectionId("abc")) == "abc"
    assert ConnectionId.new() != ConnectionId.new()


def test_set_get_and_overwrite():
    registry = ConnectionRegistry()
    conn = ConnectionId("c1")

    registry.set(conn, "room-1", "Alice")
    assert registry.get(conn) == User(room_id="room-1", user_name="Alice")

    registry.set(conn, "room-2", "Alice B.")
    assert registry.get(conn) == User(room_id="room-2", user_name="Alice B.")
    assert len(registry) == 1


def test_get_unknown_returns_none():
    assert ConnectionRegistry().get(ConnectionId("missing")) is None


def test_remove_is_noop_when_absent():
    registry = ConnectionRegistry()
    conn = ConnectionId("c1")
    registry.set(conn, "room-1", "")

    registry.remove(conn)
    registry.remove(conn)

    assert conn not in registry
    assert registry.items() == []
