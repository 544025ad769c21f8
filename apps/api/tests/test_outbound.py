"""Tests for the per-connection outbound queue."""
from __future__ import annotations

import pytest

from rtc_relay.services.outbound import OutboundChannel
from rtc_relay.services.registry import ConnectionId


class DummySocket:
    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[dict] = []
        self.fail = fail

    async def send_json(self, message: dict) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


@pytest.mark.asyncio
async def test_frames_are_written_in_order():
    socket = DummySocket()

    async with OutboundChannel(ConnectionId("c1"), socket.send_json) as channel:
        for index in range(3):
            assert channel.deliver({"type": "n", "payload": index})
        await channel.flush()

    assert [message["payload"] for message in socket.sent] == [0, 1, 2]


@pytest.mark.asyncio
async def test_full_queue_drops_instead_of_blocking():
    socket = DummySocket()
    channel = OutboundChannel(ConnectionId("c1"), socket.send_json, max_size=1)

    assert channel.deliver({"type": "first"}) is True
    assert channel.deliver({"type": "second"}) is False

    await channel.close()
    assert socket.sent == []


@pytest.mark.asyncio
async def test_send_failure_stops_writer_without_raising():
    socket = DummySocket(fail=True)

    async with OutboundChannel(ConnectionId("c1"), socket.send_json) as channel:
        channel.deliver({"type": "first"})
        channel.deliver({"type": "second"})
        await channel.flush()

        assert channel.closed
        assert channel.deliver({"type": "third"}) is False


@pytest.mark.asyncio
async def test_deliver_after_close_is_refused():
    socket = DummySocket()

    async with OutboundChannel(ConnectionId("c1"), socket.send_json) as channel:
        pass

    assert channel.deliver({"type": "late"}) is False
    assert socket.sent == []
