"""Signaling WebSocket endpoint."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket
from pydantic import ValidationError

from ..core.config import settings
from ..schemas.signaling import (
    AnswerMessage,
    ClientEnvelope,
    ClientEventType,
    ConnectedEvent,
    IceCandidateMessage,
    JoinRoomRequest,
    OfferMessage,
    ServerEventType,
    SignalKind,
    envelope,
)
from ..services.outbound import OutboundChannel
from ..services.registry import ConnectionId
from ..services.signaling import SignalingManager, get_signaling_manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket(settings.signaling_path)
async def signaling_endpoint(
    websocket: WebSocket,
    manager: SignalingManager = Depends(get_signaling_manager),
) -> None:
    """Room presence plus targeted SDP and ICE relay for one client."""

    await websocket.accept()
    conn_id = ConnectionId.new()

    async with OutboundChannel(conn_id, websocket.send_json, max_size=settings.outbound_queue_size) as channel:
        await manager.connect(conn_id, channel)
        channel.deliver(envelope(ServerEventType.CONNECTED, ConnectedEvent(user_id=str(conn_id))))
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                text = message.get("text")
                if text is None:
                    logger.warning("Ignoring binary frame from %s", conn_id)
                    continue
                await handle_frame(manager, conn_id, text)
        finally:
            await manager.disconnect(conn_id)


async def handle_frame(manager: SignalingManager, conn_id: ConnectionId, text: str) -> None:
    """Decode one client frame and apply it; malformed frames are dropped."""

    try:
        frame = ClientEnvelope.model_validate_json(text)
        if frame.type is ClientEventType.JOIN_ROOM:
            request = JoinRoomRequest.model_validate(frame.payload)
            await manager.join(conn_id, request.room_id, request.user_name)
        elif frame.type is ClientEventType.OFFER:
            offer = OfferMessage.model_validate(frame.payload)
            await manager.relay(SignalKind.OFFER, offer.offer, ConnectionId(offer.target_user_id), conn_id)
        elif frame.type is ClientEventType.ANSWER:
            answer = AnswerMessage.model_validate(frame.payload)
            await manager.relay(SignalKind.ANSWER, answer.answer, ConnectionId(answer.target_user_id), conn_id)
        elif frame.type is ClientEventType.ICE_CANDIDATE:
            ice = IceCandidateMessage.model_validate(frame.payload)
            await manager.relay(
                SignalKind.ICE_CANDIDATE,
                ice.candidate,
                ConnectionId(ice.target_user_id),
                conn_id,
            )
    except ValidationError as exc:
        logger.warning("Dropping malformed frame from %s: %s", conn_id, exc.errors(include_url=False))
