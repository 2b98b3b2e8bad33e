"""WebSocket endpoint for live visitor presence and chat."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket

from services.realtime.broadcast_server import BroadcastServer

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def _require_broadcast_server(websocket: WebSocket) -> BroadcastServer:
	server = getattr(websocket.app.state, "broadcast_server", None)
	if server is None:
		raise RuntimeError("Broadcast server unavailable")
	return server


@router.websocket("/")
@router.websocket("/ws")
async def visitor_socket(websocket: WebSocket, server: BroadcastServer = Depends(_require_broadcast_server)):
	"""Enroll one browser session and feed its frames to the broadcast server until it leaves."""
	await websocket.accept()
	client = websocket.client
	session = await server.connect(
		websocket,
		user_agent=websocket.headers.get("user-agent"),
		remote_address=f"{client.host}:{client.port}" if client else None,
	)
	try:
		while True:
			message = await websocket.receive()
			if message["type"] == "websocket.disconnect":
				break
			raw = message.get("text")
			if raw is None:
				raw = message.get("bytes")
			await server.handle_frame(session.session_id, raw)
	except Exception as exc:
		LOGGER.error("WebSocket error for client %s: %s", session.session_id, exc)
	finally:
		await server.disconnect(session.session_id)
