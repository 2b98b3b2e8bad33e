"""Status helpers for the informational HTTP endpoints."""

from __future__ import annotations

from html import escape
from typing import Any, Dict

from fastapi import HTTPException, Request

from services.realtime.broadcast_server import BroadcastServer


def _get_broadcast_server(request: Request) -> BroadcastServer:
	server = getattr(request.app.state, "broadcast_server", None)
	if server is None:
		raise HTTPException(status_code=503, detail="Broadcast server not initialized.")
	return server


def health_status(request: Request) -> Dict[str, Any]:
	"""Return live counters for monitoring."""
	server = _get_broadcast_server(request)
	return {
		"ok": True,
		"connected_clients": server.registry.size(),
		"total_visitors": server.total_visitors,
		"chat_log_size": len(server.chat_log),
	}


def render_status_page(request: Request) -> str:
	"""Render the plain status page served next to the websocket."""
	server = _get_broadcast_server(request)
	settings = request.app.state.settings
	ws_url = escape(f"ws://{settings.host}:{settings.port}")
	return (
		"<h1>Portfolio WebSocket Server</h1>"
		f"<p>Server is running on {ws_url}</p>"
		f"<p>Connected clients: {server.registry.size()}</p>"
		f"<p>Total visitors: {server.total_visitors}</p>"
	)
