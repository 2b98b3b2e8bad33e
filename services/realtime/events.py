"""Builders for the outbound events sent to visitor browsers."""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional

from models.session_models import ChatMessage
from models.wire_models import OutboundEnvelope


def now_ms(now: Optional[float] = None) -> int:
	"""Return epoch milliseconds, the timestamp unit used on the wire."""
	return int((time.time() if now is None else now) * 1000)


def _event(event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
	return OutboundEnvelope(type=event_type, data=data).model_dump()


def connection_established(client_id: str, visitor_count: int, server_time: int) -> Dict[str, Any]:
	return _event(
		"connection_established",
		{"clientId": client_id, "visitorCount": visitor_count, "serverTime": server_time},
	)


def visitor_count(count: int) -> Dict[str, Any]:
	return _event("visitor_count", {"count": count})


def notification(text: str, level: str = "info") -> Dict[str, Any]:
	return _event("notification", {"text": text, "type": level})


def chat_message(message: ChatMessage) -> Dict[str, Any]:
	return _event("chat_message", message.to_payload())


def user_typing(client_id: str, typing: Any) -> Dict[str, Any]:
	return _event("user_typing", {"clientId": client_id, "typing": typing})


def pong(timestamp: int) -> Dict[str, Any]:
	return _event("pong", {"timestamp": timestamp})


def live_update(message: str, update_type: str = "announcement") -> Dict[str, Any]:
	return _event("live_update", {"updateType": update_type, "message": message})


def encode(event: Dict[str, Any]) -> str:
	"""Serialize an event into a websocket text frame."""
	return json.dumps(event)
