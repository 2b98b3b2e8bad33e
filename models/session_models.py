"""Session domain models for the live visitor server."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4


class SessionPhase(str, Enum):
	"""Lifecycle of one websocket connection."""

	CONNECTING = "connecting"
	OPEN = "open"
	CLOSING = "closing"
	CLOSED = "closed"


@dataclass
class Session:
	"""In-memory state for a single connected browser."""

	websocket: Any
	session_id: str = field(default_factory=lambda: uuid4().hex)
	connected_at: float = field(default_factory=lambda: time.time())
	last_activity: Optional[float] = None
	current_page: Optional[str] = None
	user_agent: Optional[str] = None
	remote_address: Optional[str] = None
	phase: SessionPhase = SessionPhase.CONNECTING

	def __post_init__(self) -> None:
		if self.last_activity is None:
			self.last_activity = self.connected_at

	def touch(self, now: Optional[float] = None) -> None:
		"""Record inbound activity."""
		self.last_activity = time.time() if now is None else now

	def idle_for(self, now: float) -> float:
		return now - (self.last_activity or self.connected_at)

	@property
	def is_open(self) -> bool:
		return self.phase == SessionPhase.OPEN


@dataclass
class ChatMessage:
	"""Chat entry as relayed to every client.

	Attributes:
		id: Client supplied id, or a server generated one for admin replies.
		message: Message text, trusted as sent.
		sender: Display label of the author.
		timestamp: Epoch milliseconds supplied by the author.
		client_id: Originating session id; None for admin replies.
	"""

	id: Any
	message: Any
	sender: Any
	timestamp: Any
	client_id: Optional[str] = None

	def to_payload(self) -> Dict[str, Any]:
		payload: Dict[str, Any] = {
			"id": self.id,
			"message": self.message,
			"timestamp": self.timestamp,
			"sender": self.sender,
		}
		if self.client_id is not None:
			payload["clientId"] = self.client_id
		return payload
