"""Dispatch visitor websocket events to the appropriate handlers."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict

from models.session_models import Session
from models.wire_models import InboundEnvelope
from services.realtime import events
from services.realtime.ws_chat import ChatMessageHandler

if TYPE_CHECKING:
	from services.realtime.broadcast_server import BroadcastServer

LOGGER = logging.getLogger(__name__)

Handler = Callable[[Session, Dict[str, Any]], Awaitable[None]]


class VisitorMessageRouter:
	"""Route inbound frames from visitor sessions, one handler per event type."""

	def __init__(self, server: "BroadcastServer") -> None:
		self.server = server
		self.chat_handler = ChatMessageHandler(server)
		self._handlers: Dict[str, Handler] = {
			"visitor_join": self._visitor_join,
			"visitor_leave": self._visitor_leave,
			"activity": self._activity,
			"chat_message": self.chat_handler.handle,
			"typing": self._typing,
			"ping": self._ping,
			"click_track": self._click_track,
		}

	async def handle(self, session_id: str, envelope: InboundEnvelope) -> None:
		"""Process a single inbound event; frames from departed sessions are ignored."""
		session = self.server.registry.get(session_id)
		if session is None:
			return
		session.touch(self.server.clock())
		handler = self._handlers.get(envelope.type)
		if handler is None:
			LOGGER.warning("Unknown message type from %s: %r", session_id, envelope.type)
			return
		await handler(session, envelope.data)

	async def _visitor_join(self, session: Session, data: Dict[str, Any]) -> None:
		page = data.get("page")
		session.current_page = page
		LOGGER.info("Visitor %s joined from: %s", session.session_id, page)
		await self.server.broadcast(events.notification(f"New visitor on {page}"), exclude=session.session_id)

	async def _visitor_leave(self, session: Session, data: Dict[str, Any]) -> None:
		# Teardown happens on the transport close, not here.
		LOGGER.info("Visitor %s left from: %s", session.session_id, data.get("page"))

	async def _activity(self, session: Session, data: Dict[str, Any]) -> None:
		# Keep-alive only; handle() already refreshed last_activity.
		pass

	async def _typing(self, session: Session, data: Dict[str, Any]) -> None:
		await self.server.broadcast(
			events.user_typing(session.session_id, data.get("typing", False)),
			exclude=session.session_id,
		)

	async def _ping(self, session: Session, data: Dict[str, Any]) -> None:
		await self.server.send_to(session, events.pong(events.now_ms(self.server.clock())))

	async def _click_track(self, session: Session, data: Dict[str, Any]) -> None:
		LOGGER.info("Click tracked from %s: %s clicks", session.session_id, data.get("count"))
