"""Handle chat messages coming over the visitor websocket."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

from models.session_models import ChatMessage, Session
from services.realtime import events
from services.realtime.prompts import ADMIN_SENDER

if TYPE_CHECKING:
	import asyncio

	from services.realtime.broadcast_server import BroadcastServer

LOGGER = logging.getLogger(__name__)


class ChatMessageHandler:
	"""Log, relay and auto-answer visitor chat messages."""

	def __init__(self, server: "BroadcastServer") -> None:
		self.server = server

	async def handle(self, session: Session, data: Dict[str, Any]) -> None:
		"""Store the message, relay it to everyone including the author, then queue a canned reply."""
		message = ChatMessage(
			id=data.get("id"),
			message=data.get("message"),
			sender=data.get("sender"),
			timestamp=data.get("timestamp"),
			client_id=session.session_id,
		)
		self.server.chat_log.append(message)
		await self.server.broadcast(events.chat_message(message))
		LOGGER.info("Chat message from %s: %s", session.session_id, message.message)
		self.schedule_auto_reply()

	def schedule_auto_reply(self) -> "asyncio.Task":
		"""Broadcast an admin reply after a random delay; pending replies are not coordinated."""
		delay = self.server.responder.reply_delay()
		return self.server.defer(delay, self._send_auto_reply)

	async def _send_auto_reply(self) -> None:
		stamp = events.now_ms(self.server.clock())
		reply = ChatMessage(
			id=stamp,
			message=self.server.responder.pick_reply(),
			sender=ADMIN_SENDER,
			timestamp=stamp,
		)
		await self.server.broadcast(events.chat_message(reply))
