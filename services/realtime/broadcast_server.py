"""Fan visitor presence and chat events out to every connected browser."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from pydantic import ValidationError

from models.session_models import Session, SessionPhase
from models.wire_models import InboundEnvelope
from services.realtime import events
from services.realtime.chat_log import ChatLog
from services.realtime.prompts import VISITOR_LEFT_TEXT
from services.realtime.responder import CannedResponder
from services.realtime.session_registry import SessionRegistry
from services.realtime.ws_session import VisitorMessageRouter

LOGGER = logging.getLogger(__name__)


class BroadcastServer:
	"""Own the session registry and relay events between sessions.

	All methods are meant to run on a single event loop; nothing here locks.
	Broadcasts iterate a snapshot of the registry so a session leaving
	mid-broadcast cannot disturb the iteration.
	"""

	def __init__(
		self,
		registry: Optional[SessionRegistry] = None,
		chat_log: Optional[ChatLog] = None,
		responder: Optional[CannedResponder] = None,
		idle_timeout: float = 300.0,
		clock: Callable[[], float] = time.time,
	) -> None:
		self.registry = registry if registry is not None else SessionRegistry()
		self.chat_log = chat_log if chat_log is not None else ChatLog()
		self.responder = responder or CannedResponder()
		self.idle_timeout = idle_timeout
		self.clock = clock
		self.total_visitors = 0
		self.router = VisitorMessageRouter(self)
		self._pending: Set[asyncio.Task] = set()

	# Lifecycle

	async def connect(
		self,
		websocket: Any,
		user_agent: Optional[str] = None,
		remote_address: Optional[str] = None,
	) -> Session:
		"""Enroll an accepted socket, greet it and announce the new count."""
		session = Session(
			websocket=websocket,
			connected_at=self.clock(),
			user_agent=user_agent,
			remote_address=remote_address,
		)
		session.phase = SessionPhase.OPEN
		self.registry.register(session)
		self.total_visitors += 1
		LOGGER.info(
			"Client connected: %s from %s (total: %d)",
			session.session_id,
			remote_address or "unknown",
			self.registry.size(),
		)
		await self.send_to(
			session,
			events.connection_established(session.session_id, self.registry.size(), events.now_ms(self.clock())),
		)
		await self.broadcast(events.visitor_count(self.registry.size()))
		return session

	async def disconnect(self, session_id: str) -> bool:
		"""Tear a session down after a transport close or error.

		Returns False when the session was already gone, in which case nothing
		is broadcast again.
		"""
		session = self.registry.get(session_id)
		if session is None:
			return False
		session.phase = SessionPhase.CLOSING
		self.registry.unregister(session_id)
		session.phase = SessionPhase.CLOSED
		LOGGER.info("Client disconnected: %s (remaining: %d)", session_id, self.registry.size())
		await self.broadcast(events.visitor_count(self.registry.size()))
		await self.broadcast(events.notification(VISITOR_LEFT_TEXT))
		return True

	async def close_session(self, session_id: str, code: int = 1000) -> bool:
		"""Force-close a session's socket and run the normal teardown."""
		session = self.registry.get(session_id)
		if session is None:
			return False
		session.phase = SessionPhase.CLOSING
		await self._close_socket(session, code)
		return await self.disconnect(session_id)

	async def shutdown(self) -> None:
		"""Drop pending auto-replies and close every registered socket."""
		for task in list(self._pending):
			task.cancel()
		self._pending.clear()
		sessions = self.registry.snapshot()
		for session in sessions:
			session.phase = SessionPhase.CLOSING
			self.registry.unregister(session.session_id)
			await self._close_socket(session, 1001)
			session.phase = SessionPhase.CLOSED
		LOGGER.info("Closed %d client connection(s) on shutdown", len(sessions))

	# Inbound

	async def handle_frame(self, session_id: str, raw: Any) -> None:
		"""Parse one inbound frame and route it; malformed frames are dropped."""
		if isinstance(raw, (bytes, bytearray)):
			try:
				raw = raw.decode("utf-8")
			except UnicodeDecodeError:
				LOGGER.warning("Dropping undecodable binary frame from %s", session_id)
				return
		try:
			envelope = InboundEnvelope.model_validate(json.loads(raw))
		except (TypeError, ValueError, RecursionError, ValidationError) as exc:
			LOGGER.warning("Error parsing message from %s: %s", session_id, exc)
			return
		try:
			await self.router.handle(session_id, envelope)
		except Exception:
			LOGGER.exception("Handler for %r failed for client %s", envelope.type, session_id)

	# Outbound

	async def send_to(self, session: Session, event: Dict[str, Any]) -> bool:
		"""Send one event to one session; failures are logged, never raised."""
		if not session.is_open:
			return False
		try:
			await session.websocket.send_text(events.encode(event))
		except Exception as exc:
			LOGGER.error("Error sending message to client %s: %s", session.session_id, exc)
			return False
		return True

	async def broadcast(self, event: Dict[str, Any], exclude: Optional[str] = None) -> int:
		"""Send an event to every open session except `exclude`; return deliveries."""
		delivered = 0
		for session in self.registry.snapshot():
			if session.session_id == exclude:
				continue
			if await self.send_to(session, event):
				delivered += 1
		return delivered

	def defer(self, delay: float, action: Callable[[], Awaitable[Any]]) -> asyncio.Task:
		"""Run `action` after `delay` seconds without blocking the caller."""

		async def _later() -> None:
			await asyncio.sleep(delay)
			await action()

		task = asyncio.get_running_loop().create_task(_later())
		self._pending.add(task)
		task.add_done_callback(self._pending.discard)
		return task

	# Sweeps

	async def announce(self) -> None:
		"""Broadcast one randomly chosen announcement as a live update."""
		await self.broadcast(events.live_update(self.responder.pick_announcement()))

	async def evict_idle(self, now: Optional[float] = None) -> List[str]:
		"""Force-close every session idle for longer than the timeout."""
		now = self.clock() if now is None else now
		stale = [s.session_id for s in self.registry.snapshot() if s.idle_for(now) > self.idle_timeout]
		for session_id in stale:
			LOGGER.info("Cleaning up inactive client: %s", session_id)
			await self.close_session(session_id)
		return stale

	@property
	def pending_replies(self) -> int:
		return len(self._pending)

	async def _close_socket(self, session: Session, code: int) -> None:
		try:
			await session.websocket.close(code=code)
		except Exception as exc:
			LOGGER.debug("Socket for %s already closed: %s", session.session_id, exc)
