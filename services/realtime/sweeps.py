"""Periodic background passes over the connected sessions."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List

from services.realtime.broadcast_server import BroadcastServer

LOGGER = logging.getLogger(__name__)


async def run_periodic(name: str, action: Callable[[], Awaitable[Any]], interval_seconds: float) -> None:
	"""
	Run `action` every `interval_seconds` until cancelled.

	Args:
		name: Label used in log messages.
		action: Coroutine function invoked once per tick.
		interval_seconds: Seconds to sleep before each tick.
	"""
	while True:
		try:
			await asyncio.sleep(interval_seconds)
			await action()
		except asyncio.CancelledError:
			break
		except Exception:
			# Keep ticking; the next interval gets a fresh attempt.
			LOGGER.exception("%s sweep failed", name)


class SweepRunner:
	"""Own the announcement and idle-eviction tasks for one server."""

	def __init__(self, server: BroadcastServer, interval_seconds: float = 60.0) -> None:
		"""
		Args:
			server: Broadcast server whose sessions are swept.
			interval_seconds: Fixed period shared by both sweeps.
		"""
		self.server = server
		self.interval_seconds = interval_seconds
		self._tasks: List[asyncio.Task] = []

	@property
	def running(self) -> bool:
		return any(not task.done() for task in self._tasks)

	def start(self) -> None:
		if self.running:
			return
		loop = asyncio.get_running_loop()
		self._tasks = [
			loop.create_task(run_periodic("announcement", self.server.announce, self.interval_seconds)),
			loop.create_task(run_periodic("idle-eviction", self.server.evict_idle, self.interval_seconds)),
		]
		LOGGER.info("Background sweeps started (every %ss)", self.interval_seconds)

	async def stop(self) -> None:
		"""Cancel both sweeps and wait for them to finish."""
		for task in self._tasks:
			task.cancel()
		await asyncio.gather(*self._tasks, return_exceptions=True)
		self._tasks = []
