"""In-memory registry of connected visitor sessions."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from models.session_models import Session


class SessionRegistry:
	"""Track live sessions by id for a single server instance."""

	def __init__(self) -> None:
		self._sessions: Dict[str, Session] = {}

	def register(self, session: Session) -> None:
		"""Insert a new session; ids must never collide."""
		if session.session_id in self._sessions:
			raise ValueError(f"Session {session.session_id} is already registered")
		self._sessions[session.session_id] = session

	def unregister(self, session_id: str) -> bool:
		"""Remove a session and report whether it was present."""
		return self._sessions.pop(session_id, None) is not None

	def get(self, session_id: str) -> Optional[Session]:
		"""Return a session, or None if it already disconnected."""
		return self._sessions.get(session_id)

	def snapshot(self) -> List[Session]:
		"""Return a copy of the current sessions, safe to iterate while membership changes."""
		return list(self._sessions.values())

	def for_each(self, visitor: Callable[[Session], None]) -> None:
		"""Visit every current session; registrations made meanwhile apply to the registry, not this pass."""
		for session in self.snapshot():
			visitor(session)

	def size(self) -> int:
		return len(self._sessions)

	def __len__(self) -> int:
		return self.size()

	def __contains__(self, session_id: object) -> bool:
		return session_id in self._sessions
