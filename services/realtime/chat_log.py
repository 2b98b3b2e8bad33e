"""Bounded in-memory log of recent chat messages."""

from __future__ import annotations

from collections import deque
from typing import Deque, List

from models.session_models import ChatMessage

DEFAULT_CAPACITY = 100


class ChatLog:
	"""Keep the most recent chat messages, dropping the oldest past capacity."""

	def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
		if capacity < 1:
			raise ValueError("Chat log capacity must be at least 1.")
		self.capacity = capacity
		self._messages: Deque[ChatMessage] = deque(maxlen=capacity)

	def append(self, message: ChatMessage) -> None:
		self._messages.append(message)

	def messages(self) -> List[ChatMessage]:
		return list(self._messages)

	def __len__(self) -> int:
		return len(self._messages)
