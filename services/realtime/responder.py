"""Random selection of canned replies, announcements and reply delays."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from services.realtime.prompts import ANNOUNCEMENTS, AUTO_REPLIES


class CannedResponder:
	"""Pick canned texts and auto-reply delays.

	The random source is injectable so callers can pin choices and delays;
	passing `random.Random(seed)` gives a reproducible sequence.
	"""

	def __init__(
		self,
		rng: Optional[random.Random] = None,
		replies: Sequence[str] = AUTO_REPLIES,
		announcements: Sequence[str] = ANNOUNCEMENTS,
		min_delay: float = 2.0,
		max_delay: float = 5.0,
	) -> None:
		if not replies or not announcements:
			raise ValueError("Replies and announcements must not be empty.")
		if min_delay > max_delay:
			raise ValueError("min_delay must not exceed max_delay.")
		self.rng = rng or random.Random()
		self.replies = tuple(replies)
		self.announcements = tuple(announcements)
		self.min_delay = min_delay
		self.max_delay = max_delay

	def pick_reply(self) -> str:
		return self.rng.choice(self.replies)

	def pick_announcement(self) -> str:
		return self.rng.choice(self.announcements)

	def reply_delay(self) -> float:
		"""Return a delay in seconds drawn uniformly from [min_delay, max_delay]."""
		return self.rng.uniform(self.min_delay, self.max_delay)
