from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")


def _env(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise RuntimeError(f"{name}={raw!r} is not a valid value") from exc


@dataclass
class ServerSettings:
    """Runtime configuration for the live visitor server.

    Attributes:
        host: Interface uvicorn binds to (local-only by default).
        port: Listening port shared by the info page and the websocket.
        sweep_interval: Seconds between announcement and idle-eviction ticks.
        idle_timeout: Seconds without activity before a session is evicted.
        chat_log_capacity: Number of recent chat messages kept in memory.
        auto_reply_min_delay: Lower bound of the admin auto-reply delay.
        auto_reply_max_delay: Upper bound of the admin auto-reply delay.
        log_level: Name of the root logging level.
    """

    host: str = "127.0.0.1"
    port: int = 8080
    sweep_interval: float = 60.0
    idle_timeout: float = 300.0
    chat_log_capacity: int = 100
    auto_reply_min_delay: float = 2.0
    auto_reply_max_delay: float = 5.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerSettings":
        """Build settings from environment variables, falling back to defaults."""
        settings = cls(
            host=_env("HOST", cls.host, str),
            port=_env("PORT", cls.port, int),
            sweep_interval=_env("SWEEP_INTERVAL_SECONDS", cls.sweep_interval, float),
            idle_timeout=_env("IDLE_TIMEOUT_SECONDS", cls.idle_timeout, float),
            chat_log_capacity=_env("CHAT_LOG_CAPACITY", cls.chat_log_capacity, int),
            auto_reply_min_delay=_env("AUTO_REPLY_MIN_DELAY", cls.auto_reply_min_delay, float),
            auto_reply_max_delay=_env("AUTO_REPLY_MAX_DELAY", cls.auto_reply_max_delay, float),
            log_level=_env("LOG_LEVEL", cls.log_level, str).upper(),
        )
        if settings.chat_log_capacity < 1:
            raise RuntimeError("CHAT_LOG_CAPACITY must be at least 1")
        if settings.auto_reply_min_delay > settings.auto_reply_max_delay:
            raise RuntimeError("AUTO_REPLY_MIN_DELAY must not exceed AUTO_REPLY_MAX_DELAY")
        return settings
