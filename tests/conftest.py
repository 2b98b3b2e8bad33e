import json
import random

import pytest

from services.realtime.broadcast_server import BroadcastServer
from services.realtime.chat_log import ChatLog
from services.realtime.responder import CannedResponder


class FakeWebSocket:
    """Records frames the server sends instead of writing to a network socket."""

    def __init__(self, fail_sends: bool = False) -> None:
        self.fail_sends = fail_sends
        self.sent = []
        self.closed = False
        self.close_code = None

    async def send_text(self, text: str) -> None:
        if self.fail_sends:
            raise RuntimeError("socket is gone")
        self.sent.append(json.loads(text))

    async def close(self, code: int = 1000) -> None:
        if self.closed:
            raise RuntimeError("already closed")
        self.closed = True
        self.close_code = code

    def of_type(self, event_type: str):
        return [event for event in self.sent if event["type"] == event_type]


class Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def responder():
    return CannedResponder(rng=random.Random(7), min_delay=0, max_delay=0)


@pytest.fixture
def server(responder, clock):
    return BroadcastServer(chat_log=ChatLog(100), responder=responder, idle_timeout=300, clock=clock)


@pytest.fixture
def make_socket():
    return FakeWebSocket
