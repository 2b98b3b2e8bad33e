import random

import pytest
from fastapi.testclient import TestClient

from main import create_app
from models.server_settings import ServerSettings
from services.realtime.responder import CannedResponder


@pytest.fixture
def client():
    app = create_app(
        settings=ServerSettings(sweep_interval=3600),
        responder=CannedResponder(rng=random.Random(5), min_delay=0, max_delay=0),
    )
    with TestClient(app) as test_client:
        yield test_client


def test_two_visitors_chat_and_one_leaves(client):
    with client.websocket_connect("/") as a:
        hello = a.receive_json()
        assert hello["type"] == "connection_established"
        assert hello["data"]["visitorCount"] == 1
        assert a.receive_json() == {"type": "visitor_count", "data": {"count": 1}}

        with client.websocket_connect("/ws") as b:
            b_id = b.receive_json()["data"]["clientId"]
            assert b.receive_json() == {"type": "visitor_count", "data": {"count": 2}}
            assert a.receive_json() == {"type": "visitor_count", "data": {"count": 2}}

            b.send_json({"type": "chat_message", "data": {"id": 1, "message": "hi", "timestamp": 10, "sender": "B"}})
            for ws in (a, b):
                relayed = ws.receive_json()
                assert relayed["type"] == "chat_message"
                assert relayed["data"]["clientId"] == b_id
                assert relayed["data"]["message"] == "hi"
            for ws in (a, b):
                reply = ws.receive_json()
                assert reply["type"] == "chat_message"
                assert reply["data"]["sender"] == "admin"

        assert a.receive_json() == {"type": "visitor_count", "data": {"count": 1}}
        notice = a.receive_json()
        assert notice["type"] == "notification"
        assert notice["data"]["text"] == "A visitor left the site"


def test_malformed_frame_keeps_connection_open(client):
    with client.websocket_connect("/") as ws:
        ws.receive_json()
        ws.receive_json()

        ws.send_text("definitely not json")
        ws.send_text("[" * 100_000 + "]" * 100_000)
        ws.send_json({"type": "ping", "data": {}})

        pong = ws.receive_json()
        assert pong["type"] == "pong"
        assert isinstance(pong["data"]["timestamp"], int)


def test_status_page_and_health(client):
    page = client.get("/")
    assert page.status_code == 200
    assert "Portfolio WebSocket Server" in page.text

    with client.websocket_connect("/") as ws:
        ws.receive_json()
        health = client.get("/health").json()
        assert health["ok"] is True
        assert health["connected_clients"] == 1
        assert health["total_visitors"] == 1
