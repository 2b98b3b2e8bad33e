import random

import pytest

from services.realtime.prompts import ANNOUNCEMENTS, AUTO_REPLIES
from services.realtime.responder import CannedResponder


def test_choices_come_from_the_canned_lists():
    responder = CannedResponder(rng=random.Random(1))
    for _ in range(20):
        assert responder.pick_reply() in AUTO_REPLIES
        assert responder.pick_announcement() in ANNOUNCEMENTS


def test_reply_delay_stays_within_bounds():
    responder = CannedResponder(rng=random.Random(3))
    delays = [responder.reply_delay() for _ in range(200)]
    assert all(2.0 <= d <= 5.0 for d in delays)


def test_seeded_responders_agree():
    first = CannedResponder(rng=random.Random(11))
    second = CannedResponder(rng=random.Random(11))
    assert [first.pick_reply() for _ in range(5)] == [second.pick_reply() for _ in range(5)]


def test_invalid_configuration_is_rejected():
    with pytest.raises(ValueError):
        CannedResponder(replies=())
    with pytest.raises(ValueError):
        CannedResponder(min_delay=5, max_delay=2)
