"""Tests for src/channel/bus.py — command queue and notification fan-out."""

import logging

import pytest

from src.channel.bus import EventChannel
from src.channel.events import EventPayload, GameEvent, draw_command, pass_command


@pytest.fixture
def bus():
    return EventChannel()


class TestCommandQueue:
    def test_drain_in_order(self, bus):
        first, second = draw_command(), pass_command()
        bus.post(first)
        bus.post(second)

        assert bus.pending_commands == 2
        assert list(bus.drain()) == [first, second]
        assert bus.pending_commands == 0

    def test_post_rejects_notifications(self, bus):
        with pytest.raises(ValueError, match="not a command"):
            bus.post(EventPayload(event=GameEvent.RENDER))


class TestPublish:
    def test_topic_then_wildcard(self, bus):
        calls = []
        bus.subscribe(None, lambda p: calls.append("all"))
        bus.subscribe(GameEvent.SAVE, lambda p: calls.append("save"))

        bus.publish(EventPayload(event=GameEvent.SAVE))

        assert calls == ["save", "all"]

    def test_only_matching_topic(self, bus):
        calls = []
        bus.subscribe(GameEvent.SAVE, calls.append)
        bus.publish(EventPayload(event=GameEvent.RENDER))
        assert calls == []

    def test_duplicate_subscribe_ignored(self, bus):
        calls = []
        bus.subscribe(GameEvent.RENDER, calls.append)
        bus.subscribe(GameEvent.RENDER, calls.append)
        bus.publish(EventPayload(event=GameEvent.RENDER))
        assert len(calls) == 1

    def test_unsubscribe(self, bus):
        calls = []
        bus.subscribe(GameEvent.RENDER, calls.append)
        bus.unsubscribe(GameEvent.RENDER, calls.append)
        bus.unsubscribe(GameEvent.ERROR, calls.append)  # never subscribed: no-op
        bus.publish(EventPayload(event=GameEvent.RENDER))
        assert calls == []

    def test_publish_rejects_commands(self, bus):
        with pytest.raises(ValueError, match="is a command"):
            bus.publish(draw_command())

    def test_subscriber_error_does_not_propagate(self, bus, caplog):
        """A failing subscriber is logged and the rest still run."""
        calls = []

        def broken(payload):
            raise RuntimeError("renderer down")

        bus.subscribe(GameEvent.RENDER, broken)
        bus.subscribe(GameEvent.RENDER, calls.append)

        with caplog.at_level(logging.ERROR):
            bus.publish(EventPayload(event=GameEvent.RENDER))

        assert len(calls) == 1
        assert "Subscriber failed handling RENDER" in caplog.text
