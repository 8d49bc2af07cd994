"""
Hi-Lo - Event Channel

In-process message passing between the engine and its consumers. Commands
are queued and drained by the engine; notifications are fanned out to
subscribers synchronously on the caller's thread.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Iterator

from src.channel.events import EventPayload, GameEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[EventPayload], None]


class EventChannel:
    """Command queue in, notification stream out.

    Subscriber failures are logged and swallowed so a broken consumer
    (renderer, persistence) cannot leave the engine half-way through a
    transition.
    """

    def __init__(self) -> None:
        self._commands: deque[EventPayload] = deque()
        self._subscribers: dict[GameEvent, list[Subscriber]] = {}
        self._wildcard: list[Subscriber] = []

    # -- Commands ---------------------------------------------------------

    def post(self, command: EventPayload) -> None:
        """Queue a command for the engine."""
        if not command.event.is_command:
            raise ValueError(f"{command.event.name} is not a command event.")
        self._commands.append(command)
        logger.debug("Queued command %s", command.event.name)

    def drain(self) -> Iterator[EventPayload]:
        """Yield queued commands in arrival order, removing each one."""
        while self._commands:
            yield self._commands.popleft()

    @property
    def pending_commands(self) -> int:
        return len(self._commands)

    # -- Notifications ----------------------------------------------------

    def subscribe(self, event: GameEvent | None, callback: Subscriber) -> None:
        """Subscribe to one notification, or to all of them with event=None."""
        subscribers = self._wildcard if event is None else self._subscribers.setdefault(event, [])
        if callback in subscribers:
            logger.debug("Already subscribed to %s, skipping duplicate", event)
            return
        subscribers.append(callback)

    def unsubscribe(self, event: GameEvent | None, callback: Subscriber) -> None:
        subscribers = self._wildcard if event is None else self._subscribers.get(event, [])
        if callback in subscribers:
            subscribers.remove(callback)

    def publish(self, payload: EventPayload) -> None:
        """Deliver a notification to topic subscribers, then wildcard ones."""
        if payload.event.is_command:
            raise ValueError(f"{payload.event.name} is a command; use post().")

        for callback in [*self._subscribers.get(payload.event, []), *self._wildcard]:
            try:
                callback(payload)
            except Exception:
                logger.exception("Subscriber failed handling %s", payload.event.name)
