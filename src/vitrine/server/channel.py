"""In-process publish/subscribe channel for hot-update notifications.

The watcher publishes; every connected preview client subscribes. The
subscriber list is an immutable tuple replaced on every change, so a
publish iterates a consistent snapshot even when a client disconnects
mid-delivery.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

Message = dict[str, Any]
Callback = Callable[[Message], Awaitable[None] | None]


class Subscription:
    """Handle returned by :meth:`UpdateChannel.subscribe`."""

    __slots__ = ("_callback", "_channel")

    def __init__(self, channel: UpdateChannel, callback: Callback):
        self._channel = channel
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._callback in self._channel._subscribers

    def unsubscribe(self) -> None:
        """Stop receiving messages; calling it twice is harmless."""
        self._channel._remove(self._callback)


class UpdateChannel:
    """Fan a message out to every subscriber.

    Callbacks may be plain functions or coroutine functions. A subscriber
    that raises is logged and the message still reaches the others.

    Example:
        >>> channel = UpdateChannel()
        >>> received = []
        >>> sub = channel.subscribe(received.append)
        >>> await channel.publish({"type": "component-update", "path": "components/hero/dark"})
        1
        >>> sub.unsubscribe()
    """

    def __init__(self) -> None:
        self._subscribers: tuple[Callback, ...] = ()

    def subscribe(self, callback: Callback) -> Subscription:
        self._subscribers = (*self._subscribers, callback)
        return Subscription(self, callback)

    def _remove(self, callback: Callback) -> None:
        self._subscribers = tuple(cb for cb in self._subscribers if cb is not callback)

    async def publish(self, message: Message) -> int:
        """Deliver ``message`` to every current subscriber.

        Returns:
            Number of subscribers that received the message without error
        """
        delivered = 0
        for callback in self._subscribers:
            try:
                result = callback(message)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Update subscriber %r failed", callback)
                continue
            delivered += 1
        return delivered

    def __len__(self) -> int:
        return len(self._subscribers)
