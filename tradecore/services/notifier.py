# tradecore/services/notifier.py

"""Publish/subscribe fan-out for user notifications.

Every published message is persisted in the store first; live delivery
to subscribed sinks follows synchronously and is best-effort.  A sink
that raises is logged and skipped, so one broken session cannot stop
the others from hearing about an order.
"""

import logging
import threading
from typing import Protocol

from tradecore.models.message import Message
from tradecore.storage.ids import MESSAGE_PREFIX, generate_id
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.notifier")


class NotificationSink(Protocol):
    """Anything that can receive a live notification."""

    def on_message(self, text: str) -> None: ...


class MessageInbox:
    """Sink that keeps every delivered message in memory."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        self.received: list[str] = []

    def on_message(self, text: str) -> None:
        self.received.append(text)


class Notifier:
    """Explicit registry of user ID -> subscribed sinks."""

    def __init__(self, store: Store) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._sinks: dict[str, list[NotificationSink]] = {}

    # ── Subscriptions ────────────────────────────────────

    def subscribe(self, user_id: str, sink: NotificationSink) -> None:
        """Register *sink* for live delivery to *user_id*."""
        with self._lock:
            self._sinks.setdefault(user_id, []).append(sink)
        logger.debug("Sink subscribed for user %s", user_id)

    def unsubscribe(self, user_id: str, sink: NotificationSink) -> None:
        """Remove *sink*; unknown sinks are ignored."""
        with self._lock:
            sinks = self._sinks.get(user_id)
            if sinks is None:
                return
            if sink in sinks:
                sinks.remove(sink)
            if not sinks:
                del self._sinks[user_id]
        logger.debug("Sink unsubscribed for user %s", user_id)

    def subscribers(self) -> list[str]:
        """User IDs with at least one live sink."""
        with self._lock:
            return list(self._sinks)

    def is_subscribed(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._sinks

    # ── Publishing ───────────────────────────────────────

    def publish(self, user_id: str, text: str) -> Message:
        """Persist a message for *user_id* and deliver it live."""
        message = Message(
            message_id=generate_id(MESSAGE_PREFIX),
            user_id=user_id,
            content=text,
        )
        self._store.messages.put(message)
        self._deliver(user_id, text)
        return message

    def broadcast(self, text: str) -> int:
        """Publish *text* to every currently subscribed user.

        Returns the number of users reached.
        """
        recipients = self.subscribers()
        for user_id in recipients:
            self.publish(user_id, text)
        logger.info("Broadcast delivered to %d users", len(recipients))
        return len(recipients)

    def history(self, user_id: str) -> list[Message]:
        """Persisted messages for *user_id*, newest first."""
        messages = self._store.messages.filter(
            lambda m: m.user_id == user_id
        )
        return sorted(
            messages, key=lambda m: m.created_at, reverse=True,
        )

    def unread_count(self, user_id: str) -> int:
        return sum(1 for m in self.history(user_id) if not m.read)

    def _deliver(self, user_id: str, text: str) -> None:
        with self._lock:
            sinks = list(self._sinks.get(user_id, []))
        for sink in sinks:
            try:
                sink.on_message(text)
            except Exception:
                logger.warning(
                    "Live delivery to user %s failed",
                    user_id,
                    exc_info=True,
                )
