# tradecore/models/message.py

"""Persisted notification message."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Message:
    """One notification addressed to a single user."""

    message_id: str
    user_id: str
    content: str
    created_at: datetime = field(default_factory=datetime.now)
    read: bool = False

    def mark_read(self) -> None:
        self.read = True
