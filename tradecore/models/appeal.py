# tradecore/models/appeal.py

"""Ban appeal submitted by a banned user."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Appeal:
    """A request to lift a ban, resolved by an administrator."""

    appeal_id: str
    user_id: str
    reason: str
    created_at: datetime = field(default_factory=datetime.now)
    processed: bool = False
    result: str | None = None
    processed_at: datetime | None = None

    def process(self, result: str) -> None:
        """Record the administrator's decision."""
        self.processed = True
        self.result = result
        self.processed_at = datetime.now()
