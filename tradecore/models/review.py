# tradecore/models/review.py

"""Review left by a buyer on a completed order."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Review:
    """A 1-5 star rating of the seller, at most one per order."""

    review_id: str
    order_id: str
    product_id: str
    reviewer_id: str
    reviewee_id: str
    rating: int
    content: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_positive(self) -> bool:
        return self.rating >= 4

    @property
    def is_negative(self) -> bool:
        return self.rating <= 2
