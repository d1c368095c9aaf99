# tradecore/services/reputation.py

"""Reputation rules for transaction outcomes and reviews.

Deltas are plain integers; :func:`apply_delta` is the only way they
reach a user, and it always goes through the clamping methods on
:class:`~tradecore.models.user.User`.
"""

import logging

from tradecore.config.settings import Settings
from tradecore.errors import InvalidOperationError
from tradecore.models.user import User

logger = logging.getLogger("tradecore.reputation")

COMPLETION_DELTA: int = Settings.COMPLETION_DELTA
CANCEL_PENALTY: int = Settings.CANCEL_PENALTY
CANCEL_COMPENSATION: int = Settings.CANCEL_COMPENSATION


def review_delta(rating: int) -> int:
    """Map a 1-5 star rating to the seller's reputation change."""
    if rating not in Settings.REVIEW_DELTAS:
        raise InvalidOperationError(
            f"Rating must be between {Settings.RATING_MIN} and "
            f"{Settings.RATING_MAX} (got {rating})"
        )
    return Settings.REVIEW_DELTAS[rating]


def cancellation_deltas(cancelled_by_buyer: bool) -> tuple[int, int]:
    """Return ``(buyer_delta, seller_delta)`` for a cancelled order.

    The party that cancels loses :data:`CANCEL_PENALTY`; the other
    party gains :data:`CANCEL_COMPENSATION`.
    """
    if cancelled_by_buyer:
        return -CANCEL_PENALTY, CANCEL_COMPENSATION
    return CANCEL_COMPENSATION, -CANCEL_PENALTY


def completion_deltas() -> tuple[int, int]:
    """Return ``(buyer_delta, seller_delta)`` for a completed order."""
    return COMPLETION_DELTA, COMPLETION_DELTA


def apply_delta(user: User, delta: int) -> int:
    """Apply *delta* to *user* with clamping. Returns the new score."""
    before = user.reputation
    if delta > 0:
        after = user.increase_reputation(delta)
    elif delta < 0:
        after = user.decrease_reputation(-delta)
    else:
        after = before
    logger.debug(
        "Reputation %s: %d -> %d (delta %+d)",
        user.user_id, before, after, delta,
    )
    return after


def reputation_level(score: int) -> str:
    """Tier label shown next to a user's score."""
    for floor, label in Settings.REPUTATION_LEVELS:
        if score >= floor:
            return label
    return Settings.REPUTATION_LEVEL_FLOOR
