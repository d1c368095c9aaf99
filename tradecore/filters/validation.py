# tradecore/filters/validation.py

"""Input validation for service operations.

Each validator returns nothing on success and raises
:class:`~tradecore.errors.InvalidOperationError` with a readable message
otherwise.
"""

import re

from tradecore.config.settings import Settings
from tradecore.errors import InvalidOperationError


def validate_not_empty(value: str | None, field_name: str) -> str:
    """Reject ``None`` and whitespace-only strings. Returns the stripped value."""
    if value is None or not value.strip():
        raise InvalidOperationError(f"{field_name} must not be empty")
    return value.strip()


def validate_length(
    value: str | None,
    field_name: str,
    min_length: int,
    max_length: int,
) -> None:
    """Check the stripped length of *value* is inside the bounds."""
    length = len(validate_not_empty(value, field_name))
    if length < min_length:
        raise InvalidOperationError(
            f"{field_name} must be at least {min_length} characters "
            f"(got {length})"
        )
    if length > max_length:
        raise InvalidOperationError(
            f"{field_name} must be at most {max_length} characters "
            f"(got {length})"
        )


# ── Orders & reviews ─────────────────────────────────────


def validate_cancel_reason(reason: str | None) -> None:
    validate_length(
        reason,
        "Cancel reason",
        Settings.CANCEL_REASON_MIN,
        Settings.CANCEL_REASON_MAX,
    )


def validate_rating(rating: int) -> None:
    """Whole stars only; bools and floats are rejected."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidOperationError(
            f"Rating must be a whole number of stars (got {rating!r})"
        )
    if not Settings.RATING_MIN <= rating <= Settings.RATING_MAX:
        raise InvalidOperationError(
            f"Rating must be between {Settings.RATING_MIN} and "
            f"{Settings.RATING_MAX} (got {rating})"
        )


def validate_review_content(content: str | None) -> None:
    """Review text is optional but bounded."""
    if content and len(content) > Settings.REVIEW_CONTENT_MAX:
        raise InvalidOperationError(
            f"Review must be at most {Settings.REVIEW_CONTENT_MAX} "
            f"characters (got {len(content)})"
        )


# ── Products ─────────────────────────────────────────────


def validate_title(title: str | None) -> None:
    validate_length(
        title, "Title", Settings.TITLE_MIN, Settings.TITLE_MAX,
    )


def validate_description(description: str | None) -> None:
    if description and len(description) > Settings.DESCRIPTION_MAX:
        raise InvalidOperationError(
            f"Description must be at most {Settings.DESCRIPTION_MAX} "
            f"characters (got {len(description)})"
        )


def validate_price(price: float) -> None:
    """Positive, inside the allowed range, at most two decimals."""
    if not Settings.PRICE_MIN <= price <= Settings.PRICE_MAX:
        raise InvalidOperationError(
            f"Price must be between {Settings.PRICE_MIN:.2f} and "
            f"{Settings.PRICE_MAX:.2f} (got {price})"
        )
    if abs(price - round(price, 2)) > 0.001:
        raise InvalidOperationError(
            f"Price may have at most two decimals (got {price})"
        )


# ── Accounts ─────────────────────────────────────────────


def validate_username(username: str | None) -> None:
    name = validate_not_empty(username, "Username")
    if not re.fullmatch(Settings.USERNAME_PATTERN, name):
        raise InvalidOperationError(
            f"Username must be 4-20 letters or digits (got {name!r})"
        )


def validate_password(password: str | None) -> None:
    validate_length(
        password,
        "Password",
        Settings.PASSWORD_MIN,
        Settings.PASSWORD_MAX,
    )


def validate_appeal_reason(reason: str | None) -> None:
    validate_length(
        reason,
        "Appeal reason",
        Settings.APPEAL_REASON_MIN,
        Settings.APPEAL_REASON_MAX,
    )
