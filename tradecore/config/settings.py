# tradecore/config/settings.py

"""Central configuration for the tradecore transaction engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer override from ``TRADECORE_<name>``."""
    raw = os.environ.get(f"TRADECORE_{name}")
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_path(name: str, default: Path) -> Path:
    """Read a path override from ``TRADECORE_<name>``."""
    raw = os.environ.get(f"TRADECORE_{name}")
    return Path(raw) if raw else default


class Settings:
    """Central configuration for the tradecore transaction engine."""

    # --- Reputation ---
    INITIAL_REPUTATION: int = _env_int("INITIAL_REPUTATION", 100)
    MIN_REPUTATION: int = 0
    MAX_REPUTATION: int = 200
    COMPLETION_DELTA: int = _env_int("COMPLETION_DELTA", 1)
    CANCEL_PENALTY: int = _env_int("CANCEL_PENALTY", 5)
    CANCEL_COMPENSATION: int = _env_int("CANCEL_COMPENSATION", 2)
    REVIEW_DELTAS: dict[int, int] = {
        5: 5,
        4: 2,
        3: 0,
        2: -2,
        1: -3,
    }
    LOW_RATING_THRESHOLD: int = 2       # Ratings at or below alert the seller
    BAN_PENALTY: int = _env_int("BAN_PENALTY", 50)
    UNBAN_REWARD: int = _env_int("UNBAN_REWARD", 20)

    # Tier floors, highest first
    REPUTATION_LEVELS: list[tuple[int, str]] = [
        (180, "Diamond"),
        (150, "Platinum"),
        (120, "Gold"),
        (90, "Silver"),
        (60, "Bronze"),
    ]
    REPUTATION_LEVEL_FLOOR: str = "Warning"

    # --- Validation ---
    CANCEL_REASON_MIN: int = 5
    CANCEL_REASON_MAX: int = 200
    TITLE_MIN: int = 2
    TITLE_MAX: int = 100
    DESCRIPTION_MAX: int = 1000
    PRICE_MIN: float = 0.01
    PRICE_MAX: float = 1_000_000.00
    RATING_MIN: int = 1
    RATING_MAX: int = 5
    REVIEW_CONTENT_MAX: int = 500
    APPEAL_REASON_MIN: int = 10
    APPEAL_REASON_MAX: int = 500
    USERNAME_PATTERN: str = r"^[a-zA-Z0-9]{4,20}$"
    PASSWORD_MIN: int = 6
    PASSWORD_MAX: int = 20

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = _env_path("LOGS_DIR", BASE_DIR / "logs")
    DATA_DIR: Path = _env_path("DATA_DIR", BASE_DIR / "data")
    SNAPSHOT_PATH: Path = DATA_DIR / "snapshot.json"
