# tradecore/storage/ids.py

"""Entity identifier generation.

IDs are ``<prefix><epoch millis><counter>``; the counter is process-wide
and strictly increasing, so two IDs generated in the same millisecond
still differ.
"""

import itertools
import threading
import time

_counter = itertools.count(1)
_counter_lock = threading.Lock()

USER_PREFIX = "U"
PRODUCT_PREFIX = "P"
ORDER_PREFIX = "O"
REVIEW_PREFIX = "R"
MESSAGE_PREFIX = "M"
APPEAL_PREFIX = "A"


def generate_id(prefix: str) -> str:
    """Return a new unique identifier starting with *prefix*."""
    with _counter_lock:
        seq = next(_counter)
    return f"{prefix}{int(time.time() * 1000)}{seq}"
