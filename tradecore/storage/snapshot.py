# tradecore/storage/snapshot.py

"""JSON snapshots of the entity store.

A snapshot is a single JSON object with one list per entity table.
Datetimes are written as ISO-8601 strings, enums by member name and
user roles as a sorted list of names.  Snapshots are a convenience for
the persistence layer, not a transactional log: loading replaces the
whole store.
"""

import json
import logging
from dataclasses import fields
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, cast

from tradecore.config.settings import Settings
from tradecore.models.appeal import Appeal
from tradecore.models.enums import (
    OrderStatus,
    ProductCategory,
    ProductCondition,
    ProductStatus,
    UserRole,
    UserStatus,
)
from tradecore.models.message import Message
from tradecore.models.order import Order
from tradecore.models.product import Product
from tradecore.models.review import Review
from tradecore.models.user import User
from tradecore.storage.store import EntityTable, Store

logger = logging.getLogger("tradecore.snapshot")

SNAPSHOT_VERSION = 1

_DATETIME_FIELDS: frozenset[str] = frozenset({
    "created_at",
    "registered_at",
    "last_login_at",
    "published_at",
    "updated_at",
    "confirmed_at",
    "completed_at",
    "processed_at",
})

# table name -> (entity class, enum-typed fields)
_SCHEMA: dict[str, tuple[type[Any], dict[str, type[Enum]]]] = {
    "users": (User, {"status": UserStatus}),
    "products": (
        Product,
        {
            "status": ProductStatus,
            "category": ProductCategory,
            "condition": ProductCondition,
        },
    ),
    "orders": (Order, {"status": OrderStatus}),
    "reviews": (Review, {}),
    "messages": (Message, {}),
    "appeals": (Appeal, {}),
}


def entity_to_dict(entity: Any) -> dict[str, object]:
    """Convert a model dataclass to JSON-ready primitives."""
    data: dict[str, object] = {}
    for f in fields(entity):
        if f.name.startswith("_"):
            continue
        value = getattr(entity, f.name)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.name
        elif isinstance(value, set):
            value = sorted(r.name for r in cast(set[UserRole], value))
        data[f.name] = value
    return data


def entity_from_dict(table: str, row: dict[str, Any]) -> Any:
    """Rebuild a model dataclass from :func:`entity_to_dict` output."""
    cls, enum_fields = _SCHEMA[table]
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name.startswith("_") or f.name not in row:
            continue
        value = row[f.name]
        if value is not None and f.name in _DATETIME_FIELDS:
            value = datetime.fromisoformat(value)
        elif value is not None and f.name in enum_fields:
            value = enum_fields[f.name][value]
        elif f.name == "roles":
            value = {UserRole[name] for name in value}
        kwargs[f.name] = value
    return cls(**kwargs)


class SnapshotManager:
    """Save and restore a :class:`Store` as a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.SNAPSHOT_PATH

    def save(self, store: Store) -> Path:
        """Write every table of *store* to :attr:`path`."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload: dict[str, object] = {
            "version": SNAPSHOT_VERSION,
            "saved_at": datetime.now().isoformat(),
        }
        for name in _SCHEMA:
            table = self._table(store, name)
            payload[name] = [entity_to_dict(e) for e in table.all()]

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

        logger.info(
            "Saved snapshot to %s (%s)", self.path, store.counts(),
        )
        return self.path

    def load(self, store: Store) -> int:
        """Replace the contents of *store* with the snapshot.

        Returns the number of entities loaded.  A missing or unreadable
        file leaves the store untouched and returns 0.
        """
        if not self.path.exists():
            logger.warning("Snapshot not found: %s", self.path)
            return 0

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning(
                "Failed to read snapshot %s: %s", self.path, exc,
            )
            return 0

        if not isinstance(data, dict):
            logger.warning("Snapshot %s is not an object", self.path)
            return 0
        payload = cast(dict[str, Any], data)

        # Decode everything before touching the store
        decoded: dict[str, list[Any]] = {}
        try:
            for name in _SCHEMA:
                rows = payload.get(name, [])
                decoded[name] = [
                    entity_from_dict(name, row)
                    for row in rows
                    if isinstance(row, dict)
                ]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Snapshot %s has malformed rows: %s", self.path, exc,
            )
            return 0

        store.clear()
        total = 0
        for name, entities in decoded.items():
            table = self._table(store, name)
            for entity in entities:
                table.put(entity)
            total += len(entities)

        logger.info(
            "Loaded %d entities from snapshot %s", total, self.path,
        )
        return total

    @staticmethod
    def _table(store: Store, name: str) -> EntityTable[Any]:
        table: EntityTable[Any] = getattr(store, name)
        return table
