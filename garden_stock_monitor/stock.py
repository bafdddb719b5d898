"""Stock records: normalisation of upstream payloads and change detection."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

# Keys under which the upstream has been seen to wrap the item list.
SEQUENCE_KEYS: Tuple[str, ...] = ("data", "items", "products")

UNKNOWN_NAME = "Unknown item"
EMPTY_LISTING = "No stock data available"


@dataclass
class StockItem:
    id: Any
    name: str
    in_stock: bool
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Any) -> "StockItem":
        """Build a view over one raw record; unknown fields land in ``extra``."""
        if not isinstance(record, Mapping):
            return cls(id=None, name=UNKNOWN_NAME, in_stock=False)
        name = record.get("name")
        return cls(
            id=record.get("id"),
            name=UNKNOWN_NAME if name is None else str(name),
            in_stock=bool(record.get("inStock")),
            extra={k: v for k, v in record.items() if k not in ("id", "name", "inStock")},
        )


class PayloadShape(enum.Enum):
    SEQUENCE = "sequence"
    KEYED_WITH_SEQUENCE = "keyed_with_sequence"
    KEYED_RECORD_MAP = "keyed_record_map"
    EMPTY = "empty"


def classify_payload(payload: Any) -> Tuple[PayloadShape, Optional[str]]:
    """Return the shape of ``payload`` and, for wrapped lists, the wrapping key.

    Precedence is significant: a mapping that holds a list under ``data`` is a
    wrapped list even if its other values look like records.
    """
    if isinstance(payload, (list, tuple)):
        return PayloadShape.SEQUENCE, None
    if isinstance(payload, Mapping):
        for key in SEQUENCE_KEYS:
            if isinstance(payload.get(key), (list, tuple)):
                return PayloadShape.KEYED_WITH_SEQUENCE, key
        return PayloadShape.KEYED_RECORD_MAP, None
    return PayloadShape.EMPTY, None


def _is_record(value: Any) -> bool:
    return isinstance(value, Mapping) and "id" in value and "name" in value


def normalize_stock(payload: Any) -> Sequence[Any]:
    """Coerce any observed payload shape into an ordered list of records.

    Never raises. Lists are returned unchanged (same object), so normalising
    an already-normalised value is a no-op.
    """
    shape, key = classify_payload(payload)
    if shape is PayloadShape.SEQUENCE:
        return payload
    if shape is PayloadShape.KEYED_WITH_SEQUENCE:
        return payload[key]
    if shape is PayloadShape.KEYED_RECORD_MAP:
        return [v for v in payload.values() if _is_record(v)]
    return []


def _find_previous(previous: Sequence[StockItem], item_id: Any) -> Optional[StockItem]:
    for p in previous:
        if p.id == item_id:
            return p
    return None


def diff_stock(previous: Optional[Sequence[Any]], current: Sequence[Any]) -> List[str]:
    """Describe availability changes between two normalised snapshots.

    Messages follow the order of ``current``; at most one per item.

    * no previous snapshot: every in-stock item is reported as a new item;
    * id not seen before: reported as added, whatever its stock state;
    * out of stock before and in stock now: reported as back in stock.

    Items going out of stock are never reported.
    """
    items = [StockItem.from_record(r) for r in current]
    changes: List[str] = []

    if not previous:
        for item in items:
            if item.in_stock:
                changes.append(f"{item.name} is in stock (New Item)")
        return changes

    prior = [StockItem.from_record(r) for r in previous]
    for item in items:
        prev = _find_previous(prior, item.id)
        if prev is None:
            changes.append(f"{item.name} was added to stock")
        elif not prev.in_stock and item.in_stock:
            changes.append(f"{item.name} is back in stock")
    return changes


def format_stock_listing(current: Sequence[Any]) -> List[str]:
    """Render one ``"<name>: In Stock"`` / ``"<name>: Out of Stock"`` line per item."""
    lines = []
    for record in current:
        item = StockItem.from_record(record)
        lines.append(f"{item.name}: {'In Stock' if item.in_stock else 'Out of Stock'}")
    return lines


__all__ = [
    "StockItem",
    "PayloadShape",
    "classify_payload",
    "normalize_stock",
    "diff_stock",
    "format_stock_listing",
    "EMPTY_LISTING",
]
