from __future__ import annotations

import operator
from typing import Any, Callable, Optional, Sequence

from .repository import Filter, Order

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def matches(doc: dict, filters: Sequence[Filter]) -> bool:
    for field, op, value in filters:
        current = doc.get(field)
        if op == "in":
            if current not in value:
                return False
            continue
        compare = _COMPARATORS.get(op)
        if compare is None:
            raise ValueError(f"Unsupported filter operator: {op!r}")
        if op not in ("==", "!=") and (current is None or value is None):
            return False
        try:
            if not compare(current, value):
                return False
        except TypeError:
            return False
    return True


def apply_query(docs: Sequence[dict], filters: Sequence[Filter], order: Optional[Order]) -> list[dict]:
    out = [d for d in docs if matches(d, filters)]
    if order is not None:
        field, descending = order
        # Missing values sort first (last when descending).
        out.sort(key=lambda d: (d.get(field) is not None, str(d.get(field) or "")), reverse=descending)
    return out
