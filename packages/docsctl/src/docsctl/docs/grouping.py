from __future__ import annotations

from typing import Iterable

from .manifest import Feature


def group_by_category(features: Iterable[Feature]) -> dict[str, list[Feature]]:
    """Group features by category, each group ordered by `order`.

    Categories keep first-appearance order. `sorted` is stable, so features
    sharing an order value stay in manifest order.
    """
    groups: dict[str, list[Feature]] = {}
    for feature in features:
        groups.setdefault(feature.category, []).append(feature)
    return {name: sorted(rows, key=lambda f: f.order or 0) for name, rows in groups.items()}
