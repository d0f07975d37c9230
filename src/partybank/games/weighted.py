"""Weighted random selection over small static catalogs."""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def _weight(entry: Any) -> float:  # noqa: ANN401
    if isinstance(entry, Mapping):
        return float(entry["probability"])
    return float(entry.probability)


def draw_card(catalog: Sequence[T], rng: random.Random | None = None) -> T:
    """Pick one entry with probability proportional to its ``probability`` weight.

    Weights are relative and need not sum to 1. Linear scan with a running
    remainder; if rounding leaves the remainder positive after the last
    entry, the last entry is returned, so a non-empty catalog always yields
    a card.
    """
    if not catalog:
        raise ValueError("Cannot draw from an empty catalog")

    total = sum(_weight(entry) for entry in catalog)
    remaining = (rng.random() if rng is not None else random.random()) * total

    for entry in catalog:
        remaining -= _weight(entry)
        if remaining <= 0:
            return entry

    return catalog[-1]
