"""Competency score arithmetic shared by the CL workflow and its tests."""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

# Matches the NUMERIC(10, 2) score column.
SCORE_QUANTUM = Decimal("0.01")

Number = Union[int, Decimal]


def compute_score(weight: Number, level: Number) -> Decimal:
    """Return ``(weight / 100) * level`` rounded half-up to two places.

    Decimal arithmetic keeps the value identical to what the database stores,
    so a score read back never drifts from one computed here.
    """
    raw = (Decimal(weight) / Decimal(100)) * Decimal(level)
    return raw.quantize(SCORE_QUANTUM, rounding=ROUND_HALF_UP)


def total_weight(weights) -> int:
    """Sum item weights, treating missing values as zero."""
    return sum(int(w or 0) for w in weights)
