from decimal import Decimal

import pytest

from appraisal.utils.scoring import SCORE_QUANTUM, compute_score, total_weight


@pytest.mark.parametrize(
    "weight,level,expected",
    [
        (0, 3, Decimal("0.00")),
        (50, 4, Decimal("2.00")),
        (33, 3, Decimal("0.99")),
        (25, 3, Decimal("0.75")),
        (100, 5, Decimal("5.00")),
        (1, 1, Decimal("0.01")),
    ],
)
def test_compute_score(weight, level, expected):
    score = compute_score(weight, level)
    assert score == expected
    assert score.as_tuple().exponent == SCORE_QUANTUM.as_tuple().exponent


def test_compute_score_accepts_decimals():
    assert compute_score(Decimal("40"), Decimal("2")) == Decimal("0.80")


def test_total_weight_treats_missing_as_zero():
    assert total_weight([40, None, 60]) == 100
    assert total_weight([]) == 0
