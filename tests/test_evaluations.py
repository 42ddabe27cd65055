"""Post-sale evaluation averages."""

from decimal import Decimal

import pytest

from backoffice.services.post_sales_service import evaluation_mean, rolling_rate

pytestmark = pytest.mark.unit


def test_evaluation_mean():
    assert evaluation_mean([4, 5, 3, 4]) == Decimal("4")
    assert evaluation_mean([]) == Decimal("0")


def test_no_evaluations_gives_zero():
    assert rolling_rate([]) == Decimal("0")


def test_single_evaluation():
    assert rolling_rate([(5, 4, 3, 4)]) == Decimal("4.00")


def test_two_evaluations():
    assert rolling_rate([(5, 5, 5, 5), (2, 3, 2, 3)]) == Decimal("3.75")


def test_five_evaluations():
    evaluations = [
        (5, 5, 5, 5),
        (4, 4, 4, 4),
        (3, 4, 3, 4),
        (1, 2, 3, 4),
        (0, 0, 0, 1),
    ]
    # means: 5, 4, 3.5, 2.5, 0.25 -> 15.25 / 5
    assert rolling_rate(evaluations) == Decimal("3.05")


def test_non_terminating_mean_kept_to_six_places():
    # means: 1, 1, 1.25 -> 13/12 = 1.08333...
    rate = rolling_rate([(1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 1, 2)])

    assert rate == Decimal("1.083333")
    assert abs(rate - Decimal(13) / Decimal(12)) < Decimal("0.0000005")


def test_short_means_are_exact():
    # means: 1, 1, 1, 1.25 -> 4.25 / 4
    assert rolling_rate([(1, 1, 1, 1)] * 3 + [(1, 1, 1, 2)]) == Decimal("1.0625")
