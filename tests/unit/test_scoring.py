"""Unit tests for spin points, tier increments and completion arithmetic."""

from __future__ import annotations

import pytest

from oracle.collections.profile import completion_percent
from oracle.collections.schemas import SpinType
from oracle.collections.statistics import POINTS_BY_TYPE, increments_for, points_for


class TestPoints:
    """Points depend only on the outcome tier, never on the score."""

    def test_divine_is_20(self):
        assert points_for(SpinType.DIVINE) == 20

    def test_reality_is_5(self):
        assert points_for(SpinType.REALITY) == 5

    def test_void_is_1(self):
        assert points_for(SpinType.VOID) == 1

    def test_every_tier_has_points(self):
        assert set(POINTS_BY_TYPE) == set(SpinType)


class TestIncrements:
    @pytest.mark.parametrize(
        ("spin_type", "expected"),
        [
            (SpinType.DIVINE, (1, 0)),
            (SpinType.REALITY, (0, 1)),
            (SpinType.VOID, (0, 0)),
        ],
    )
    def test_increments(self, spin_type, expected):
        assert increments_for(spin_type) == expected


class TestCompletionPercent:
    def test_empty_catalog_is_zero(self):
        """No division error when the catalog is empty."""
        assert completion_percent(0, 0) == 0
        assert completion_percent(3, 0) == 0

    def test_floors(self):
        """1 of 17 = 5.88% -> 5."""
        assert completion_percent(1, 17) == 5

    def test_full_collection(self):
        assert completion_percent(17, 17) == 100

    def test_nothing_collected(self):
        assert completion_percent(0, 17) == 0

    def test_exact_integer_arithmetic(self):
        """Matches floor(100 * collected / total) without float drift."""
        for total in range(1, 60):
            for collected in range(total + 1):
                assert completion_percent(collected, total) == (100 * collected) // total
