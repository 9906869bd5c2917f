"""Tests for limb primitives and term validation."""

from __future__ import annotations

import pytest

from pi_arccot import (
    ARG_MAX,
    DOUBLE_LIMB_MAX,
    LIMB_MAX,
    LIMB_POW10,
    fractional_limbs,
    join_double,
    split_double,
    validate_term,
)


class TestDoubleLimbs:
    """split_double() and join_double() move between one value and two limbs."""

    def test_split_small(self) -> None:
        assert split_double(140) == (0, 140)

    def test_split_high(self) -> None:
        assert split_double((7 << 32) | 9) == (7, 9)

    def test_split_max(self) -> None:
        assert split_double(DOUBLE_LIMB_MAX) == (LIMB_MAX, LIMB_MAX)

    def test_split_too_wide(self) -> None:
        with pytest.raises(ValueError):
            split_double(DOUBLE_LIMB_MAX + 1)

    def test_split_negative(self) -> None:
        with pytest.raises(ValueError):
            split_double(-1)

    def test_join(self) -> None:
        assert join_double(7, 9) == (7 << 32) | 9

    def test_pow10_fits_in_limb(self) -> None:
        assert LIMB_POW10 <= LIMB_MAX < LIMB_POW10 * 10


class TestFractionalLimbs:
    """fractional_limbs() rounds precision up to whole blocks."""

    def test_rounds_up(self) -> None:
        assert fractional_limbs(1) == 64
        assert fractional_limbs(17) == 64
        assert fractional_limbs(65) == 128

    def test_exact_multiple(self) -> None:
        assert fractional_limbs(128) == 128

    def test_custom_block(self) -> None:
        assert fractional_limbs(5, block_width=4) == 8


class TestValidateTerm:
    """validate_term() enforces limb-sized multipliers and half-limb arguments."""

    def test_bounds_accepted(self) -> None:
        validate_term(0, 2)
        validate_term(LIMB_MAX, ARG_MAX)

    def test_multiplier_too_large(self) -> None:
        with pytest.raises(ValueError, match="multiplier"):
            validate_term(LIMB_MAX + 1, 5)

    def test_argument_too_large(self) -> None:
        with pytest.raises(ValueError, match="argument"):
            validate_term(1, ARG_MAX + 1)

    def test_argument_zero(self) -> None:
        with pytest.raises(ValueError):
            validate_term(1, 0)

    def test_argument_one(self) -> None:
        with pytest.raises(ValueError):
            validate_term(1, 1)
