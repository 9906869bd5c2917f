"""Shared test fixtures."""

from __future__ import annotations

import pytest

PI_100 = (
    "3."
    "1415926535897932384626433832795028841971693993751058209749445923078164062862089986280348253421170679"
)

# d, [(multiplier, argument), ...] pairs that evaluate to pi.
EULER = (4, [(5, 7), (4, 68), (2, 117)])
HUTTON = (4, [(1, 2), (1, 3)])
EULER_3_7 = (4, [(2, 3), (1, 7)])


@pytest.fixture()
def pi_100() -> str:
    """Return pi to 100 decimal places."""
    return PI_100


@pytest.fixture(params=[EULER, HUTTON, EULER_3_7], ids=["euler", "hutton", "euler-3-7"])
def pi_formula(request: pytest.FixtureRequest) -> tuple[int, list[tuple[int, int]]]:
    """Return (d, terms) for a formula equal to pi."""
    return request.param
