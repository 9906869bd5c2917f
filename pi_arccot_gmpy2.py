#!/usr/bin/env python3
"""
Machin-type formula calculator using gmpy2 (GMP under the hood).

- Same command line and output format as pi_arccot.py.
- Plain fixed-point summation of each arccot series on gmpy2.mpz with
  guard bits; independent of the limb kernel, so the two can be
  cross-checked.
- Floor-truncates, matching the limb kernel's behaviour.
"""

from __future__ import annotations

import sys
from typing import Sequence, Tuple

try:
    from gmpy2 import mpz, digits as mpz_digits
except ImportError:
    sys.stderr.write(
        "Error: gmpy2 is not installed.\n"
        "Install it with, for example:\n"
        "  pip install gmpy2\n"
    )
    raise SystemExit(1)

from pi_arccot import (
    BLOCK_WIDTH,
    DEFAULT_ARGS,
    LIMB_BITS,
    LIMB_DIGITS10,
    describe_formula,
    fractional_limbs,
    parse_parameters,
    split_args,
    usage,
)

# Extra bits below the last printed limb to absorb truncation of each term.
GUARD_BITS = 64


# =========================
# Fixed-point arccot
# =========================


def arccot_fixed(argument: int, one: mpz) -> mpz:
    """
    Return arccot(argument) * one, truncated.

    Sums the alternating series
      1/x - 1/(3 x^3) + 1/(5 x^5) - ...
    until the power term underflows to zero. Each term is truncated, so
    the error is at most one unit per term.
    """
    x = mpz(argument)
    x2 = x * x
    power = one // x
    total = power
    divisor = 3
    positive = False
    while power:
        power //= x2
        term = power // divisor
        if positive:
            total += term
        else:
            total -= term
        positive = not positive
        divisor += 2
    return total


# =========================
# Main computation
# =========================


def compute_reference(
    precision: int,
    scale: int,
    terms: Sequence[Tuple[int, int]],
    block_width: int = BLOCK_WIDTH,
) -> str:
    """
    Compute d * sum(multiplier * arccot(argument)) as "<int>[.<digits>]".

    Prints as many fractional digits as the limb kernel does for the same
    precision and block width: 9 per fractional limb.
    """
    frac_limbs = fractional_limbs(precision, block_width)
    bits = frac_limbs * LIMB_BITS + GUARD_BITS
    one = mpz(1) << bits

    total = mpz(0)
    for multiplier, argument in terms:
        total += multiplier * arccot_fixed(argument, one)
    total *= scale

    integer_part = total >> bits
    fraction = total - (integer_part << bits)
    int_str = mpz_digits(integer_part, 10)
    if fraction == 0:
        return int_str

    count = frac_limbs * LIMB_DIGITS10
    frac_scaled = (fraction * mpz(10) ** count) >> bits
    frac_str = mpz_digits(frac_scaled, 10).rjust(count, "0")
    return f"{int_str}.{frac_str}"


def main(argv: list[str]) -> int:
    prog = argv[0] if argv else "pi_arccot_gmpy2.py"
    try:
        help_requested, verbose, positional = split_args(argv)
        if help_requested:
            sys.stdout.write(usage(prog))
            return 0
        precision, scale, terms = parse_parameters(positional or DEFAULT_ARGS)
    except ValueError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.stderr.write(usage(prog))
        return 1

    if verbose:
        sys.stderr.write(
            f"Calculating {describe_formula(scale, terms)} "
            f"with {precision} limbs (Python + gmpy2, arccot series)...\n"
        )

    import time

    start = time.perf_counter()
    result = compute_reference(precision, scale, terms)
    elapsed = time.perf_counter() - start

    if verbose:
        sys.stderr.write(f"Time: {elapsed:.6f} s\n")
    print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
