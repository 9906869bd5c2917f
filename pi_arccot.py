#!/usr/bin/env python3
"""
High-precision Machin-type formula calculator on 32-bit limbs.

Computes

    d * (multiplier1 * arccot(arg1) + multiplier2 * arccot(arg2) + ...)

as a fixed-point number made of 32-bit limbs and prints it in decimal.

- Pure Python 3.10+, no external libraries required.
- Integer-only arithmetic (no decimal, no floats).
- Every arccotangent series is evaluated by running long division: the
  remainders of each division step are kept between blocks of output limbs,
  so a later block continues the division instead of starting over.
- The result is truncated; the last one or two printed digits may be off.
"""

from __future__ import annotations

import sys
from typing import List, Sequence, Tuple


# =========================
# Limb primitives
# =========================

LIMB_BITS = 32
LIMB_BASE = 1 << LIMB_BITS
LIMB_MASK = LIMB_BASE - 1
LIMB_MAX = LIMB_MASK
DOUBLE_LIMB_MAX = (1 << (2 * LIMB_BITS)) - 1

# Largest argument whose square still fits in one limb.
ARG_MAX = (1 << (LIMB_BITS // 2)) - 1

# Decimal digits that always fit in one limb: 10**9 < 2**32.
LIMB_DIGITS10 = 9
LIMB_POW10 = 10 ** LIMB_DIGITS10

# Output limbs per block, and division steps per generation.
BLOCK_WIDTH = 64
BLOCK_HEIGHT = 64

# precision d multiplier1 arg1 ...: pi = 4 * (5 acot 7 + 4 acot 68 + 2 acot 117)
DEFAULT_ARGS = ["17", "4", "5", "7", "4", "68", "2", "117"]


class LimbRangeError(AssertionError):
    """A carry or borrow ran past the most significant limb."""


def split_double(value: int) -> Tuple[int, int]:
    """Split a double-limb value into its (high, low) limbs."""
    if not 0 <= value <= DOUBLE_LIMB_MAX:
        raise ValueError(f"{value} does not fit in {2 * LIMB_BITS} bits")
    return value >> LIMB_BITS, value & LIMB_MASK


def join_double(high: int, low: int) -> int:
    return (high << LIMB_BITS) | low


def fractional_limbs(precision: int, block_width: int = BLOCK_WIDTH) -> int:
    """Fractional limb count: `precision` rounded up to a whole block."""
    return -(-precision // block_width) * block_width


def validate_term(multiplier: int, argument: int) -> None:
    """
    Check one (multiplier, argument) pair.

    The multiplier must fit in a limb. The argument squared must fit in a
    limb, and the argument must be at least 2: arccot(0) would divide by
    zero and the series for arccot(1) never drains.
    """
    if not 0 <= multiplier <= LIMB_MAX:
        raise ValueError(f"multiplier {multiplier} is out of range 0..{LIMB_MAX}")
    if not 2 <= argument <= ARG_MAX:
        raise ValueError(f"argument {argument} is out of range 2..{ARG_MAX}")


# =========================
# Fixed-point accumulator
# =========================


class Accumulator:
    """
    Non-negative fixed-point number, most significant limb first.

    The first `integer_size` limbs hold the integer part and the remaining
    `fractional_size` limbs the fraction, so limbs[integer_size - 1] is the
    unit limb. Digit extraction consumes the value.
    """

    def __init__(self, integer_size: int, fractional_size: int) -> None:
        if integer_size < 1 or fractional_size < 0:
            raise ValueError("accumulator needs at least one integer limb")
        self.integer_size = integer_size
        self.fractional_size = fractional_size
        self.limbs: List[int] = [0] * (integer_size + fractional_size)

    def __len__(self) -> int:
        return len(self.limbs)

    def _next_limb(self, position: int) -> int:
        if position == 0:
            raise LimbRangeError(
                f"carry ran past the most significant of {len(self.limbs)} limbs"
            )
        return position - 1

    def apply_signed_delta(self, delta: int, position: int) -> None:
        """
        Add `delta` to the limb at `position`.

        A positive delta carries and a negative one borrows toward limb 0.
        Limbs after `position` are never read or written. Raises
        LimbRangeError when the carry or borrow does not fit.
        """
        limbs = self.limbs
        if not 0 <= position < len(limbs):
            raise LimbRangeError(f"position {position} outside {len(limbs)} limbs")

        if delta < 0:
            d = -delta
            while d > limbs[position]:
                d_low = d & LIMB_MASK
                d >>= LIMB_BITS
                if d_low > limbs[position]:
                    limbs[position] = LIMB_BASE + limbs[position] - d_low
                    d += 1
                else:
                    limbs[position] -= d_low
                position = self._next_limb(position)
            limbs[position] -= d
        else:
            d = delta
            while d:
                d += limbs[position]
                limbs[position] = d & LIMB_MASK
                d >>= LIMB_BITS
                if d:
                    position = self._next_limb(position)

    def extract_integer_digits(self) -> str:
        """
        Return the integer part in decimal, zeroing the integer limbs.

        Each pass divides the whole integer part by 10; the remainder is the
        next digit, least significant first. Digits are reversed at the end.
        """
        limbs = self.limbs
        size = self.integer_size

        top = 0
        while top < size and limbs[top] == 0:
            top += 1

        digits: List[str] = []
        while top < size:
            rem = 0
            for i in range(top, size):
                rem = (rem << LIMB_BITS) + limbs[i]
                limbs[i], rem = divmod(rem, 10)
            digits.append(str(rem))
            while top < size and limbs[top] == 0:
                top += 1

        if not digits:
            return "0"
        return "".join(reversed(digits))

    def extract_fractional_digits(self, count: int | None = None) -> str:
        """
        Return the fractional part in decimal, zeroing the fractional limbs.

        Each pass multiplies the fraction by 10**9 and takes the 9 digits
        that overflow into the unit limb. Stops when the fraction is zero or
        once more than `count` digits have been produced; the default count
        leaves the last block of 9 covering the final two digits.
        """
        limbs = self.limbs
        unit = self.integer_size - 1
        if any(limbs[: self.integer_size]):
            raise RuntimeError("integer digits must be extracted first")
        if count is None:
            count = self.fractional_size * LIMB_DIGITS10 - 2

        last = len(limbs) - 1
        while last > unit and limbs[last] == 0:
            last -= 1

        parts: List[str] = []
        emitted = 0
        while last > unit and emitted <= count:
            carry = 0
            for i in range(last, unit - 1, -1):
                carry += limbs[i] * LIMB_POW10
                limbs[i] = carry & LIMB_MASK
                carry >>= LIMB_BITS
            parts.append(str(limbs[unit]).zfill(LIMB_DIGITS10))
            emitted += LIMB_DIGITS10
            limbs[unit] = 0
            while last > unit and limbs[last] == 0:
                last -= 1

        return "".join(parts)


# =========================
# Term state
# =========================


class TermSet:
    """The (multiplier, argument) pairs of a formula plus argument squares."""

    def __init__(self, terms: Sequence[Tuple[int, int]]) -> None:
        if not terms:
            raise ValueError("at least one (multiplier, argument) pair is required")
        for multiplier, argument in terms:
            validate_term(multiplier, argument)
        self.multipliers = [m for m, _ in terms]
        self.arguments = [a for _, a in terms]
        self.arg_squares = [a * a for a in self.arguments]

    def __len__(self) -> int:
        return len(self.arguments)

    def numerators(self, scale: int) -> List[int]:
        """Series numerators, argument * multiplier * scale, one per term."""
        return [a * m * scale for m, a in zip(self.multipliers, self.arguments)]


class Generation:
    """
    Remainders of `block_height` consecutive division steps.

    For every step there is one remainder per term followed by the
    remainder of the division by that step's odd divisor. Only the first
    `arg_count` terms take part; `arg_count` never decreases.

    Generations are kept in a grow-only list: index order is generation
    order, and a generation is never reordered or removed.
    """

    __slots__ = ("arg_count", "remainders")

    def __init__(self, arg_count: int, term_count: int, block_height: int) -> None:
        self.arg_count = arg_count
        self.remainders: List[int] = [0] * ((term_count + 1) * block_height)


# =========================
# Block processing
# =========================


class ArccotComputation:
    """
    One evaluation of d * sum(multiplier * arccot(argument)).

    Construct from validated parameters, call run(), then render() once;
    rendering consumes the accumulator.

    The quotient buffer has `block_width` rows of one limb per term. Row r
    of the current block lines up with accumulator limb block_offset + r.
    Rows are divided in place by argument**2 once per division step, so
    after step k a term's column holds the next limbs of
    multiplier * d / argument**(2k + 1).
    """

    def __init__(
        self,
        precision: int,
        scale: int,
        terms: Sequence[Tuple[int, int]],
        block_width: int = BLOCK_WIDTH,
        block_height: int = BLOCK_HEIGHT,
    ) -> None:
        if precision < 1:
            raise ValueError("precision must be at least one limb")
        if scale < 1:
            raise ValueError("d must be positive")
        if block_width < 2 or block_height < 1:
            raise ValueError("block_width must be >= 2 and block_height >= 1")

        self.precision = precision
        self.scale = scale
        self.block_width = block_width
        self.block_height = block_height
        self.terms = TermSet(terms)
        self.accumulator = Accumulator(
            block_width, fractional_limbs(precision, block_width)
        )

        # The numerator sits in the two rows ending at the unit limb.
        n = len(self.terms)
        self.quotients: List[int] = [0] * (block_width * n)
        for i, numerator in enumerate(self.terms.numerators(scale)):
            high, low = split_double(numerator)
            self.quotients[(block_width - 1) * n + i] = low
            self.quotients[(block_width - 2) * n + i] = high

        self.generations: List[Generation] = []
        self.block_offset = 0
        self.active_count = n
        self._rendered = False

    @property
    def finished(self) -> bool:
        return self.block_offset >= len(self.accumulator)

    def run(self) -> None:
        while not self.finished:
            self.process_block()

    def process_block(self) -> None:
        """
        Produce the next `block_width` accumulator limbs.

        Generations are visited in order, each continuing the odd-divisor
        sequence where the previous one stopped. A new generation is added
        only when the existing ones are used up and some term is still
        active.
        """
        term_count = len(self.terms)
        active = term_count
        index = 0
        divisor_offset = 1
        while index < len(self.generations) or active > 0:
            if index == len(self.generations):
                self.generations.append(
                    Generation(active, term_count, self.block_height)
                )
            generation = self.generations[index]
            generation.arg_count = max(generation.arg_count, active)
            self.process_generation(generation, divisor_offset)
            active = self.count_active_terms()
            divisor_offset += 2 * self.block_height
            index += 1
        self.active_count = active
        self.block_offset += self.block_width

    def process_generation(self, generation: Generation, divisor_offset: int) -> None:
        """
        Run one generation's division steps over every quotient row.

        Per row and step: divide each active term's limb by its argument
        squared, sum the quotients, divide the sum by the odd divisor and
        add or subtract the result into the row's delta. The delta goes to
        the accumulator at the row's limb.
        """
        n = len(self.terms)
        stride = n + 1
        arg_count = generation.arg_count
        arg_squares = self.terms.arg_squares
        remainders = generation.remainders
        quotients = self.quotients
        steps = range(0, self.block_height * stride, stride)
        # Series term k = (divisor - 1) / 2 carries the sign (-1)**k.
        first_positive = (divisor_offset - 1) // 2 % 2 == 0

        position = self.block_offset
        for row in range(0, len(quotients), n):
            delta = 0
            divisor = divisor_offset
            positive = first_positive
            for step in steps:
                total = 0
                for i in range(arg_count):
                    value = join_double(remainders[step + i], quotients[row + i])
                    q, remainders[step + i] = divmod(value, arg_squares[i])
                    quotients[row + i] = q
                    total += q
                total += remainders[step + n] << LIMB_BITS
                q, remainders[step + n] = divmod(total, divisor)
                if positive:
                    delta += q
                else:
                    delta -= q
                positive = not positive
                divisor += 2
            self.accumulator.apply_signed_delta(delta, position)
            position += 1

    def count_active_terms(self) -> int:
        """Return one past the last term with a nonzero quotient limb."""
        n = len(self.terms)
        for i in range(n - 1, -1, -1):
            if any(self.quotients[i::n]):
                return i + 1
        return 0

    def render(self) -> str:
        """Return "<integer>[.<fraction>]", consuming the accumulator."""
        if not self.finished:
            raise RuntimeError("render() called before run() finished")
        if self._rendered:
            raise RuntimeError("accumulator was already consumed by render()")
        self._rendered = True
        integer_part = self.accumulator.extract_integer_digits()
        fractional_part = self.accumulator.extract_fractional_digits()
        if fractional_part:
            return f"{integer_part}.{fractional_part}"
        return integer_part


def compute(
    precision: int,
    scale: int,
    terms: Sequence[Tuple[int, int]],
    block_width: int = BLOCK_WIDTH,
    block_height: int = BLOCK_HEIGHT,
) -> str:
    """
    Compute d * sum(multiplier * arccot(argument)) as a decimal string.

    `precision` is the number of 32-bit fractional limbs, rounded up to a
    whole block. The result is truncated, not rounded.
    """
    computation = ArccotComputation(precision, scale, terms, block_width, block_height)
    computation.run()
    return computation.render()


# =========================
# Command line
# =========================


def usage(prog: str) -> str:
    return (
        "Usage:\n"
        f"{prog} [-h] [-v] precision d multiplier1 arg1 multiplier2 arg2 ...\n\n"
        f"where precision is the number of {LIMB_BITS} bit limbs used for the fraction\n"
        "(suffixes K and M and <int>e<int> are accepted), and the computation done is:\n"
        "d * (multiplier1 * arccot(arg1) + multiplier2 * arccot(arg2) + ...)\n\n"
        f"Multipliers are 0..{LIMB_MAX}, arguments 2..{ARG_MAX}.\n"
        f"Without arguments: {prog} {' '.join(DEFAULT_ARGS)}\n"
        "  -h, --help     show this message\n"
        "  -v, --verbose  report progress and timing on stderr\n"
    )


def parse_limb_count(spec: str) -> int:
    """
    Parse a limb count like "17", "2K", "1M" or "1e3".

    Suffixes (case-insensitive): K = 1_000, M = 1_000_000.
    Raises ValueError on invalid input.
    """
    s = spec.strip()
    if not s:
        raise ValueError("Empty precision")

    # 1) Scientific notation: "<int>e<int>"
    for idx, ch in enumerate(s):
        if ch in ("e", "E"):
            mantissa_str = s[:idx]
            exp_str = s[idx + 1 :]
            if not mantissa_str.isdecimal() or not exp_str.isdecimal():
                raise ValueError(f"Invalid scientific notation: {spec!r}")
            value = int(mantissa_str) * (10 ** int(exp_str))
            if value <= 0:
                raise ValueError(f"Precision must be positive: {spec!r}")
            return value

    # 2) Suffix-based notation: K, M
    multiplier = 1
    if s[-1] in "kK":
        multiplier = 1_000
    elif s[-1] in "mM":
        multiplier = 1_000_000
    if multiplier != 1:
        s = s[:-1].strip()
        if not s:
            raise ValueError(f"Missing number before suffix in {spec!r}")

    if not s.isdecimal():
        raise ValueError(f"Invalid precision: {spec!r}")
    base = int(s)
    if base <= 0:
        raise ValueError(f"Precision must be positive: {spec!r}")
    return base * multiplier


def parse_uint(text: str, name: str) -> int:
    s = text.strip()
    if not s.isdecimal():
        raise ValueError(f"{name} must be a non-negative integer: {text!r}")
    return int(s)


def parse_parameters(args: Sequence[str]) -> Tuple[int, int, List[Tuple[int, int]]]:
    """
    Read `precision d multiplier1 arg1 multiplier2 arg2 ...`.

    Returns (precision, d, [(multiplier, argument), ...]).
    Raises ValueError on missing, malformed or out-of-range values.
    """
    if len(args) < 2:
        raise ValueError("precision and d are required")
    precision = parse_limb_count(args[0])
    scale = parse_uint(args[1], "d")
    if scale < 1:
        raise ValueError("d must be positive")

    pairs = args[2:]
    if not pairs:
        raise ValueError("at least one multiplier/argument pair is required")
    if len(pairs) % 2:
        raise ValueError(f"multiplier {pairs[-1]!r} has no matching argument")

    terms: List[Tuple[int, int]] = []
    for i in range(0, len(pairs), 2):
        multiplier = parse_uint(pairs[i], "multiplier")
        argument = parse_uint(pairs[i + 1], "argument")
        validate_term(multiplier, argument)
        if argument * multiplier * scale > DOUBLE_LIMB_MAX:
            raise ValueError(
                f"d * multiplier * argument for arccot({argument}) "
                f"does not fit in {2 * LIMB_BITS} bits"
            )
        terms.append((multiplier, argument))
    return precision, scale, terms


def split_args(argv: Sequence[str]) -> Tuple[bool, bool, List[str]]:
    """
    Separate flags from positional arguments.

    Returns (help_requested, verbose, positional). The program name in
    argv[0] is skipped.
    """
    help_requested = False
    verbose = False
    positional: List[str] = []
    for arg in argv[1:]:
        if arg in ("-h", "--help"):
            help_requested = True
        elif arg in ("-v", "--verbose"):
            verbose = True
        elif arg.startswith("-"):
            raise ValueError(f"Unknown option {arg!r}")
        else:
            positional.append(arg)
    return help_requested, verbose, positional


def describe_formula(scale: int, terms: Sequence[Tuple[int, int]]) -> str:
    inner = " + ".join(f"{m} * arccot({a})" for m, a in terms)
    return f"{scale} * ({inner})"


def main(argv: list[str]) -> int:
    prog = argv[0] if argv else "pi_arccot.py"
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
            f"with {precision} limbs (Python int-only, arccot long division)...\n"
        )

    import time

    start = time.perf_counter()
    result = compute(precision, scale, terms)
    elapsed = time.perf_counter() - start

    if verbose:
        sys.stderr.write(f"Time: {elapsed:.4f} s\n")
    print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
