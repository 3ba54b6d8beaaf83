"""
Crack-Time Estimator
=====================

Converts an entropy estimate into the wall-clock time an exhaustive
search needs at a fixed guess rate:

    years = 2^bits / guesses_per_second / seconds_per_year

All arithmetic is done in log10 space, so 256-bit (or larger) inputs do
not overflow a float the way a direct ``2 ** bits`` would.

Display rules:
    - degenerate input (no entropy, non-finite log) -> ">1M years"
    - under 1 year             -> "<N> days"
    - 1 to 2 years             -> "≈ 1 year"
    - 2 to 1000 years          -> "<N> years"
    - 1000 to 10^6 years       -> "<N>k years"
    - 10^6 years and above     -> "≈ <N>M years" (years reported as inf);
      N switches to exponent form (``3.7e+55``) from 1e21 up

Reference:
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
"""

from __future__ import annotations

import math
from decimal import Decimal

from passforge.analyzers.classifier import round_half_up
from passforge.core.models import CrackTimeEstimate


SECONDS_PER_YEAR: float = 31_557_600.0  # 365.25 days
_LOG10_2: float = math.log10(2.0)
_DEGENERATE_LABEL = ">1M years"
_EXPONENT_FORM_FROM = 1e21


def _number_text(value: float) -> str:
    """Shortest round-trip text for a non-negative float.

    Below 1e21 the digits are written out positionally
    (``123456789012345680000``, ``38``, ``4.5``); from 1e21 up the
    exponent form is used (``3.669229891921972e+55``).
    """
    if value >= _EXPONENT_FORM_FROM:
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    return text[:-2] if text.endswith(".0") else text


class CrackTimeEstimator:
    """Estimates brute-force crack time from entropy bits.

    Usage::

        estimator = CrackTimeEstimator()
        estimate = estimator.estimate(64.0)
        print(estimate.label)   # "585 years"

    Args:
        guesses_per_second: Default attack speed.
    """

    def __init__(self, guesses_per_second: float = 1e9) -> None:
        self._check_rate(guesses_per_second)
        self.guesses_per_second = guesses_per_second

    def estimate(
        self, bits: float, guesses_per_second: float | None = None
    ) -> CrackTimeEstimate:
        """Estimate the time to exhaust ``2 ** bits`` guesses.

        Args:
            bits: Entropy estimate in bits.
            guesses_per_second: Attack speed; defaults to the instance rate.

        Returns:
            CrackTimeEstimate with a display label and a year count.

        Raises:
            ValueError: If the guess rate is not a finite positive number.
        """
        rate = self.guesses_per_second if guesses_per_second is None else guesses_per_second
        self._check_rate(rate)

        log10_years = self.log10_years(bits, rate)
        if bits <= 0 or not math.isfinite(log10_years):
            return CrackTimeEstimate(
                label=_DEGENERATE_LABEL, years=math.inf, guesses_per_second=rate
            )

        if log10_years < 6:
            years = 10.0 ** log10_years
            return CrackTimeEstimate(
                label=self._format_years(years), years=years, guesses_per_second=rate
            )

        millions_log = log10_years - 6
        try:
            thousands = 10.0 ** (log10_years - 3)
            count = _number_text(float(round_half_up(thousands / 1000)))
        except OverflowError:
            # past float range: rebuild the exponent form from the log
            exponent = math.floor(millions_log)
            mantissa = 10.0 ** (millions_log - exponent)
            if mantissa >= 10.0:
                mantissa, exponent = mantissa / 10.0, exponent + 1
            count = f"{_number_text(mantissa)}e+{exponent}"
        return CrackTimeEstimate(
            label=f"≈ {count}M years", years=math.inf, guesses_per_second=rate
        )

    @staticmethod
    def log10_years(bits: float, guesses_per_second: float) -> float:
        return (
            bits * _LOG10_2
            - math.log10(guesses_per_second)
            - math.log10(SECONDS_PER_YEAR)
        )

    @staticmethod
    def _format_years(years: float) -> str:
        if years < 1:
            return f"{round_half_up(years * 365)} days"
        if years < 2:
            return "≈ 1 year"
        if years < 1000:
            return f"{round_half_up(years)} years"
        return f"{round_half_up(years / 1000)}k years"

    @staticmethod
    def _check_rate(guesses_per_second: float) -> None:
        if not math.isfinite(guesses_per_second) or guesses_per_second <= 0:
            raise ValueError(
                f"guesses_per_second must be a finite positive number, "
                f"got {guesses_per_second!r}"
            )
