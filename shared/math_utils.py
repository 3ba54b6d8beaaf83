"""
PassForge Mathematical Utilities
=================================

Entropy and goodness-of-fit primitives used by the strength estimator
and the generator audit.

References:
    [1] Shannon, C. E. (1948). A Mathematical Theory of Communication.
        Bell System Technical Journal, 27(3), 379-423.
    [2] Pearson, K. (1900). On the Criterion that a Given System of
        Deviations ... Philosophical Magazine, 50(302), 157-175.
    [3] Abramowitz, M. & Stegun, I. A. (1964). Handbook of Mathematical
        Functions, 26.4.4 and 26.4.5.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

import numpy as np
from numpy.typing import NDArray


FloatArray = NDArray[np.floating]


# ========================== Entropy ========================================


def shannon_entropy(data: str | bytes | Sequence[object]) -> float:
    """Per-symbol Shannon entropy ``H = -sum(p * log2(p))`` in bits.

    Symbols are code points for ``str`` and byte values for ``bytes``.
    Empty input has zero entropy.
    """
    if not data:
        return 0.0

    n = len(data)
    probs = np.fromiter(Counter(data).values(), dtype=np.float64) / n
    return max(0.0, float(-np.sum(probs * np.log2(probs))))


# ========================== Goodness of fit ================================


def chi_squared_test(
    observed: FloatArray | Sequence[float],
    expected: FloatArray | Sequence[float],
) -> tuple[float, float]:
    """Pearson's chi-squared goodness-of-fit test.

    Args:
        observed: Observed counts, one per bin.
        expected: Expected counts for the same bins; all must be > 0.

    Returns:
        ``(statistic, p_value)`` with ``len(observed) - 1`` degrees of
        freedom. A single bin has nothing to test and yields ``p = 1``.

    Raises:
        ValueError: If the arrays differ in shape or an expected count
            is not positive.
    """
    obs = np.asarray(observed, dtype=np.float64)
    exp = np.asarray(expected, dtype=np.float64)

    if obs.shape != exp.shape:
        raise ValueError(
            f"observed and expected differ in shape: {obs.shape} vs {exp.shape}"
        )
    if np.any(exp <= 0):
        raise ValueError("expected counts must all be positive")

    statistic = float(np.sum((obs - exp) ** 2 / exp))
    dof = obs.size - 1
    if dof <= 0:
        return statistic, 1.0
    return statistic, chi2_survival(statistic, dof)


def chi2_survival(statistic: float, dof: int) -> float:
    """Upper-tail probability of the chi-squared distribution.

    Uses the closed forms for integer degrees of freedom (A&S 26.4.4 for
    odd, 26.4.5 for even). Terms are summed in log space so large
    statistics underflow to 0 instead of overflowing.
    """
    if dof < 1:
        raise ValueError("dof must be >= 1")
    if statistic <= 0:
        return 1.0

    half = statistic / 2.0
    log_half = math.log(half)

    if dof % 2 == 0:
        log_term = -half
        total = math.exp(log_term)
        for i in range(1, dof // 2):
            log_term += log_half - math.log(i)
            total += math.exp(log_term)
    else:
        total = math.erfc(math.sqrt(half))
        # first term: e^-h * h^(1/2) / Gamma(3/2)
        log_term = -half + 0.5 * log_half - math.log(math.sqrt(math.pi) / 2.0)
        for i in range(1, (dof + 1) // 2):
            if i > 1:
                log_term += log_half - math.log(i - 0.5)
            total += math.exp(log_term)

    return min(1.0, max(0.0, total))


def uniform_expected(total: float, bins: int) -> FloatArray:
    """Expected counts for *total* observations spread evenly over *bins*."""
    if bins <= 0:
        raise ValueError("bins must be positive")
    return np.full(bins, total / bins, dtype=np.float64)
