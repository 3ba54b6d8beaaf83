"""
Strength Classifier
====================

Maps an entropy estimate and the common-password oracle's verdict to a
0-100 score, a colour tier and a qualitative label.

Label thresholds (bits, half-open, boundaries belong to the higher
category):

    [0, 28)   very weak
    [28, 36)  weak
    [36, 60)  moderate
    [60, 90)  strong
    [90, inf) very strong

A password found by the oracle is always "very weak": dictionary
membership overrides the numeric estimate. Bit counts that are not
finite non-negative numbers are scored as zero bits.
"""

from __future__ import annotations

import math

from passforge.core.models import Classification, StrengthLabel, StrengthTier


_LABEL_THRESHOLDS: list[tuple[float, StrengthLabel]] = [
    (28.0, StrengthLabel.VERY_WEAK),
    (36.0, StrengthLabel.WEAK),
    (60.0, StrengthLabel.MODERATE),
    (90.0, StrengthLabel.STRONG),
]

# Exclusive lower bounds on the score
_GOOD_ABOVE = 75
_WARNING_ABOVE = 45


def _usable_bits(bits: float) -> float:
    return bits if math.isfinite(bits) and bits >= 0 else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity.

    Python's :func:`round` uses banker's rounding; display values here
    follow the conventional half-up rule instead.
    """
    return math.floor(value + 0.5)


class StrengthClassifier:
    """Scores and labels entropy estimates.

    Usage::

        classifier = StrengthClassifier()
        result = classifier.classify(72.4, is_common=False)
        print(result.score, result.label.value, result.tier.value)

    Args:
        ceiling_bits: Bit count that maps to a score of 100.
    """

    def __init__(self, ceiling_bits: float = 128.0) -> None:
        if ceiling_bits <= 0:
            raise ValueError("ceiling_bits must be positive")
        self.ceiling_bits = ceiling_bits

    def classify(self, bits: float, is_common: bool = False) -> Classification:
        score = self.score(bits)
        return Classification(
            score=score,
            label=self.label(bits, is_common),
            tier=self.tier(score),
        )

    def score(self, bits: float) -> int:
        """``round(min(100, bits / ceiling * 100))`` clamped to [0, 100]."""
        raw = min(100.0, (_usable_bits(bits) / self.ceiling_bits) * 100.0)
        return max(0, round_half_up(raw))

    @staticmethod
    def label(bits: float, is_common: bool = False) -> StrengthLabel:
        if is_common:
            return StrengthLabel.VERY_WEAK
        bits = _usable_bits(bits)
        for upper_bound, label in _LABEL_THRESHOLDS:
            if bits < upper_bound:
                return label
        return StrengthLabel.VERY_STRONG

    @staticmethod
    def tier(score: int) -> StrengthTier:
        if score > _GOOD_ABOVE:
            return StrengthTier.GOOD
        if score > _WARNING_ABOVE:
            return StrengthTier.WARNING
        return StrengthTier.BAD
