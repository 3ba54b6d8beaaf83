"""
Password Entropy Estimator
===========================

Bit-strength estimate for an arbitrary password, computed with two
independent heuristics and reported as the larger of the two:

1. Charset-pool model: ``length * log2(pool_size)`` where the pool is the
   sum of the sizes of the character classes actually present.
2. Shannon model: per-symbol Shannon entropy of the password's own
   character distribution, multiplied by its length.

A password of one repeated character scores zero under the Shannon model
but keeps its pool-model bits, so it is weak without being literally
zero bits.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017). Digital Identity Guidelines, Appendix A.
"""

from __future__ import annotations

import math

from shared.math_utils import shannon_entropy

from passforge.core.models import CharacterClass


# Class sizes for the pool model. The symbol class approximates the
# printable-symbol space and is overridable via configuration.
_CLASS_POOL_SIZES: dict[CharacterClass, int] = {
    CharacterClass.LOWER: 26,
    CharacterClass.UPPER: 26,
    CharacterClass.DIGIT: 10,
    CharacterClass.SYMBOL: 32,
}


def classify_char(char: str) -> CharacterClass:
    """Return the character class of a single code point.

    Only ASCII letters and digits are recognised as such; everything
    else, including whitespace and non-ASCII text, counts as a symbol.
    """
    if "a" <= char <= "z":
        return CharacterClass.LOWER
    if "A" <= char <= "Z":
        return CharacterClass.UPPER
    if "0" <= char <= "9":
        return CharacterClass.DIGIT
    return CharacterClass.SYMBOL


class EntropyEstimator:
    """Estimates password entropy in bits.

    Usage::

        estimator = EntropyEstimator()
        bits = estimator.estimate_bits("correct horse")

    Args:
        symbol_pool_size: Assumed size of the symbol class.
    """

    def __init__(self, symbol_pool_size: int = 32) -> None:
        if symbol_pool_size < 1:
            raise ValueError("symbol_pool_size must be >= 1")
        self._pool_sizes = dict(_CLASS_POOL_SIZES)
        self._pool_sizes[CharacterClass.SYMBOL] = symbol_pool_size

    def estimate_bits(self, password: str) -> float:
        """Return the larger of the pool-model and Shannon-model bits."""
        if not password:
            return 0.0
        return max(self.pool_bits(password), self.shannon_bits(password))

    # ------------------------------------------------------------------ #
    #  Pool model
    # ------------------------------------------------------------------ #

    @staticmethod
    def character_classes(password: str) -> set[CharacterClass]:
        """Set of character classes present in *password*."""
        return {classify_char(c) for c in password}

    def pool_size(self, password: str) -> int:
        """Sum of the pool sizes of the classes present, floored at 1."""
        pool = sum(self._pool_sizes[c] for c in self.character_classes(password))
        return max(pool, 1)

    def pool_bits(self, password: str) -> float:
        """Charset-pool entropy: ``length * log2(pool_size)``."""
        if not password:
            return 0.0
        return len(password) * math.log2(self.pool_size(password))

    # ------------------------------------------------------------------ #
    #  Shannon model
    # ------------------------------------------------------------------ #

    @staticmethod
    def shannon_bits(password: str) -> float:
        """Empirical entropy: per-symbol Shannon entropy times length."""
        if not password:
            return 0.0
        return shannon_entropy(password) * len(password)
