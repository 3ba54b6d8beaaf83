"""
Secure Password Generator
==========================

Produces random passwords that contain at least one character from every
requested class, drawing every random index from the operating system's
CSPRNG through :class:`secrets.SystemRandom`.

Algorithm:
    1. Collect the requested pools in canonical order
       (lower, upper, digit, symbol).
    2. Seed the output with one character from each pool.
    3. Fill up to the requested length from the concatenated pool.
    4. Fisher-Yates shuffle with a secure index for every swap.

Index selection uses :meth:`random.SystemRandom.randrange`, which
rejection-samples ``getrandbits`` output, so there is no modulo bias
for any pool size.

References:
    - Knuth, D. E. (1997). The Art of Computer Programming, Volume 2:
      Seminumerical Algorithms (3rd ed.), Algorithm 3.4.2P.
    - Python ``secrets`` module documentation (PEP 506).
"""

from __future__ import annotations

import random
import secrets
import string
from typing import MutableSequence, Optional, TypeVar

from passforge.core.errors import SecureRandomUnavailableError
from passforge.core.models import CharacterClass, GeneratorSpec


T = TypeVar("T")

POOLS: dict[CharacterClass, str] = {
    CharacterClass.LOWER: string.ascii_lowercase,
    CharacterClass.UPPER: string.ascii_uppercase,
    CharacterClass.DIGIT: string.digits,
    CharacterClass.SYMBOL: "!@#$%^&*()-_=+[]{};:,.<>/?|~",
}


class SecureGenerator:
    """Pool-constrained password generator.

    Usage::

        generator = SecureGenerator()
        spec = GeneratorSpec.from_flags(16, lower=True, upper=True, symbols=True)
        password = generator.generate(spec)

    Args:
        rng: A :class:`random.SystemRandom` instance. Any other random
             source is refused; there is no insecure fallback.
    """

    def __init__(self, rng: Optional[random.SystemRandom] = None) -> None:
        if rng is None:
            rng = secrets.SystemRandom()
        if not isinstance(rng, random.SystemRandom):
            raise TypeError(
                f"rng must be a random.SystemRandom instance, got {type(rng).__name__}"
            )
        self._rng = rng

    def generate(self, spec: GeneratorSpec) -> str:
        """Generate one password satisfying *spec*.

        Raises:
            SecureRandomUnavailableError: If the OS entropy source fails.
        """
        pools = [POOLS[c] for c in spec.ordered_classes]

        out = [self.choice(pool) for pool in pools]

        combined = "".join(pools)
        while len(out) < spec.length:
            out.append(self.choice(combined))

        self.shuffle(out)
        return "".join(out[: spec.length])

    def choice(self, pool: str) -> str:
        """Uniformly random character from *pool*."""
        if not pool:
            raise ValueError("cannot choose from an empty pool")
        return pool[self.randbelow(len(pool))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle of *items* in place."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]

    def randbelow(self, n: int) -> int:
        """Unbiased secure integer in ``[0, n)``."""
        try:
            return self._rng.randrange(n)
        except (NotImplementedError, OSError) as exc:
            raise SecureRandomUnavailableError(
                "secure random source is unavailable"
            ) from exc
