"""
Generator Auditor
==================

Statistical self-check of :class:`SecureGenerator`. Generates a batch of
passwords for a spec and verifies:

1. Every password has exactly the requested length.
2. Every password contains at least one character of each requested class.
3. Positional uniformity: for each class, the number of its characters
   seen at each position follows a uniform distribution over positions
   (Pearson chi-squared goodness-of-fit). A biased shuffle concentrates
   the seeded per-class characters at fixed positions and fails this test.

References:
    - Pearson, K. (1900). On the criterion that a given system of
      deviations from the probable ... Philosophical Magazine, 50(302).
    - NIST SP 800-22 Rev. 1a (2010). A Statistical Test Suite for
      Random and Pseudorandom Number Generators.
"""

from __future__ import annotations

import numpy as np

from shared.math_utils import chi_squared_test, uniform_expected

from passforge.analyzers.entropy import classify_char
from passforge.analyzers.generator import SecureGenerator
from passforge.core.models import AuditResult, GeneratorSpec, PositionalTest


class GeneratorAuditor:
    """Runs the generator many times and tests the output statistically.

    Usage::

        auditor = GeneratorAuditor()
        result = auditor.audit(GeneratorSpec(length=16), trials=10_000)
        assert result.passed

    Args:
        generator: Generator under test.
        significance: Minimum acceptable p-value for each positional test.
    """

    def __init__(
        self,
        generator: SecureGenerator | None = None,
        significance: float = 0.001,
    ) -> None:
        if not 0.0 < significance < 1.0:
            raise ValueError("significance must be in (0, 1)")
        self.generator = generator or SecureGenerator()
        self.significance = significance

    def audit(self, spec: GeneratorSpec, trials: int) -> AuditResult:
        if trials < 1:
            raise ValueError("trials must be >= 1")

        classes = spec.ordered_classes
        index = {c: i for i, c in enumerate(classes)}
        counts = np.zeros((len(classes), spec.length), dtype=np.int64)
        length_failures = 0
        coverage_failures = 0

        for _ in range(trials):
            password = self.generator.generate(spec)
            if len(password) != spec.length:
                length_failures += 1

            seen = set()
            for pos, char in enumerate(password[: spec.length]):
                cls = classify_char(char)
                seen.add(cls)
                if cls in index:
                    counts[index[cls], pos] += 1
            if not spec.classes <= seen:
                coverage_failures += 1

        positional = [
            self._positional_test(c, counts[index[c]]) for c in classes
        ]

        return AuditResult(
            trials=trials,
            length=spec.length,
            classes=classes,
            length_failures=length_failures,
            coverage_failures=coverage_failures,
            positional=positional,
            significance=self.significance,
            passed=(
                length_failures == 0
                and coverage_failures == 0
                and all(t.passed for t in positional)
            ),
        )

    def _positional_test(self, character_class, observed: np.ndarray) -> PositionalTest:
        total = float(observed.sum())
        if total == 0:
            return PositionalTest(
                character_class=character_class,
                chi_squared=0.0,
                p_value=0.0,
                passed=False,
            )
        chi2, p_value = chi_squared_test(observed, uniform_expected(total, len(observed)))
        return PositionalTest(
            character_class=character_class,
            chi_squared=chi2,
            p_value=p_value,
            passed=p_value >= self.significance,
        )
