"""Tests for the generator auditor."""

from __future__ import annotations

import pytest

from passforge.analyzers.audit import GeneratorAuditor
from passforge.analyzers.generator import SecureGenerator
from passforge.core.models import CharacterClass, GeneratorSpec


class _NoShuffle(SecureGenerator):
    def shuffle(self, items):
        pass


class _Truncating(SecureGenerator):
    def generate(self, spec):
        return super().generate(spec)[:-1]


def test_secure_generator_passes():
    auditor = GeneratorAuditor()
    spec = GeneratorSpec.from_flags(10, lower=True, digits=True)
    result = auditor.audit(spec, 3_000)

    assert result.classes == [CharacterClass.LOWER, CharacterClass.DIGIT]
    assert result.length_failures == 0
    assert result.coverage_failures == 0
    assert [t.character_class for t in result.positional] == result.classes
    assert all(t.p_value > 1e-6 for t in result.positional)


def test_missing_shuffle_is_detected():
    auditor = GeneratorAuditor(_NoShuffle())
    spec = GeneratorSpec.from_flags(8, lower=True, upper=True, digits=True, symbols=True)
    result = auditor.audit(spec, 2_000)

    assert result.coverage_failures == 0
    assert result.passed is False
    assert any(not t.passed for t in result.positional)


def test_length_failures_are_counted():
    auditor = GeneratorAuditor(_Truncating())
    result = auditor.audit(GeneratorSpec(length=6), 50)
    assert result.length_failures == 50
    assert result.passed is False


def test_invalid_trials():
    with pytest.raises(ValueError):
        GeneratorAuditor().audit(GeneratorSpec(), 0)


@pytest.mark.parametrize("significance", [0.0, 1.0, -0.5])
def test_invalid_significance(significance):
    with pytest.raises(ValueError):
        GeneratorAuditor(significance=significance)
