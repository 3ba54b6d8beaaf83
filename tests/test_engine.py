"""Tests for the PasswordEngine facade."""

from __future__ import annotations

import json
import math
import random

import pytest
from pydantic import ValidationError

from shared.config import PassForgeConfig

from passforge.analyzers.backend import ExternalBackend, WordlistOracle
from passforge.analyzers.entropy import classify_char
from passforge.core.engine import COMMON_MESSAGE, EMPTY_MESSAGE, PasswordEngine
from passforge.core.errors import SecureRandomUnavailableError
from passforge.core.models import (
    CharacterClass,
    DEFAULT_CLASSES,
    StrengthLabel,
    StrengthTier,
)


def test_empty_password(engine):
    result = engine.analyze("")
    assert result.bits == 0.0
    assert result.score == 0
    assert result.label is StrengthLabel.VERY_WEAK
    assert result.tier is StrengthTier.BAD
    assert result.crack_time_label == ">1M years"
    assert math.isinf(result.crack_time_years)
    assert result.length == 0
    assert result.is_common is False
    assert result.message == EMPTY_MESSAGE


def test_repeated_character(engine):
    result = engine.analyze("aaaa")
    assert result.bits == pytest.approx(4 * math.log2(26))
    assert result.label is StrengthLabel.VERY_WEAK
    assert result.length == 4


def test_message_format(engine):
    result = engine.analyze("aaaa")
    assert result.message == (
        f"{result.bits:.1f} bits - Very weak • estimate: {result.crack_time_label}"
    )


def test_strong_password(engine):
    result = engine.analyze("xK9#mQ2$vL7@pR4!wN8&")
    assert result.label is StrengthLabel.VERY_STRONG
    assert result.tier is StrengthTier.GOOD
    assert result.is_common is False


def test_common_password_overrides_label():
    engine = PasswordEngine(oracle=WordlistOracle(["correcthorsebatterystaple"]))
    result = engine.analyze("CorrectHorseBatteryStaple")
    assert result.is_common is True
    assert result.label is StrengthLabel.VERY_WEAK
    assert COMMON_MESSAGE in result.message
    assert result.bits > 90


def test_failing_backend_falls_back():
    def broken(_password):
        raise RuntimeError("boom")

    engine = PasswordEngine(backend=ExternalBackend(broken))
    assert engine.analyze("aaaa").bits == pytest.approx(4 * math.log2(26))


def test_backend_value_is_used():
    engine = PasswordEngine(backend=ExternalBackend(lambda pw: 100.0))
    result = engine.analyze("a")
    assert result.bits == 100.0
    assert result.label is StrengthLabel.VERY_STRONG


def test_missing_configured_backend_is_ignored():
    config = PassForgeConfig()
    config.estimator.backend = "passforge_no_such_backend"
    engine = PasswordEngine(config)
    assert engine.analyze("aaaa").bits == pytest.approx(4 * math.log2(26))


def test_missing_configured_wordlist_is_ignored(tmp_path):
    config = PassForgeConfig()
    config.estimator.common_passwords_file = str(tmp_path / "missing.txt")
    engine = PasswordEngine(config)
    assert engine.analyze("password").is_common is False


def test_configured_wordlist(wordlist):
    config = PassForgeConfig()
    config.estimator.common_passwords_file = str(wordlist)
    engine = PasswordEngine(config)
    assert engine.analyze("LETMEIN").is_common is True
    assert engine.analyze("hunter2").is_common is False


def test_generate_defaults(engine):
    password = engine.generate()
    assert len(password) == 12
    assert {classify_char(c) for c in password} == set(CharacterClass)


def test_generate_with_all_flags_off(engine):
    spec = engine.default_spec(lower=False, upper=False, digits=False, symbols=False)
    assert spec.classes == DEFAULT_CLASSES

    password = engine.generate(length=30, lower=False, upper=False, digits=False, symbols=False)
    assert {classify_char(c) for c in password} == set(DEFAULT_CLASSES)


def test_generate_invalid_flags(engine):
    with pytest.raises(ValidationError):
        engine.generate(length=2, lower=True, upper=True, digits=True, symbols=False)


def test_generated_password_analysis(engine):
    result = engine.analyze(engine.generate(length=20))
    assert result.length == 20
    assert result.bits >= 20 * math.log2(26)


def test_audit(engine):
    result = engine.audit(trials=2_000)
    assert result.trials == 2_000
    assert result.length == 12
    assert result.length_failures == 0
    assert result.coverage_failures == 0
    assert len(result.positional) == 4
    assert all(t.p_value > 1e-6 for t in result.positional)


def test_audit_zero_trials(engine):
    with pytest.raises(ValueError):
        engine.audit(trials=0)


def test_configured_symbol_pool_reaches_fallback():
    config = PassForgeConfig()
    config.estimator.symbol_pool_size = 64

    def broken(_password):
        raise RuntimeError("boom")

    engine = PasswordEngine(config, backend=ExternalBackend(broken))
    assert engine.analyze("!!").bits == pytest.approx(12.0)


class _DeadRandom(random.SystemRandom):
    def randrange(self, *args, **kwargs):
        raise OSError("no entropy")


def test_generation_failure_logged_without_traceback(tmp_path):
    log_path = tmp_path / "engine.log"
    config = PassForgeConfig()
    config.global_settings.log_file = str(log_path)
    config.global_settings.log_json = True
    engine = PasswordEngine(config, rng=_DeadRandom())

    with pytest.raises(SecureRandomUnavailableError):
        engine.generate()
    for handler in list(engine.logger.underlying.handlers):
        handler.close()

    entries = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    errors = [e for e in entries if e["level"] == "ERROR"]
    assert len(errors) == 1
    assert "secure random source is unavailable" in errors[0]["message"]
    assert "exc_info" not in errors[0]
