"""Tests for the entropy estimator."""

from __future__ import annotations

import math

import pytest

from passforge.analyzers.entropy import EntropyEstimator, classify_char
from passforge.core.models import CharacterClass


@pytest.fixture
def estimator() -> EntropyEstimator:
    return EntropyEstimator()


def test_empty_password_has_zero_bits(estimator):
    assert estimator.estimate_bits("") == 0.0
    assert estimator.pool_bits("") == 0.0
    assert estimator.shannon_bits("") == 0.0


def test_repeated_character_keeps_pool_bits(estimator):
    assert estimator.shannon_bits("aaaa") == 0.0
    assert estimator.estimate_bits("aaaa") == pytest.approx(4 * math.log2(26))


def test_all_four_classes_give_pool_of_94(estimator):
    assert estimator.pool_size("aA1!") == 94
    assert estimator.estimate_bits("aA1!") == pytest.approx(4 * math.log2(94))


@pytest.mark.parametrize(
    "char, expected",
    [
        ("q", CharacterClass.LOWER),
        ("Q", CharacterClass.UPPER),
        ("7", CharacterClass.DIGIT),
        ("~", CharacterClass.SYMBOL),
        (" ", CharacterClass.SYMBOL),
        ("é", CharacterClass.SYMBOL),
        ("Ж", CharacterClass.SYMBOL),
        ("中", CharacterClass.SYMBOL),
    ],
)
def test_classify_char(char, expected):
    assert classify_char(char) is expected


def test_non_ascii_counts_as_symbol(estimator):
    assert estimator.character_classes("é中") == {CharacterClass.SYMBOL}
    assert estimator.pool_size("é中") == 32


def test_shannon_wins_for_many_distinct_symbols(estimator):
    password = "".join(chr(0x4E00 + i) for i in range(40))
    pool = estimator.pool_bits(password)
    shannon = estimator.shannon_bits(password)

    assert pool == pytest.approx(40 * 5.0)
    assert shannon == pytest.approx(40 * math.log2(40))
    assert estimator.estimate_bits(password) == pytest.approx(shannon)


def test_estimate_is_max_of_both_models(estimator):
    for password in ["abc", "Tr0ub4dor&3", "correct horse battery staple", "zzzzzz9"]:
        assert estimator.estimate_bits(password) == pytest.approx(
            max(estimator.pool_bits(password), estimator.shannon_bits(password))
        )


def test_bits_grow_with_length(estimator):
    previous = 0.0
    for n in range(1, 30):
        bits = estimator.estimate_bits("aB3$" * n)
        assert bits > previous
        previous = bits


def test_custom_symbol_pool_size():
    estimator = EntropyEstimator(symbol_pool_size=64)
    assert estimator.pool_size("!!") == 64
    assert estimator.estimate_bits("!!") == pytest.approx(12.0)


def test_invalid_symbol_pool_size():
    with pytest.raises(ValueError):
        EntropyEstimator(symbol_pool_size=0)
