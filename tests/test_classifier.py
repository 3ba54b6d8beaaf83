"""Tests for scoring, labelling and tiering."""

from __future__ import annotations

import math

import pytest

from passforge.analyzers.classifier import StrengthClassifier, round_half_up
from passforge.core.models import StrengthLabel, StrengthTier


@pytest.fixture
def classifier() -> StrengthClassifier:
    return StrengthClassifier()


@pytest.mark.parametrize("bits", [0.0, 50.0, 200.0])
def test_common_password_is_always_very_weak(classifier, bits):
    result = classifier.classify(bits, is_common=True)
    assert result.label is StrengthLabel.VERY_WEAK


@pytest.mark.parametrize(
    "bits, expected",
    [
        (0.0, StrengthLabel.VERY_WEAK),
        (27.99, StrengthLabel.VERY_WEAK),
        (28.0, StrengthLabel.WEAK),
        (35.99, StrengthLabel.WEAK),
        (36.0, StrengthLabel.MODERATE),
        (59.99, StrengthLabel.MODERATE),
        (60.0, StrengthLabel.STRONG),
        (89.999, StrengthLabel.STRONG),
        (90.0, StrengthLabel.VERY_STRONG),
        (500.0, StrengthLabel.VERY_STRONG),
    ],
)
def test_label_boundaries(classifier, bits, expected):
    assert classifier.label(bits) is expected


@pytest.mark.parametrize(
    "bits, expected",
    [(0.0, 0), (64.0, 50), (128.0, 100), (256.0, 100), (32.0, 25)],
)
def test_score(classifier, bits, expected):
    assert classifier.score(bits) == expected


def test_score_is_never_negative(classifier):
    assert classifier.score(-10.0) == 0


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round(2.5) == 2


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, StrengthTier.GOOD),
        (76, StrengthTier.GOOD),
        (75, StrengthTier.WARNING),
        (46, StrengthTier.WARNING),
        (45, StrengthTier.BAD),
        (0, StrengthTier.BAD),
    ],
)
def test_tier(classifier, score, expected):
    assert classifier.tier(score) is expected


def test_classify_combines_score_label_and_tier(classifier):
    result = classifier.classify(100.0)
    assert result.score == 78
    assert result.label is StrengthLabel.VERY_STRONG
    assert result.tier is StrengthTier.GOOD


def test_custom_ceiling():
    classifier = StrengthClassifier(ceiling_bits=64.0)
    assert classifier.score(32.0) == 50
    assert classifier.score(64.0) == 100


def test_invalid_ceiling():
    with pytest.raises(ValueError):
        StrengthClassifier(ceiling_bits=0.0)


@pytest.mark.parametrize("bits", [math.nan, math.inf, -math.inf, -5.0])
def test_unusable_bits_classify_as_zero(classifier, bits):
    result = classifier.classify(bits)
    assert result.score == 0
    assert result.label is StrengthLabel.VERY_WEAK
    assert result.tier is StrengthTier.BAD
