"""
PassForge Core Data Models
===========================

Pydantic models for the strength-estimation pipeline and the secure
generator. Every model is produced fresh per call and serialisable to
JSON for the CLI's machine-readable output.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
      Bell System Technical Journal, 27(3), 379-423.
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Pearson, K. (1900). On the criterion that a given system of
      deviations from the probable. Philosophical Magazine, 50(302).
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class CharacterClass(str, enum.Enum):
    """Character classes recognised by the estimator and generator.

    Declaration order is the canonical pool order used by the generator.
    """

    LOWER = "lower"
    UPPER = "upper"
    DIGIT = "digit"
    SYMBOL = "symbol"


DEFAULT_CLASSES: frozenset[CharacterClass] = frozenset(
    {CharacterClass.LOWER, CharacterClass.UPPER, CharacterClass.DIGIT}
)


class StrengthLabel(str, enum.Enum):
    """Qualitative strength rating derived from entropy bits."""

    VERY_WEAK = "very weak"
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    VERY_STRONG = "very strong"


class StrengthTier(str, enum.Enum):
    """Colour tier for visual encodings of the 0-100 score."""

    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"


# ===================================================================== #
#  Estimation Models
# ===================================================================== #


class Classification(BaseModel):
    """Score, label and tier for a bit count.

    Attributes:
        score: Normalised strength in [0, 100].
        label: Qualitative label.
        tier: Colour tier derived from the score.
    """

    score: int = Field(default=0, ge=0, le=100)
    label: StrengthLabel = StrengthLabel.VERY_WEAK
    tier: StrengthTier = StrengthTier.BAD


class CrackTimeEstimate(BaseModel):
    """Brute-force crack time at a fixed guess rate.

    Attributes:
        label: Human-readable estimate (e.g. ``"≈ 1 year"``).
        years: Estimated years; ``inf`` when too large to be meaningful.
        guesses_per_second: Attack speed the estimate assumes.
    """

    label: str
    years: float
    guesses_per_second: float = 1e9


class StrengthResult(BaseModel):
    """Complete result of one password analysis.

    Attributes:
        bits: Estimated entropy in bits.
        score: Numeric score from 0 to 100.
        label: Qualitative strength label.
        crack_time_label: Display string for the crack-time estimate.
        crack_time_years: Crack time in years (``inf`` for huge values).
        tier: Colour tier for the score.
        is_common: Whether the common-password oracle matched.
        length: Password length in code points.
        message: One-line feedback suitable for a status bar.
    """

    bits: float = Field(default=0.0, ge=0.0)
    score: int = Field(default=0, ge=0, le=100)
    label: StrengthLabel = StrengthLabel.VERY_WEAK
    crack_time_label: str = ""
    crack_time_years: float = 0.0
    tier: StrengthTier = StrengthTier.BAD
    is_common: bool = False
    length: int = 0
    message: str = ""


# ===================================================================== #
#  Generator Models
# ===================================================================== #


class GeneratorSpec(BaseModel):
    """Request for a generated password.

    An empty ``classes`` set is replaced with lower + upper + digit.
    ``length`` must cover at least one character from every requested
    class, otherwise validation fails.

    Attributes:
        length: Exact length of the password to produce.
        classes: Character classes that must each appear at least once.
    """

    model_config = ConfigDict(frozen=True)

    length: int = Field(default=12, ge=1)
    classes: frozenset[CharacterClass] = Field(default_factory=frozenset)

    @model_validator(mode="before")
    @classmethod
    def _default_classes(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("classes"):
            data = {**data, "classes": DEFAULT_CLASSES}
        return data

    @model_validator(mode="after")
    def _length_covers_classes(self) -> GeneratorSpec:
        if self.length < len(self.classes):
            raise ValueError(
                f"length {self.length} is shorter than the {len(self.classes)} "
                f"requested character classes"
            )
        return self

    @classmethod
    def from_flags(
        cls,
        length: int,
        *,
        lower: bool = False,
        upper: bool = False,
        digits: bool = False,
        symbols: bool = False,
    ) -> GeneratorSpec:
        """Build a spec from per-class boolean flags."""
        flags = {
            CharacterClass.LOWER: lower,
            CharacterClass.UPPER: upper,
            CharacterClass.DIGIT: digits,
            CharacterClass.SYMBOL: symbols,
        }
        return cls(
            length=length,
            classes=frozenset(c for c, enabled in flags.items() if enabled),
        )

    @property
    def ordered_classes(self) -> list[CharacterClass]:
        """Requested classes in canonical pool order."""
        return [c for c in CharacterClass if c in self.classes]


# ===================================================================== #
#  Audit Models
# ===================================================================== #


class PositionalTest(BaseModel):
    """Chi-squared test of one class's distribution over positions.

    Attributes:
        character_class: Class whose positional counts were tested.
        chi_squared: Pearson statistic against a uniform distribution.
        p_value: Upper-tail probability of the statistic.
        passed: Whether ``p_value`` met the significance level.
    """

    character_class: CharacterClass
    chi_squared: float = 0.0
    p_value: float = 1.0
    passed: bool = True


class AuditResult(BaseModel):
    """Aggregated generator self-check.

    Attributes:
        trials: Number of passwords generated.
        length: Requested password length.
        classes: Requested classes in pool order.
        length_failures: Passwords whose length differed from the request.
        coverage_failures: Passwords missing at least one requested class.
        positional: Per-class positional uniformity tests.
        significance: Significance level used for the chi-squared tests.
        passed: True when no failures occurred and every test passed.
    """

    trials: int = 0
    length: int = 0
    classes: list[CharacterClass] = Field(default_factory=list)
    length_failures: int = 0
    coverage_failures: int = 0
    positional: list[PositionalTest] = Field(default_factory=list)
    significance: float = 0.001
    passed: bool = False
