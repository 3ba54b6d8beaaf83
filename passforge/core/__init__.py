"""
PassForge Core Module
======================

Data models and exceptions for the PassForge strength estimator and
secure generator. The engine facade lives in
:mod:`passforge.core.engine`.
"""

from passforge.core.errors import (
    BackendLoadError,
    GeneratorError,
    PassForgeError,
    SecureRandomUnavailableError,
)
from passforge.core.models import (
    AuditResult,
    CharacterClass,
    Classification,
    CrackTimeEstimate,
    GeneratorSpec,
    PositionalTest,
    StrengthLabel,
    StrengthResult,
    StrengthTier,
)

__all__ = [
    "AuditResult",
    "BackendLoadError",
    "CharacterClass",
    "Classification",
    "CrackTimeEstimate",
    "GeneratorError",
    "GeneratorSpec",
    "PassForgeError",
    "PositionalTest",
    "SecureRandomUnavailableError",
    "StrengthLabel",
    "StrengthResult",
    "StrengthTier",
]
