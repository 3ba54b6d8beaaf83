"""
PassForge Analyzers
====================

Individual components of the estimation pipeline and the secure
generator. Each analyzer is synchronous and keeps no state between calls.
"""

from passforge.analyzers.entropy import EntropyEstimator
from passforge.analyzers.classifier import StrengthClassifier
from passforge.analyzers.crack_time import CrackTimeEstimator
from passforge.analyzers.generator import SecureGenerator
from passforge.analyzers.backend import (
    BackendChain,
    BuiltinBackend,
    CommonPasswordOracle,
    EstimatorBackend,
    ExternalBackend,
    WordlistOracle,
    load_backend,
)
from passforge.analyzers.audit import GeneratorAuditor

__all__ = [
    "EntropyEstimator",
    "StrengthClassifier",
    "CrackTimeEstimator",
    "SecureGenerator",
    "BackendChain",
    "BuiltinBackend",
    "CommonPasswordOracle",
    "EstimatorBackend",
    "ExternalBackend",
    "WordlistOracle",
    "load_backend",
    "GeneratorAuditor",
]
