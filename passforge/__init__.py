"""
PassForge -- Password Strength Estimation & Secure Generation
==============================================================

Estimates the strength of a password from two entropy heuristics,
scores and labels it, estimates its brute-force crack time, and
generates random passwords from the operating system's secure random
source.

Modules:
    - passforge.core.engine: Central orchestrator
    - passforge.core.models: Pydantic data models
    - passforge.analyzers: Estimator, classifier, crack time, generator
    - passforge.output: Console output
    - passforge.cli: Click-based command-line interface

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

__version__ = "1.0.0"
__tool_name__ = "passforge"
