"""
PassForge Engine
=================

Central orchestrator for password strength estimation and secure
generation. :class:`PasswordEngine` wires the analyzers into the
estimation pipeline

    backend chain (entropy, oracle) -> classifier -> crack-time estimator

and exposes the generator and its statistical audit behind the same
facade. Every call is synchronous and independent; the engine holds no
per-call state, so any host (CLI, UI, batch job) can wrap it with its
own scheduling.

Architecture follows the Facade pattern (Gamma et al., 1994).
"""

from __future__ import annotations

import random
from typing import Optional

from shared.config import PassForgeConfig
from shared.logger import PassForgeLogger, get_logger

from passforge.analyzers.audit import GeneratorAuditor
from passforge.analyzers.backend import (
    BackendChain,
    BuiltinBackend,
    CommonPasswordOracle,
    EstimatorBackend,
    WordlistOracle,
    load_backend,
)
from passforge.analyzers.classifier import StrengthClassifier
from passforge.analyzers.crack_time import CrackTimeEstimator
from passforge.analyzers.entropy import EntropyEstimator
from passforge.analyzers.generator import SecureGenerator
from passforge.core.errors import BackendLoadError, GeneratorError
from passforge.core.models import (
    AuditResult,
    GeneratorSpec,
    StrengthLabel,
    StrengthResult,
)


EMPTY_MESSAGE = "Enter a password to analyze."
COMMON_MESSAGE = "Password is on common-password list - very weak."


class PasswordEngine:
    """Facade over the estimation pipeline and the secure generator.

    Usage::

        engine = PasswordEngine()
        result = engine.analyze("Tr0ub4dor&3")
        print(result.message)

        password = engine.generate(length=20, symbols=True)

    Args:
        config: Configuration; defaults are used when omitted.
        backend: Override backend tried before the built-in heuristics.
                 When omitted, ``config.estimator.backend`` is loaded if set.
        oracle: Common-password oracle. When omitted,
                ``config.estimator.common_passwords_file`` is loaded if set.
        rng: Secure random source for the generator.
        logger: Logger; built from ``config`` when omitted.
    """

    def __init__(
        self,
        config: Optional[PassForgeConfig] = None,
        *,
        backend: Optional[EstimatorBackend] = None,
        oracle: Optional[CommonPasswordOracle] = None,
        rng: Optional[random.SystemRandom] = None,
        logger: Optional[PassForgeLogger] = None,
    ) -> None:
        self.config = config or PassForgeConfig()
        self.logger = logger or get_logger("engine", self.config)

        est_cfg = self.config.estimator
        self._entropy = EntropyEstimator(symbol_pool_size=est_cfg.symbol_pool_size)
        self._classifier = StrengthClassifier(
            ceiling_bits=est_cfg.normalization_ceiling_bits
        )
        self._crack_time = CrackTimeEstimator(
            guesses_per_second=est_cfg.guesses_per_second
        )
        self._generator = SecureGenerator(rng)
        self._auditor = GeneratorAuditor(
            self._generator, significance=self.config.audit.significance
        )

        if oracle is None:
            oracle = self._load_oracle(est_cfg.common_passwords_file)
        if backend is None:
            backend = self._load_backend(est_cfg.backend)

        builtin = BuiltinBackend(self._entropy, oracle)
        chain = (backend, builtin) if backend is not None else (builtin,)
        self._backends = BackendChain(
            *chain, estimator=self._entropy, logger=self.logger
        )

    # ------------------------------------------------------------------ #
    #  Strength estimation
    # ------------------------------------------------------------------ #

    def analyze(self, password: str) -> StrengthResult:
        """Estimate the strength of *password*.

        Empty input is not an error: it yields a zero-strength result
        with a neutral message.
        """
        with self.logger.operation("analyze"):
            if not password:
                crack = self._crack_time.estimate(0.0)
                return StrengthResult(
                    bits=0.0,
                    score=0,
                    label=StrengthLabel.VERY_WEAK,
                    crack_time_label=crack.label,
                    crack_time_years=crack.years,
                    tier=self._classifier.tier(0),
                    is_common=False,
                    length=0,
                    message=EMPTY_MESSAGE,
                )

            self.logger.debug("Analysing password of length %d", len(password))
            bits = self._backends.entropy_bits(password)
            is_common = self._backends.is_common(password)
            classification = self._classifier.classify(bits, is_common)
            crack = self._crack_time.estimate(bits)

            verdict = COMMON_MESSAGE if is_common else classification.label.value.capitalize()
            return StrengthResult(
                bits=bits,
                score=classification.score,
                label=classification.label,
                crack_time_label=crack.label,
                crack_time_years=crack.years,
                tier=classification.tier,
                is_common=is_common,
                length=len(password),
                message=f"{bits:.1f} bits - {verdict} • estimate: {crack.label}",
            )

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def default_spec(
        self,
        *,
        length: Optional[int] = None,
        lower: Optional[bool] = None,
        upper: Optional[bool] = None,
        digits: Optional[bool] = None,
        symbols: Optional[bool] = None,
    ) -> GeneratorSpec:
        """Build a spec, filling unspecified values from configuration."""
        gen_cfg = self.config.generator
        return GeneratorSpec.from_flags(
            gen_cfg.default_length if length is None else length,
            lower=gen_cfg.lower if lower is None else lower,
            upper=gen_cfg.upper if upper is None else upper,
            digits=gen_cfg.digits if digits is None else digits,
            symbols=gen_cfg.symbols if symbols is None else symbols,
        )

    def generate(
        self,
        spec: Optional[GeneratorSpec] = None,
        *,
        length: Optional[int] = None,
        lower: Optional[bool] = None,
        upper: Optional[bool] = None,
        digits: Optional[bool] = None,
        symbols: Optional[bool] = None,
    ) -> str:
        """Generate a password for *spec* or for the given flags.

        Raises:
            pydantic.ValidationError: If the flags describe an invalid spec.
            SecureRandomUnavailableError: If the OS entropy source fails.
        """
        if spec is None:
            spec = self.default_spec(
                length=length, lower=lower, upper=upper, digits=digits, symbols=symbols
            )
        with self.logger.operation("generate"):
            try:
                password = self._generator.generate(spec)
            except GeneratorError as exc:
                self.logger.error("Password generation failed: %s", exc)
                raise
            self.logger.debug(
                "Generated password of length %d from %d classes",
                spec.length,
                len(spec.classes),
            )
            return password

    # ------------------------------------------------------------------ #
    #  Audit
    # ------------------------------------------------------------------ #

    def audit(
        self, spec: Optional[GeneratorSpec] = None, trials: Optional[int] = None
    ) -> AuditResult:
        """Run the generator's statistical self-check."""
        spec = spec or self.default_spec()
        trials = self.config.audit.trials if trials is None else trials
        with self.logger.operation("audit"), self.logger.timed(
            f"generator audit ({trials} trials)"
        ):
            result = self._auditor.audit(spec, trials)
        if not result.passed:
            self.logger.warning(
                "Generator audit failed: %d length failures, %d coverage failures",
                result.length_failures,
                result.coverage_failures,
            )
        return result

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    def _load_oracle(self, path: str) -> Optional[CommonPasswordOracle]:
        if not path:
            return None
        try:
            oracle = WordlistOracle.from_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning(
                "Common-password list unavailable (%s); continuing without it", exc
            )
            return None
        self.logger.info("Loaded %d common passwords from %s", len(oracle), path)
        return oracle

    def _load_backend(self, module_path: str) -> Optional[EstimatorBackend]:
        if not module_path:
            return None
        try:
            backend = load_backend(module_path)
        except BackendLoadError as exc:
            self.logger.warning("%s; using built-in analyzers", exc)
            return None
        self.logger.info("Estimator backend %s initialized", module_path)
        return backend
