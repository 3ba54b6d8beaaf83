"""
Estimator Backends
===================

Strategy interface for the two pluggable steps of the estimation
pipeline: the entropy estimate and the common-password oracle.

- :class:`BuiltinBackend` wraps the built-in heuristics and an optional
  oracle.
- :class:`ExternalBackend` adapts a pair of plain callables
  (``calc_entropy``, ``dict_check``), typically from a compiled
  acceleration module; either may be absent.
- :class:`BackendChain` asks each backend in turn and moves on when one
  is missing a capability, raises, or returns unusable data. The chain
  never raises to its caller; with no oracle answering, a password is
  treated as not common.

:func:`load_backend` builds an :class:`ExternalBackend` from a module
path given in configuration.
"""

from __future__ import annotations

import importlib
import math
import numbers
from pathlib import Path
from typing import Callable, Iterable, Optional, Protocol, runtime_checkable

from shared.logger import PassForgeLogger

from passforge.analyzers.entropy import EntropyEstimator
from passforge.core.errors import BackendLoadError


# ===================================================================== #
#  Interfaces
# ===================================================================== #


@runtime_checkable
class CommonPasswordOracle(Protocol):
    """Boolean predicate: is *password* on a known-common list?"""

    def is_common(self, password: str) -> bool: ...


@runtime_checkable
class EstimatorBackend(Protocol):
    """Provider of entropy estimates and common-password verdicts.

    A backend lacking one capability raises :class:`NotImplementedError`
    from the corresponding method.
    """

    def entropy_bits(self, password: str) -> float: ...

    def is_common(self, password: str) -> bool: ...


# ===================================================================== #
#  Oracles
# ===================================================================== #


class WordlistOracle:
    """Case-insensitive membership test against a caller-supplied list.

    Usage::

        oracle = WordlistOracle.from_file("common-passwords.txt")
        oracle.is_common("Password")   # True if "password" is listed
    """

    def __init__(self, words: Iterable[str]) -> None:
        self._words = frozenset(w.lower() for w in words)

    @classmethod
    def from_file(cls, path: str | Path) -> WordlistOracle:
        """Load one password per line; blank lines and ``#`` comments are skipped.

        Raises:
            FileNotFoundError: If *path* does not exist.
        """
        words: list[str] = []
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                entry = line.rstrip("\r\n")
                if not entry.strip() or entry.lstrip().startswith("#"):
                    continue
                words.append(entry)
        return cls(words)

    def is_common(self, password: str) -> bool:
        return password.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)


# ===================================================================== #
#  Backends
# ===================================================================== #


class BuiltinBackend:
    """The built-in heuristics plus an optional oracle."""

    def __init__(
        self,
        estimator: Optional[EntropyEstimator] = None,
        oracle: Optional[CommonPasswordOracle] = None,
    ) -> None:
        self.estimator = estimator or EntropyEstimator()
        self.oracle = oracle

    def entropy_bits(self, password: str) -> float:
        return self.estimator.estimate_bits(password)

    def is_common(self, password: str) -> bool:
        if self.oracle is None:
            raise NotImplementedError("no common-password oracle configured")
        return self.oracle.is_common(password)


class ExternalBackend:
    """Adapter over plain ``calc_entropy`` / ``dict_check`` callables.

    Args:
        calc_entropy: ``password -> float`` replacement for the built-in
                      entropy heuristics.
        dict_check:   ``password -> truthy`` common-password lookup.
        name:         Label used in log messages.
    """

    def __init__(
        self,
        calc_entropy: Optional[Callable[[str], float]] = None,
        dict_check: Optional[Callable[[str], object]] = None,
        *,
        name: str = "external",
    ) -> None:
        self.calc_entropy = calc_entropy
        self.dict_check = dict_check
        self.name = name

    def entropy_bits(self, password: str) -> float:
        if self.calc_entropy is None:
            raise NotImplementedError(f"{self.name} provides no calc_entropy")
        return self.calc_entropy(password)

    def is_common(self, password: str) -> bool:
        if self.dict_check is None:
            raise NotImplementedError(f"{self.name} provides no dict_check")
        return bool(self.dict_check(password))

    def __repr__(self) -> str:
        return (
            f"ExternalBackend(name={self.name!r}, "
            f"calc_entropy={self.calc_entropy is not None}, "
            f"dict_check={self.dict_check is not None})"
        )


def load_backend(module_path: str) -> ExternalBackend:
    """Import *module_path* and wrap its ``calc_entropy`` / ``dict_check``.

    Raises:
        BackendLoadError: If the module cannot be imported or exposes
            neither function.
    """
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise BackendLoadError(f"cannot import backend {module_path!r}: {exc}") from exc

    calc_entropy = getattr(module, "calc_entropy", None)
    dict_check = getattr(module, "dict_check", None)
    if not callable(calc_entropy):
        calc_entropy = None
    if not callable(dict_check):
        dict_check = None
    if calc_entropy is None and dict_check is None:
        raise BackendLoadError(
            f"backend {module_path!r} defines neither calc_entropy nor dict_check"
        )
    return ExternalBackend(calc_entropy, dict_check, name=module_path)


# ===================================================================== #
#  Fallback chain
# ===================================================================== #


def _valid_bits(value: object) -> Optional[float]:
    """Return *value* as a float if it is a usable bit count, else ``None``."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    bits = float(value)
    if not math.isfinite(bits) or bits < 0:
        return None
    return bits


class BackendChain:
    """Ordered fallback over several backends.

    Usage::

        chain = BackendChain(load_backend("pwaccel"), BuiltinBackend())
        bits = chain.entropy_bits(password)

    When no backend yields usable bits, *estimator* answers; it defaults
    to an :class:`EntropyEstimator` with the standard symbol pool.
    """

    def __init__(
        self,
        *backends: EstimatorBackend,
        estimator: Optional[EntropyEstimator] = None,
        logger: Optional[PassForgeLogger] = None,
    ) -> None:
        self.estimator = estimator or EntropyEstimator()
        if not backends:
            backends = (BuiltinBackend(self.estimator),)
        self.backends: tuple[EstimatorBackend, ...] = backends
        self.logger = logger or PassForgeLogger("backend")

    def entropy_bits(self, password: str) -> float:
        for backend in self.backends:
            try:
                value = backend.entropy_bits(password)
            except NotImplementedError:
                continue
            except Exception as exc:
                self.logger.warning(
                    "Entropy backend %r failed (%s); falling back",
                    backend,
                    type(exc).__name__,
                )
                continue

            bits = _valid_bits(value)
            if bits is None:
                self.logger.warning(
                    "Entropy backend %r returned invalid data; falling back",
                    backend,
                )
                continue
            return bits

        return self.estimator.estimate_bits(password)

    def is_common(self, password: str) -> bool:
        for backend in self.backends:
            try:
                return bool(backend.is_common(password))
            except NotImplementedError:
                continue
            except Exception as exc:
                self.logger.warning(
                    "Common-password oracle %r failed (%s); ignoring",
                    backend,
                    type(exc).__name__,
                )
                continue
        return False
