"""
PassForge Configuration
========================

Dataclass configuration for the estimator, generator and audit, loaded
from TOML. The numeric constants the estimator relies on (normalization
ceiling, symbol pool size, attacker guess rate) live here so they can be
tuned without touching the analyzers.

Example ``config.toml``::

    [global]
    log_level = "INFO"
    log_file = "logs/passforge.log"
    log_json = true

    [estimator]
    guesses_per_second = 1e12
    common_passwords_file = "/usr/share/wordlists/common.txt"

    [generator]
    default_length = 16
    symbols = false

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# Looked up when no explicit path is given; optional
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ============================ Sections =====================================


@dataclass(slots=True)
class EstimatorConfig:
    """Strength-estimation constants and pluggable components.

    ``backend`` is a dotted module path exposing ``calc_entropy`` and/or
    ``dict_check``; ``common_passwords_file`` is a UTF-8 wordlist. Both
    are optional and empty by default.
    """

    normalization_ceiling_bits: float = 128.0
    symbol_pool_size: int = 32
    guesses_per_second: float = 1e9
    backend: str = ""
    common_passwords_file: str = ""


@dataclass(slots=True)
class GeneratorConfig:
    """Defaults applied when the caller selects no length or classes."""

    default_length: int = 12
    lower: bool = True
    upper: bool = True
    digits: bool = True
    symbols: bool = True


@dataclass(slots=True)
class AuditConfig:
    trials: int = 10_000
    significance: float = 0.001


@dataclass(slots=True)
class GlobalConfig:
    """Logging and general behaviour."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# ============================ Root =========================================


@dataclass(slots=True)
class PassForgeConfig:
    """All configuration sections.

    Usage:
        >>> config = PassForgeConfig.load("passforge.toml")
        >>> config.estimator.guesses_per_second
        1000000000.0
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    estimator: EstimatorConfig = field(default_factory=EstimatorConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    audit: AuditConfig = field(default_factory=AuditConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> PassForgeConfig:
        """Read a TOML file into a config, keeping defaults for absent keys.

        Without *path*, ``config.toml`` in the project root is used if it
        exists and built-in defaults otherwise. Unknown sections and keys
        are ignored.

        Raises:
            FileNotFoundError: If an explicitly given *path* does not exist.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
        """
        source = _DEFAULT_CONFIG_PATH if path is None else Path(path)
        if not source.is_file():
            if path is None:
                return cls()
            raise FileNotFoundError(f"Configuration file not found: {source}")

        with source.open("rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=_section(GlobalConfig, raw.get("global")),
            estimator=_section(EstimatorConfig, raw.get("estimator")),
            generator=_section(GeneratorConfig, raw.get("generator")),
            audit=_section(AuditConfig, raw.get("audit")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _section(section_cls: type, data: Optional[dict[str, Any]]) -> Any:
    """Build *section_cls* from the keys of *data* it declares."""
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{k: v for k, v in (data or {}).items() if k in known})


_cached: Optional[PassForgeConfig] = None


def get_config(path: str | Path | None = None) -> PassForgeConfig:
    """Process-wide config; an explicit *path* reloads it."""
    global _cached
    if _cached is None or path is not None:
        _cached = PassForgeConfig.load(path)
    return _cached
