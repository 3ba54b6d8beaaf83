"""Shared fixtures for the PassForge test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from shared.config import PassForgeConfig
from passforge.core.engine import PasswordEngine


@pytest.fixture
def config() -> PassForgeConfig:
    return PassForgeConfig()


@pytest.fixture
def engine(config: PassForgeConfig) -> PasswordEngine:
    return PasswordEngine(config)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def wordlist(tmp_path):
    path = tmp_path / "common.txt"
    path.write_text(
        "# common passwords\n"
        "password\n"
        "\n"
        "Qwerty123\n"
        "letmein\n",
        encoding="utf-8",
    )
    return path
