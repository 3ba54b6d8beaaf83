"""
PassForge Shared Module
=======================

Common utilities and configuration management shared across the
PassForge estimator, generator, and command-line interface.
"""

from shared.config import PassForgeConfig, get_config

__all__ = ["PassForgeConfig", "get_config"]
