"""
PassForge Output Module
========================

Console display of strength results, generated passwords and audits.
"""

from passforge.output.console import StrengthConsoleOutput

__all__ = ["StrengthConsoleOutput"]
