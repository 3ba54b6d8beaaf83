"""
PassForge Console Output
=========================

Rich-based display of strength results, generated passwords and
generator audits. Password text is always wrapped in :class:`rich.text.Text`
so that characters such as ``[`` are never interpreted as markup.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import PassForgeConsole
from passforge.core.models import AuditResult, StrengthResult, StrengthTier


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_TIER_COLOURS: dict[StrengthTier, str] = {
    StrengthTier.GOOD: "forge.good",
    StrengthTier.WARNING: "forge.warn",
    StrengthTier.BAD: "forge.bad",
}

_METER_WIDTH = 40


def mask_password(password: str) -> str:
    """Show the first and last character with asterisks in between."""
    if len(password) <= 2:
        return "*" * len(password)
    return password[0] + "*" * (len(password) - 2) + password[-1]


class StrengthConsoleOutput:
    """Console output formatters for PassForge results.

    Usage::

        output = StrengthConsoleOutput(PassForgeConsole())
        output.display_strength(result)
        output.display_generated(passwords)
    """

    def __init__(self, console: Optional[PassForgeConsole] = None) -> None:
        self.console = console or PassForgeConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Strength Display
    # ------------------------------------------------------------------ #

    def display_strength(
        self, result: StrengthResult, password: Optional[str] = None
    ) -> None:
        """Display a strength meter coloured by tier plus a details table.

        Args:
            result: StrengthResult from the engine.
            password: Original password, shown masked when given.
        """
        self.console.section("Password Analysis")

        if result.length == 0:
            self.console.info(result.message)
            return

        colour = _TIER_COLOURS[result.tier]
        filled = max(0, min(_METER_WIDTH, int((result.score / 100) * _METER_WIDTH)))

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{result.score}/100  ")
        meter.append("[", style="dim")
        meter.append("█" * filled, style=colour)
        meter.append("░" * (_METER_WIDTH - filled), style="dim")
        meter.append("]", style="dim")
        meter.append(f"  {result.label.value.upper()}", style=colour)

        self._rich.print(Panel(meter, title="Strength Meter", border_style="cyan"))

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")

        if password is not None:
            tbl.add_row("Password", Text(mask_password(password)))
        tbl.add_row("Length", str(result.length))
        tbl.add_row("Entropy", f"{result.bits:.1f} bits")
        tbl.add_row("Label", result.label.value)
        tbl.add_row("Common Password", "Yes" if result.is_common else "No")
        tbl.add_row("Estimated Crack Time", result.crack_time_label)

        self._rich.print(tbl)
        self._rich.print(Text(result.message, style="dim"))

        if result.is_common:
            self.console.warning(
                "This password appears on a common-password list. Change it."
            )

    # ------------------------------------------------------------------ #
    #  Generator Display
    # ------------------------------------------------------------------ #

    def display_generated(
        self,
        passwords: Sequence[str],
        results: Optional[Sequence[StrengthResult]] = None,
    ) -> None:
        """List generated passwords, optionally with their analysis."""
        self.console.section("Generated Passwords")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("#", style="dim", width=3, justify="right")
        tbl.add_column("Password", style="forge.highlight", no_wrap=True)
        if results:
            tbl.add_column("Bits", justify="right")
            tbl.add_column("Score", justify="right")
            tbl.add_column("Label")
            tbl.add_column("Crack Time", justify="right")

        for idx, pw in enumerate(passwords, start=1):
            row: list = [str(idx), Text(pw)]
            if results:
                res = results[idx - 1]
                row.extend([
                    f"{res.bits:.1f}",
                    str(res.score),
                    Text(res.label.value, style=_TIER_COLOURS[res.tier]),
                    res.crack_time_label,
                ])
            tbl.add_row(*row)

        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Audit Display
    # ------------------------------------------------------------------ #

    def display_audit(self, result: AuditResult) -> None:
        """Display the generator audit summary and per-class tests."""
        self.console.section("Generator Audit")

        overall_colour = "bold bright_green" if result.passed else "bold red"

        summary = Text()
        summary.append("Overall: ", style="bold")
        summary.append("PASS" if result.passed else "FAIL", style=overall_colour)
        summary.append(f"\nTrials: {result.trials:,}  Length: {result.length}\n")
        summary.append(
            "Classes: " + ", ".join(c.value for c in result.classes) + "\n"
        )
        summary.append(f"Length failures: {result.length_failures}\n")
        summary.append(f"Coverage failures: {result.coverage_failures}")

        self._rich.print(Panel(summary, title="Audit Summary", border_style="cyan"))

        if result.positional:
            rows = [
                (
                    test.character_class.value,
                    f"{test.chi_squared:.3f}",
                    f"{test.p_value:.6f}",
                    Text("PASS", style="forge.good")
                    if test.passed
                    else Text("FAIL", style="forge.bad"),
                )
                for test in result.positional
            ]
            self.console.table(
                "Positional Uniformity",
                ["Class", "Chi-squared", "p-value", "Result"],
                rows,
                caption=f"A class passes when p-value >= {result.significance}",
                styles=["bold", "", "", ""],
            )
