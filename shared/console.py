"""
PassForge Console Interface
============================

Themed wrapper around :class:`rich.console.Console` used by the CLI for
the banner, section rules, status lines, tables and progress spinners.

Messages are assembled as :class:`rich.text.Text`, so text coming from
users or exceptions is printed literally and never parsed as markup.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme


_FORGE_THEME = Theme(
    {
        "forge.banner": "bold bright_cyan",
        "forge.section": "bold bright_magenta",
        "forge.success": "bold green",
        "forge.warning": "bold yellow",
        "forge.error": "bold red",
        "forge.info": "bold bright_blue",
        "forge.dim": "dim white",
        "forge.highlight": "bold bright_white",
        # strength tiers
        "forge.good": "bold bright_green",
        "forge.warn": "bold yellow",
        "forge.bad": "bold red",
    }
)

_BANNER_ART = r"""
  ___              ___
 | _ \__ _ ______ | __|__ _ _ __ _ ___
 |  _/ _` (_-<_-< | _/ _ \ '_/ _` / -_)
 |_| \__,_/__/__/ |_|\___/_| \__, \___|
                             |___/
"""

_TAGLINE = "Password Strength Estimator & Secure Generator"

# style, marker, prefix
_LEVELS: dict[str, tuple[str, str, str]] = {
    "success": ("forge.success", "✔", "SUCCESS"),
    "warning": ("forge.warning", "⚠", "WARNING"),
    "error": ("forge.error", "✘", "ERROR"),
    "info": ("forge.info", "ℹ", "INFO"),
}


class PassForgeConsole:
    """Console front-end shared by all PassForge commands.

    Usage::

        con = PassForgeConsole()
        con.banner("1.0.0")
        con.section("Password Analysis")
        con.success("Password generated")

    Args:
        quiet: Suppress all output (JSON mode, library use, tests).
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self._console = Console(
            theme=_FORGE_THEME,
            quiet=quiet,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """The underlying Rich console."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Headers
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        stamp = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        body = Text(_BANNER_ART, style="forge.banner")
        body.append(f"\n{_TAGLINE}\n", style="forge.highlight")
        body.append(f"Version: {version}  |  {stamp}", style="forge.dim")
        self._console.print(
            Panel(Align.center(body), border_style="bright_cyan", padding=(1, 2))
        )

    def section(self, title: str) -> None:
        self._console.rule(f"  {title}  ", style="forge.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Status lines
    # ------------------------------------------------------------------ #

    def _message(self, level: str, message: str) -> None:
        style, marker, prefix = _LEVELS[level]
        line = Text(f"[{marker}] {prefix}:", style=style)
        line.append(f" {message}")
        self._console.print(line)

    def success(self, message: str) -> None:
        self._message("success", message)

    def warning(self, message: str) -> None:
        self._message("warning", message)

    def error(self, message: str) -> None:
        self._message("error", message)

    def info(self, message: str) -> None:
        self._message("info", message)

    # ------------------------------------------------------------------ #
    #  Tables and spinners
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Print a bordered table.

        Cells other than :class:`rich.text.Text` are converted with
        ``str`` and printed literally.

        Args:
            title:    Table title.
            columns:  Header labels.
            rows:     Row sequences, one cell per column.
            caption:  Optional footer caption.
            styles:   Optional per-column styles.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        styles = list(styles or [])
        for idx, name in enumerate(columns):
            tbl.add_column(name, style=styles[idx] if idx < len(styles) else "")
        for row in rows:
            tbl.add_row(*(c if isinstance(c, Text) else Text(str(c)) for c in row))
        self._console.print(tbl)

    def status(self, message: str = "Working...") -> Status:
        """Spinner shown while the ``with`` block runs."""
        return self._console.status(
            Text(message, style="forge.info"),
            spinner="dots",
            spinner_style="bright_cyan",
        )
