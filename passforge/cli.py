"""
PassForge CLI
==============

Click-based command-line interface for the PassForge strength estimator
and secure generator.

Usage::

    python -m passforge analyze "Tr0ub4dor&3"
    python -m passforge analyze                 # prompts with hidden input
    python -m passforge generate -l 20 --symbols -n 5
    python -m passforge --output json generate
    python -m passforge audit -t 20000

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
from typing import Optional

import click
from pydantic import ValidationError

from shared.config import PassForgeConfig
from shared.console import PassForgeConsole

from passforge import __version__
from passforge.core.engine import PasswordEngine
from passforge.core.errors import SecureRandomUnavailableError
from passforge.core.models import GeneratorSpec
from passforge.output.console import StrengthConsoleOutput


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to PassForge configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.version_option(__version__, prog_name="passforge")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    quiet: bool,
) -> None:
    """PassForge -- password strength estimator and secure generator.

    Estimate entropy, strength and crack time of a password, or generate
    random passwords from the operating system's secure random source.
    """
    ctx.ensure_object(dict)

    forge_config = PassForgeConfig.load(config) if config else PassForgeConfig()
    ctx.obj["config"] = forge_config
    ctx.obj["output_format"] = output

    console = PassForgeConsole(quiet=quiet or output != "console")
    ctx.obj["console"] = console
    ctx.obj["engine"] = PasswordEngine(forge_config)
    ctx.obj["display"] = StrengthConsoleOutput(console)

    if not quiet and output == "console":
        console.banner(version=forge_config.global_settings.version)


def _fail(ctx: click.Context, message: str) -> None:
    """Report *message* and exit with status 1."""
    if ctx.obj["output_format"] == "console":
        ctx.obj["console"].error(message)
    else:
        click.echo(json.dumps({"error": message}), err=True)
    ctx.exit(1)


def _class_options(func):
    """Shared character-class flags for ``generate`` and ``audit``."""
    options = [
        click.option("--lower", is_flag=True, help="Include lowercase letters."),
        click.option("--upper", is_flag=True, help="Include uppercase letters."),
        click.option("--digits", is_flag=True, help="Include digits."),
        click.option("--symbols", is_flag=True, help="Include symbols."),
        click.option(
            "--length", "-l",
            type=int,
            default=None,
            help="Password length (default from configuration, 12).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_spec(
    ctx: click.Context,
    length: Optional[int],
    lower: bool,
    upper: bool,
    digits: bool,
    symbols: bool,
) -> GeneratorSpec:
    """Turn CLI flags into a spec; no class flags means configured defaults."""
    engine: PasswordEngine = ctx.obj["engine"]
    if not (lower or upper or digits or symbols):
        return engine.default_spec(length=length)
    return engine.default_spec(
        length=length, lower=lower, upper=upper, digits=digits, symbols=symbols
    )


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(err["msg"] for err in exc.errors())


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("password", required=False)
@click.pass_context
def analyze(ctx: click.Context, password: Optional[str]) -> None:
    """Estimate the strength of PASSWORD.

    When PASSWORD is omitted it is read with a hidden prompt, which keeps
    it out of the shell history.
    """
    engine: PasswordEngine = ctx.obj["engine"]
    display: StrengthConsoleOutput = ctx.obj["display"]

    if password is None:
        password = click.prompt(
            "Password", hide_input=True, default="", show_default=False
        )

    result = engine.analyze(password)

    if ctx.obj["output_format"] == "console":
        display.display_strength(result, password)
    else:
        click.echo(result.model_dump_json(indent=2))


@cli.command()
@_class_options
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of passwords to generate.",
)
@click.option(
    "--analyze/--no-analyze",
    "with_analysis",
    default=True,
    show_default=True,
    help="Analyse each generated password.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    length: Optional[int],
    lower: bool,
    upper: bool,
    digits: bool,
    symbols: bool,
    count: int,
    with_analysis: bool,
) -> None:
    """Generate random passwords.

    Without class flags the configured classes are used. Every requested
    class appears at least once in each password.
    """
    engine: PasswordEngine = ctx.obj["engine"]
    display: StrengthConsoleOutput = ctx.obj["display"]

    try:
        spec = _build_spec(ctx, length, lower, upper, digits, symbols)
        passwords = [engine.generate(spec) for _ in range(count)]
    except ValidationError as exc:
        _fail(ctx, f"Invalid generator settings: {_validation_message(exc)}")
        return
    except SecureRandomUnavailableError as exc:
        _fail(ctx, str(exc))
        return

    results = [engine.analyze(pw) for pw in passwords] if with_analysis else None

    if ctx.obj["output_format"] == "console":
        display.display_generated(passwords, results)
    else:
        payload = []
        for idx, pw in enumerate(passwords):
            entry: dict = {"password": pw}
            if results is not None:
                entry["analysis"] = json.loads(results[idx].model_dump_json())
            payload.append(entry)
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@cli.command()
@_class_options
@click.option(
    "--trials", "-t",
    type=click.IntRange(min=1),
    default=None,
    help="Number of passwords to generate (default from configuration).",
)
@click.pass_context
def audit(
    ctx: click.Context,
    length: Optional[int],
    lower: bool,
    upper: bool,
    digits: bool,
    symbols: bool,
    trials: Optional[int],
) -> None:
    """Statistically audit the generator.

    Checks exact length and class coverage of every password and runs a
    chi-squared test of each class's distribution over positions. Exits
    with status 1 when the audit fails.
    """
    engine: PasswordEngine = ctx.obj["engine"]
    display: StrengthConsoleOutput = ctx.obj["display"]
    console: PassForgeConsole = ctx.obj["console"]

    try:
        spec = _build_spec(ctx, length, lower, upper, digits, symbols)
        with console.status("Auditing generator..."):
            result = engine.audit(spec, trials)
    except ValidationError as exc:
        _fail(ctx, f"Invalid generator settings: {_validation_message(exc)}")
        return
    except SecureRandomUnavailableError as exc:
        _fail(ctx, str(exc))
        return

    if ctx.obj["output_format"] == "console":
        display.display_audit(result)
        if result.passed:
            console.success("Generator audit passed")
        else:
            console.error("Generator audit failed")
    else:
        click.echo(result.model_dump_json(indent=2))

    if not result.passed:
        ctx.exit(1)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the PassForge CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
