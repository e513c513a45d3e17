"""Command-line front end: evaluate one phrase and print the result."""

from __future__ import annotations

from datetime import datetime
from itertools import islice

import click
import structlog
from pydantic import ValidationError

from calexpr import __version__
from calexpr.calendar import Clock, FixedClock, SystemClock
from calexpr.config import CalexprSettings, configure_logging
from calexpr.errors import CalexprError
from calexpr.evaluator import calculate, evaluate_iterator, partial_until_warnings
from calexpr.parser import parse_iterator

log = structlog.get_logger(__name__)


def _clock(now_text: str | None) -> Clock:
    if now_text is None:
        return SystemClock()
    try:
        return FixedClock(datetime.fromisoformat(now_text))
    except ValueError as exc:
        raise click.BadParameter(
            f"{now_text!r} is not an ISO 8601 date-time", param_hint="--now"
        ) from exc


def _print_iterator(expression: str, clock: Clock, cap: int) -> None:
    parsed = parse_iterator(expression, clock)
    for warning in partial_until_warnings(parsed):
        log.warning("partial_until_date", detail=warning)

    spec = evaluate_iterator(parsed)
    log.debug(
        "iterator_built",
        start=str(spec.start),
        step=str(spec.step),
        bounded=spec.is_bounded,
    )
    if spec.is_bounded:
        moments = iter(spec)
    else:
        log.debug("iteration_capped", cap=cap)
        moments = islice(spec, cap)

    for moment in moments:
        click.echo(str(moment))


@click.command()
@click.version_option(version=__version__, prog_name="calexpr")
@click.argument("expression")
@click.option(
    "-i",
    "--iterate",
    is_flag=True,
    help="Read EXPRESSION as a repeating date phrase and print each date.",
)
@click.option(
    "--cap",
    type=click.IntRange(min=1),
    default=None,
    help="Most dates to print when the phrase has no until clause.",
)
@click.option("--now", "now_text", default=None, help="Pin 'today' to this ISO date-time.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
def cli(
    expression: str,
    iterate: bool,
    cap: int | None,
    now_text: str | None,
    verbose: bool,
    log_json: bool,
) -> None:
    """Evaluate a date phrase such as "today - 5 days" or "2024-01-01 weekly 4 times"."""
    try:
        settings = CalexprSettings.from_cli(
            iteration_cap=cap,
            verbose=verbose or None,
            log_json=log_json or None,
        )
    except ValidationError as exc:
        raise click.ClickException(str(exc)) from exc

    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    clock = _clock(now_text)

    try:
        if iterate:
            _print_iterator(expression, clock, settings.iteration_cap)
        else:
            value = calculate(expression, clock)
            log.debug("evaluated", expression=expression, kind=type(value).__name__)
            click.echo(str(value))
    except CalexprError as exc:
        log.debug("evaluation_failed", expression=expression, error=type(exc).__name__)
        raise click.ClickException(str(exc)) from exc


def main() -> None:
    cli()
