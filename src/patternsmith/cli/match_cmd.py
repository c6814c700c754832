"""Validate an existing pattern against text, no generation involved."""

import click

from patternsmith.cli.render import print_outcome
from patternsmith.validator import TestMode, evaluate


@click.command(name="test")
@click.argument("pattern")
@click.argument("text")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in TestMode]),
    default=TestMode.ENUMERATE.value,
    show_default=True,
)
def match(pattern, text, mode):
    """Test PATTERN against TEXT (case-insensitive)."""
    outcome = evaluate(pattern, text, TestMode(mode))
    print_outcome(outcome)
    if outcome.is_invalid:
        raise SystemExit(1)
