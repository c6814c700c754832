"""One-shot pattern generation command."""

import asyncio

import click

from patternsmith.cli.render import print_outcome
from patternsmith.cli.styles import Messages, console
from patternsmith.presets import PresetId
from patternsmith.session import SessionController
from patternsmith.validator import TestMode


@click.command()
@click.argument("instructions", required=False, default="")
@click.option(
    "--preset",
    "-p",
    "presets",
    multiple=True,
    type=click.Choice([p.value for p in PresetId]),
    help="Preset to include (repeatable, order is kept)",
)
@click.option("--test", "-t", "test_input", default=None, help="Text to test the pattern against")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in TestMode]),
    default=None,
    help="existence: match anywhere; enumerate: list all matches",
)
@click.option("--copy", "copy_pattern", is_flag=True, help="Copy the pattern to the clipboard")
def generate(instructions, presets, test_input, mode, copy_pattern):
    """Generate a regex from INSTRUCTIONS and/or presets.

    \b
    Examples:
      patternsmith generate "US phone numbers"
      patternsmith generate -p email -p url --test "mail a@b.io or see https://x.org"
    """
    session = SessionController(test_mode=mode)
    for preset_id in presets:
        session.toggle(preset_id)
    if instructions:
        session.edit_instruction(instructions)

    with console.status("Generating pattern..."):
        ok = asyncio.run(session.generate())

    if not ok:
        console.print(Messages.error(session.error.message or "Generation failed"))
        raise SystemExit(1)

    console.print(Messages.pattern(session.pattern.raw))

    if test_input is not None:
        session.edit_test_input(test_input)
        print_outcome(session.test.outcome)

    if copy_pattern:
        if session.copy_pattern():
            console.print(Messages.success("Copied"))
        else:
            console.print("[dim]Clipboard not available[/dim]")

    if session.test.outcome.is_invalid:
        raise SystemExit(1)
