"""List the preset catalog."""

import click

from patternsmith.cli.render import presets_table
from patternsmith.cli.styles import console


@click.command()
def presets():
    """Show available presets."""
    console.print(presets_table())
