"""Main CLI entry point for patternsmith.

Uses lazy imports so that provider SDKs are only loaded when a command that
needs them is invoked. This keeps `patternsmith --help` fast.
"""

import importlib
import sys

import click

from patternsmith import __version__


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    # command name -> (module path, function name)
    commands_map = {
        "presets": ("patternsmith.cli.presets_cmd", "presets"),
        "generate": ("patternsmith.cli.generate_cmd", "generate"),
        "test": ("patternsmith.cli.match_cmd", "match"),
        "session": ("patternsmith.cli.session_cmd", "session"),
        "health": ("patternsmith.cli.health_cmd", "health"),
    }

    def get_command(self, ctx, cmd_name):
        """Lazily import and return the command when it's invoked."""
        if cmd_name not in self.commands_map:
            return None
        module_path, func_name = self.commands_map[cmd_name]
        return getattr(importlib.import_module(module_path), func_name)

    def list_commands(self, ctx):
        return list(self.commands_map)


@click.group(cls=LazyGroup)
@click.version_option(version=__version__, prog_name="patternsmith")
def cli():
    """patternsmith - describe a pattern, get a regex, test it.

    \b
    Examples:
      patternsmith presets
      patternsmith generate "dates like 2024-01-31" --test "due 2024-05-01"
      patternsmith test "[0-9]+" "abc123def456"
      patternsmith session
      patternsmith health
    """


def main():
    """Entry point for the patternsmith CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nGoodbye!", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
