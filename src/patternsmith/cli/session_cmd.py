"""Interactive session over the controller transitions.

Plain input edits the instruction. Commands start with a colon:

\b
  :preset ID   toggle a preset
  :gen         generate a pattern
  :test TEXT   set the test input
  :mode MODE   existence | enumerate
  :copy        copy the pattern
  :reset       clear everything
  :presets     list presets
  :quit        leave
"""

import asyncio
from collections.abc import Callable

import click

from patternsmith.cli.render import presets_table, print_snapshot
from patternsmith.cli.styles import Messages, console
from patternsmith.session import SessionController
from patternsmith.validator import TestMode

PageEventSink = Callable[[str], None]

HELP_TEXT = __doc__.split("\n\n", 1)[1].replace("\b\n", "")


def _emit(on_page_event: PageEventSink | None, name: str) -> None:
    # Page-level events only, never session content
    if on_page_event is not None:
        try:
            on_page_event(name)
        except Exception as e:
            console.print(f"[dim]telemetry: {e}[/dim]")


async def run_session(
    session: SessionController,
    read_line: Callable[[], str],
    on_page_event: PageEventSink | None = None,
) -> None:
    """Drive ``session`` from lines returned by ``read_line`` until :quit or EOF."""
    _emit(on_page_event, "session_opened")
    try:
        while True:
            try:
                line = read_line()
            except EOFError:
                break

            stripped = line.strip()
            if not stripped:
                continue
            command, _, argument = stripped.partition(" ")
            if not stripped.startswith(":"):
                session.edit_instruction(line)
                continue

            if command == ":quit":
                break
            elif command == ":preset":
                if not session.toggle(argument.strip()):
                    console.print(Messages.warning(f"Unknown preset: {argument.strip()}"))
            elif command == ":gen":
                with console.status("Generating pattern..."):
                    await session.generate()
            elif command == ":test":
                session.edit_test_input(argument)
            elif command == ":mode":
                try:
                    session.set_test_mode(argument.strip())
                except ValueError:
                    modes = ", ".join(m.value for m in TestMode)
                    console.print(Messages.warning(f"Mode must be one of: {modes}"))
            elif command == ":copy":
                if session.copy_pattern():
                    console.print(Messages.success("Copied"))
                else:
                    console.print("[dim]Nothing copied[/dim]")
            elif command == ":reset":
                session.reset()
            elif command == ":presets":
                console.print(presets_table())
            else:
                console.print(HELP_TEXT)
    finally:
        _emit(on_page_event, "session_closed")


@click.command()
def session():
    """Interactive pattern builder (type :help for commands)."""
    controller = SessionController()
    controller.subscribe(print_snapshot)
    console.print(Messages.header("patternsmith interactive session"))
    console.print(HELP_TEXT)
    asyncio.run(run_session(controller, lambda: console.input("[bold cyan]›[/bold cyan] ")))
