"""Rendering of session state for the terminal."""

from rich.markup import escape
from rich.table import Table

from patternsmith.cli.styles import Messages, console
from patternsmith.errors import PATTERN_REQUIRED_MESSAGE
from patternsmith.presets import all_presets
from patternsmith.session import SessionSnapshot
from patternsmith.validator import OutcomeKind, TestOutcome


def presets_table() -> Table:
    table = Table(title="Presets", show_lines=False)
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Fragment", style="dim")
    for preset in all_presets():
        table.add_row(preset.id.value, preset.label, escape(preset.fragment or ""))
    return table


def print_outcome(outcome: TestOutcome) -> None:
    if outcome.kind is OutcomeKind.INVALID_PATTERN:
        console.print(Messages.error(f"Invalid regex pattern: {outcome.message}"))
    elif outcome.kind is OutcomeKind.NOT_MATCHED:
        console.print(Messages.warning("No match"))
    elif outcome.kind is OutcomeKind.MATCHED:
        if outcome.matches is None:
            console.print(Messages.success("Match"))
        elif not outcome.matches:
            console.print(Messages.warning("No matches"))
        else:
            console.print(Messages.success(f"{len(outcome.matches)} match(es):"))
            for match in outcome.matches:
                console.print(f"  • {escape(match)}")


def print_snapshot(snapshot: SessionSnapshot) -> None:
    """Print the parts of the session a user cares about after a transition."""
    labels = ", ".join(p.label for p in snapshot.instruction.selected_presets) or "-"
    console.print(f"[dim]Presets:[/dim] {escape(labels)}")
    console.print(f"[dim]Instructions:[/dim] {escape(snapshot.instruction.free_text) or '-'}")

    if snapshot.is_generating:
        console.print("[dim]Generating...[/dim]")
    elif snapshot.pattern.raw:
        console.print(f"[dim]Pattern:[/dim] {Messages.pattern(snapshot.pattern.raw)}")

    if snapshot.error.message:
        console.print(Messages.error(snapshot.error.message))

    if snapshot.test.input:
        if snapshot.needs_pattern:
            console.print(Messages.warning(PATTERN_REQUIRED_MESSAGE))
        elif not snapshot.test.outcome.is_invalid:
            print_outcome(snapshot.test.outcome)
