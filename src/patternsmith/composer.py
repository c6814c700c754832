"""Instruction Composer.

Merges free-text instructions with the toggled presets into the single prompt
string sent to the generation service. Composition is pure: the same inputs
always produce the same prompt.
"""

from collections.abc import Iterable

from patternsmith.errors import EmptyInstructionError
from patternsmith.presets import Preset

LABEL_SEPARATOR = ", "


def join_labels(presets: Iterable[Preset]) -> str:
    """Join preset labels in the given (toggle) order."""
    return LABEL_SEPARATOR.join(preset.label for preset in presets)


def compose(free_text: str, selected_presets: Iterable[Preset]) -> str:
    """Build the synthesis prompt.

    Preset labels come first, in toggle order, followed by the free text.

    Args:
        free_text: Instruction text typed by the user
        selected_presets: Presets in toggle order

    Returns:
        The prompt string

    Raises:
        EmptyInstructionError: If both free text and presets are empty

    Examples:
        >>> compose("", [lookup(PresetId.EMAIL)])
        'Email'
        >>> compose("only gmail", [lookup(PresetId.EMAIL)])
        'Email, only gmail'
    """
    labels = join_labels(selected_presets)
    text = (free_text or "").strip()

    if not labels and not text:
        raise EmptyInstructionError()
    if not labels:
        return text
    if not text:
        return labels
    return f"{labels}{LABEL_SEPARATOR}{text}"
