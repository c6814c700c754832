"""Pattern Validator / Tester.

Compiles a pattern and applies it to test input without ever letting a
malformed pattern escape as an exception. Every call returns a
:class:`TestOutcome`.

Patterns are compiled case-insensitively and matched with find-all semantics.
Two test modes exist:

- ``EXISTENCE``: does the pattern match anywhere in the input?
- ``ENUMERATE``: every non-overlapping whole match, left to right.

An enumerate run with zero hits yields ``Matched(())``. It displays like
``NotMatched`` but still records that the evaluation ran.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

PATTERN_FLAGS = re.IGNORECASE

# Besides re.error, pathological patterns can trip these during compilation
_COMPILE_ERRORS = (re.error, OverflowError, RecursionError, ValueError)


class TestMode(str, Enum):
    """How a compiled pattern is applied to the input."""

    __test__ = False

    EXISTENCE = "existence"
    ENUMERATE = "enumerate"


class OutcomeKind(Enum):
    UNEVALUATED = "unevaluated"
    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    INVALID_PATTERN = "invalid_pattern"


@dataclass(frozen=True)
class TestOutcome:
    """Result of one evaluation.

    Attributes:
        kind: Outcome discriminator
        matches: Whole matches for enumerate runs; ``None`` otherwise
        message: Compiler message for ``INVALID_PATTERN``
    """

    __test__ = False

    kind: OutcomeKind
    matches: tuple[str, ...] | None = None
    message: str | None = None

    @classmethod
    def unevaluated(cls) -> "TestOutcome":
        return cls(OutcomeKind.UNEVALUATED)

    @classmethod
    def matched(cls, matches: Iterable[str] | None = None) -> "TestOutcome":
        return cls(OutcomeKind.MATCHED, tuple(matches) if matches is not None else None)

    @classmethod
    def not_matched(cls) -> "TestOutcome":
        return cls(OutcomeKind.NOT_MATCHED)

    @classmethod
    def invalid_pattern(cls, message: str) -> "TestOutcome":
        return cls(OutcomeKind.INVALID_PATTERN, message=message)

    @property
    def is_evaluated(self) -> bool:
        return self.kind is not OutcomeKind.UNEVALUATED

    @property
    def is_invalid(self) -> bool:
        return self.kind is OutcomeKind.INVALID_PATTERN

    @property
    def has_matches(self) -> bool:
        """True for an existence hit or a non-empty enumeration."""
        if self.kind is not OutcomeKind.MATCHED:
            return False
        return self.matches is None or len(self.matches) > 0


def _compile(pattern: str) -> tuple[re.Pattern | None, str | None]:
    try:
        return re.compile(pattern, PATTERN_FLAGS), None
    except _COMPILE_ERRORS as e:
        return None, str(e) or type(e).__name__


def validate_pattern(pattern: str) -> str | None:
    """Check pattern syntax only.

    Returns:
        The compiler error message, or ``None`` if the pattern compiles
    """
    _, message = _compile(pattern)
    return message


def evaluate(pattern: str, text: str, mode: TestMode = TestMode.ENUMERATE) -> TestOutcome:
    """Compile ``pattern`` and apply it to ``text``.

    Never raises for bad patterns; compilation failures come back as an
    ``INVALID_PATTERN`` outcome.

    Args:
        pattern: Regular expression source
        text: Test input
        mode: Existence check or full enumeration

    Returns:
        TestOutcome for this evaluation

    Examples:
        >>> evaluate("[0-9]+", "abc123def456").matches
        ('123', '456')
        >>> evaluate("[", "abc").kind
        <OutcomeKind.INVALID_PATTERN: 'invalid_pattern'>
    """
    compiled, message = _compile(pattern)
    if compiled is None:
        return TestOutcome.invalid_pattern(message)

    try:
        if TestMode(mode) is TestMode.EXISTENCE:
            if compiled.search(text) is not None:
                return TestOutcome.matched()
            return TestOutcome.not_matched()

        # group(0) keeps whole matches even when the pattern has groups
        return TestOutcome.matched(m.group(0) for m in compiled.finditer(text))
    except RecursionError as e:
        return TestOutcome.invalid_pattern(str(e) or "maximum recursion depth exceeded")
