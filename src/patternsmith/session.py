"""Session State Controller.

Holds the whole interactive session as one owned aggregate (instruction,
pattern, test and error state) and exposes a fixed set of named transitions.
There are no raw setters: every change goes through :meth:`toggle`,
:meth:`edit_instruction`, :meth:`generate`, :meth:`edit_test_input`,
:meth:`set_test_mode` or :meth:`reset`.

Reactivity:
    After every transition that touches the pattern or the test input, the
    controller re-checks the pattern against the input. An empty pattern
    always yields an ``UNEVALUATED`` outcome.

Concurrency:
    Everything runs on one asyncio event loop. :meth:`generate` is the only
    coroutine and its service call the only suspension point. While a
    generation is in flight a second :meth:`generate` is rejected, and every
    request is tagged with a generation counter so that a response arriving
    after :meth:`reset` is dropped on arrival.

Usage:
    session = SessionController()
    session.subscribe(render)
    session.toggle(PresetId.EMAIL)
    await session.generate()
    session.edit_test_input("contact: jane@example.com")
    session.test.outcome.matches   # ('jane@example.com',)
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum

from patternsmith.clipboard import ClipboardFeedback
from patternsmith.composer import compose, join_labels
from patternsmith.errors import (
    GENERATION_FAILED_MESSAGE,
    INVALID_PATTERN_MESSAGE,
    EmptyInstructionError,
    ErrorCategory,
    PresetNotFoundError,
    SynthesisError,
)
from patternsmith.presets import Preset, PresetId, lookup
from patternsmith.synthesizer import PatternSynthesizer
from patternsmith.utils.config import get_config_value, to_bool
from patternsmith.utils.logger import get_logger
from patternsmith.validator import TestMode, TestOutcome, evaluate

logger = get_logger("session")


class PatternStatus(Enum):
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class InstructionState:
    free_text: str = ""
    selected_presets: tuple[Preset, ...] = ()

    @property
    def selected_ids(self) -> tuple[PresetId, ...]:
        return tuple(preset.id for preset in self.selected_presets)


@dataclass(frozen=True)
class PatternState:
    raw: str = ""
    status: PatternStatus = PatternStatus.IDLE


@dataclass(frozen=True)
class TestState:
    __test__ = False

    input: str = ""
    outcome: TestOutcome = field(default_factory=TestOutcome.unevaluated)
    mode: TestMode = TestMode.ENUMERATE


@dataclass(frozen=True)
class ErrorState:
    message: str | None = None
    category: ErrorCategory | None = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session handed to observers."""

    instruction: InstructionState
    pattern: PatternState
    test: TestState
    error: ErrorState

    @property
    def is_generating(self) -> bool:
        return self.pattern.status is PatternStatus.GENERATING

    @property
    def needs_pattern(self) -> bool:
        """True while there is no pattern to test against."""
        return not self.pattern.raw


Observer = Callable[[SessionSnapshot], None]


class SessionController:
    """Owns the session state and orchestrates composer, synthesizer and validator.

    Args:
        synthesizer: Pattern synthesizer; built from configuration when omitted
        clipboard: Clipboard helper used by :meth:`copy_pattern`
        mirror_presets: Overwrite the free text with the selected preset
            labels on every toggle (``session.mirror_presets``)
        test_mode: Initial test mode (``session.test_mode``)
    """

    def __init__(
        self,
        synthesizer: PatternSynthesizer | None = None,
        clipboard: ClipboardFeedback | None = None,
        mirror_presets: bool | None = None,
        test_mode: TestMode | str | None = None,
    ):
        self.synthesizer = synthesizer or PatternSynthesizer.from_config()
        self.clipboard = clipboard or ClipboardFeedback()
        if mirror_presets is None:
            mirror_presets = to_bool(get_config_value("session.mirror_presets", True))
        self.mirror_presets = mirror_presets
        if test_mode is None:
            test_mode = get_config_value("session.test_mode", TestMode.ENUMERATE.value)
        self._initial_mode = TestMode(test_mode)

        self._observers: list[Observer] = []
        self._generation = 0
        self._apply_initial_state()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def instruction(self) -> InstructionState:
        return self._instruction

    @property
    def pattern(self) -> PatternState:
        return self._pattern

    @property
    def test(self) -> TestState:
        return self._test

    @property
    def error(self) -> ErrorState:
        return self._error

    @property
    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(self._instruction, self._pattern, self._test, self._error)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` for every transition.

        Returns:
            Function that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def toggle(self, preset_id: PresetId | str) -> bool:
        """Flip a preset's membership in the selection.

        With mirroring enabled the free text is replaced by the selected
        labels, discarding anything typed before.

        Returns:
            False if ``preset_id`` is unknown (state unchanged)
        """
        try:
            preset = lookup(preset_id)
        except PresetNotFoundError as e:
            logger.warning(f"Ignoring toggle: {e}")
            return False

        selected = self._instruction.selected_presets
        if preset in selected:
            selected = tuple(p for p in selected if p != preset)
        else:
            selected = selected + (preset,)

        free_text = join_labels(selected) if self.mirror_presets else self._instruction.free_text
        self._instruction = InstructionState(free_text=free_text, selected_presets=selected)
        self._error = ErrorState()
        self._notify()
        return True

    def edit_instruction(self, text: str) -> None:
        self._instruction = replace(self._instruction, free_text=text)
        self._notify()

    async def generate(self) -> bool:
        """Synthesize a pattern from the current instruction.

        Rejected (returns False immediately) while another generation is in
        flight. A response that arrives after :meth:`reset` is discarded.

        Returns:
            True if a new pattern was installed
        """
        if self._pattern.status is PatternStatus.GENERATING:
            logger.debug("Generation already in flight, ignoring request")
            return False

        self._generation += 1
        token = self._generation

        if self._error.category is ErrorCategory.SYNTHESIS:
            self._error = ErrorState()
        self._pattern = replace(self._pattern, status=PatternStatus.GENERATING)
        self._notify()

        try:
            prompt = compose(self._prompt_text(), self._instruction.selected_presets)
            pattern = await self.synthesizer.synthesize(prompt)
        except (EmptyInstructionError, SynthesisError) as e:
            if self._is_stale(token):
                return False
            if isinstance(e, EmptyInstructionError):
                logger.info("Nothing to generate: no instructions and no presets")
            self._fail(e.user_message)
            return False
        except asyncio.CancelledError:
            if not self._is_stale(token):
                self._fail(GENERATION_FAILED_MESSAGE)
            raise

        if self._is_stale(token):
            return False

        self._pattern = PatternState(raw=pattern, status=PatternStatus.READY)
        self._reevaluate()
        self._notify()
        return True

    def edit_test_input(self, text: str) -> None:
        self._test = replace(self._test, input=text)
        self._reevaluate()
        self._notify()

    def set_test_mode(self, mode: TestMode | str) -> None:
        self._test = replace(self._test, mode=TestMode(mode))
        self._reevaluate()
        self._notify()

    def reset(self) -> None:
        """Return to the initial empty state; any in-flight response is dropped."""
        self._generation += 1
        self._apply_initial_state()
        logger.debug("Session reset")
        self._notify()

    def copy_pattern(self) -> bool:
        """Copy the current pattern to the clipboard (best effort)."""
        if not self._pattern.raw:
            return False
        return self.clipboard.copy(self._pattern.raw)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_initial_state(self) -> None:
        self._instruction = InstructionState()
        self._pattern = PatternState()
        self._test = TestState(mode=self._initial_mode)
        self._error = ErrorState()

    def _prompt_text(self) -> str:
        """Free text for the prompt; a mirrored label list is not sent twice."""
        free_text = self._instruction.free_text
        selected = self._instruction.selected_presets
        if self.mirror_presets and selected and free_text.strip() == join_labels(selected):
            return ""
        return free_text

    def _is_stale(self, token: int) -> bool:
        if token != self._generation:
            logger.info("Discarding stale generation result")
            return True
        return False

    def _fail(self, message: str) -> None:
        self._pattern = replace(self._pattern, status=PatternStatus.FAILED)
        self._error = ErrorState(message=message, category=ErrorCategory.SYNTHESIS)
        self._notify()

    def _reevaluate(self) -> None:
        """Recompute the test outcome for the current pattern and input."""
        if not self._pattern.raw:
            self._test = replace(self._test, outcome=TestOutcome.unevaluated())
            return

        outcome = evaluate(self._pattern.raw, self._test.input, self._test.mode)
        self._test = replace(self._test, outcome=outcome)

        if outcome.is_invalid:
            logger.warning(f"Invalid pattern {self._pattern.raw!r}: {outcome.message}")
            self._error = ErrorState(INVALID_PATTERN_MESSAGE, ErrorCategory.PATTERN)
        elif self._error.category is ErrorCategory.PATTERN:
            self._error = ErrorState()

    def _notify(self) -> None:
        snapshot = self.snapshot
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Session observer failed")
