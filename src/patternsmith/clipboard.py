"""Clipboard access with a self-reverting "copied" indicator.

Copying is fire-and-forget: a failing clipboard never raises, it just leaves
the indicator off. After a successful copy, :attr:`ClipboardFeedback.copied`
stays true for ``feedback_seconds`` and then reverts on the running event loop.
"""

import asyncio
from collections.abc import Callable

import pyperclip

from patternsmith.utils.config import get_config_value
from patternsmith.utils.logger import get_logger

logger = get_logger("clipboard")

DEFAULT_FEEDBACK_SECONDS = 2.0

ClipboardWriter = Callable[[str], object]


class ClipboardFeedback:
    """Copies text and tracks the transient "copied" confirmation.

    Args:
        writer: Callable that puts text on the clipboard; ``pyperclip.copy``
            by default. Returning ``False`` or raising counts as failure.
        feedback_seconds: How long ``copied`` stays true
    """

    def __init__(
        self,
        writer: ClipboardWriter | None = None,
        feedback_seconds: float | None = None,
    ):
        self.writer = writer or pyperclip.copy
        if feedback_seconds is None:
            feedback_seconds = get_config_value(
                "clipboard.feedback_seconds", DEFAULT_FEEDBACK_SECONDS
            )
        self.feedback_seconds = float(feedback_seconds)
        self.copied = False
        self._revert_handle: asyncio.TimerHandle | None = None

    def copy(self, text: str) -> bool:
        """Put ``text`` on the clipboard.

        Returns:
            True if the copy succeeded and the indicator was switched on
        """
        self._cancel_revert()
        try:
            ok = self.writer(text) is not False
        except Exception as e:
            # Clipboard not available - no confirmation shown
            logger.debug(f"Clipboard write failed: {e}")
            ok = False

        self.copied = ok
        if ok:
            self._schedule_revert()
        return ok

    def _schedule_revert(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop (plain CLI call): nobody is watching the indicator
            return
        self._revert_handle = loop.call_later(self.feedback_seconds, self._revert)

    def _cancel_revert(self) -> None:
        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None

    def _revert(self) -> None:
        self._revert_handle = None
        self.copied = False
