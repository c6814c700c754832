"""Error Classification for the Pattern Synthesis Pipeline.

This module defines the exception hierarchy and the error categories used by the
session controller to decide which failures a later successful operation may
clear.

Error Categories:
    - **SYNTHESIS**: the generation service could not produce a pattern
    - **PATTERN**: the current pattern failed to compile

Every exception carries a ``user_message`` safe to show in a presentation
layer. Upstream causes are chained with ``raise ... from`` and logged, but
never placed in the user message.

.. seealso::
   :mod:`patternsmith.session` : Where errors are turned into visible state
   :mod:`patternsmith.synthesizer` : Normalization of service failures
"""

from enum import Enum

GENERATION_FAILED_MESSAGE = "Failed to generate regex. Please try again."
INVALID_PATTERN_MESSAGE = "Invalid regex pattern. Please try again."
EMPTY_INSTRUCTION_MESSAGE = "Describe the pattern you need or select a preset."
PATTERN_REQUIRED_MESSAGE = "Generate a pattern first."


class ErrorCategory(Enum):
    """Which operation category produced the current error."""

    SYNTHESIS = "synthesis"  # Cleared when a new generate() starts
    PATTERN = "pattern"  # Cleared by the next successful evaluation


class PatternSmithError(Exception):
    """Base exception for all patternsmith errors."""

    user_message: str = "Something went wrong."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)


class ConfigurationError(PatternSmithError):
    """Raised when the configuration file is unreadable or malformed."""

    user_message = "Invalid configuration."


class PresetNotFoundError(PatternSmithError, KeyError):
    """Raised when a preset id is not part of the registry."""

    user_message = "Unknown preset."

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else self.user_message


class EmptyInstructionError(PatternSmithError):
    """Raised when neither free text nor presets describe a pattern."""

    user_message = EMPTY_INSTRUCTION_MESSAGE


class SynthesisError(PatternSmithError):
    """Base class for failures of the pattern generation service.

    All subclasses share the same generic user message.
    """

    user_message = GENERATION_FAILED_MESSAGE


class SynthesisTimeoutError(SynthesisError):
    """The generation service did not answer within the configured timeout."""


class SynthesisRejectedError(SynthesisError):
    """The generation service failed or refused the request."""


class EmptyResponseError(SynthesisError):
    """The generation service answered with no usable pattern text."""
