"""Pattern Synthesizer.

Owns one request to the external pattern generation service: builds the
request from the composed prompt, awaits a single textual response under a
timeout, normalizes every failure into a :class:`SynthesisError` subclass and
extracts the pattern text.

The generation service is any async callable taking a
:class:`SynthesisRequest` and returning the raw response text (or ``None``).
:class:`ProviderGenerationService` is the default and runs the blocking
provider call in a worker thread so the event loop stays responsive.

.. note::
   Single-flight is enforced by :class:`~patternsmith.session.SessionController`.
   The synthesizer itself has no request bookkeeping.
"""

import asyncio
import re
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from patternsmith.errors import (
    EmptyResponseError,
    SynthesisRejectedError,
    SynthesisTimeoutError,
)
from patternsmith.models import get_chat_completion
from patternsmith.utils.config import get_synthesis_config, to_optional_float
from patternsmith.utils.logger import get_logger

logger = get_logger("synthesizer")

SYSTEM_DIRECTIVE = (
    "You are a regex expert. Generate a regex pattern based on the user's instructions. "
    "Respond with only the regex pattern, no explanations."
)

DEFAULT_TIMEOUT = 30.0

# A response wrapped in a markdown fence, optionally tagged (```regex)
_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?(.*?)\n?```$", re.DOTALL)


@dataclass(frozen=True)
class SynthesisRequest:
    """One request to the generation service.

    Attributes:
        prompt_text: Composed user prompt, the sole contextual input
        system_directive: Fixed instruction to answer with a bare pattern
        model_identifier: Model the service should use
    """

    prompt_text: str
    system_directive: str = SYSTEM_DIRECTIVE
    model_identifier: str | None = None


GenerationService = Callable[[SynthesisRequest], Awaitable[str | None]]


class ProviderGenerationService:
    """Generation service backed by :func:`~patternsmith.models.get_chat_completion`."""

    def __init__(
        self,
        provider: str = "openai",
        max_tokens: int = 256,
        temperature: float = 0.0,
        request_timeout: float | None = None,
    ):
        self.provider = provider
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.request_timeout = request_timeout

    @classmethod
    def from_config(cls) -> "ProviderGenerationService":
        config = get_synthesis_config()
        return cls(
            provider=config.get("provider", "openai"),
            max_tokens=int(config.get("max_tokens", 256)),
            temperature=float(config.get("temperature", 0.0)),
            request_timeout=to_optional_float(config.get("timeout")),
        )

    async def __call__(self, request: SynthesisRequest) -> str | None:
        # Run sync LLM call in thread pool to avoid blocking the event loop
        return await asyncio.to_thread(
            get_chat_completion,
            message=request.prompt_text,
            provider=self.provider,
            model_id=request.model_identifier,
            system_prompt=request.system_directive,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            timeout=self.request_timeout,
        )


def extract_pattern(response: Any) -> str:
    """Pull the pattern text out of a raw service response.

    Trims surrounding whitespace and strips a wrapping markdown code fence or
    inline backticks.

    Raises:
        EmptyResponseError: If nothing remains
    """
    text = response.strip() if isinstance(response, str) else ""

    fenced = _FENCE.match(text)
    if fenced:
        text = fenced.group(1).strip()
    elif len(text) > 1 and text.startswith("`") and text.endswith("`"):
        text = text[1:-1].strip()

    if not text:
        raise EmptyResponseError("Generation service returned an empty response")
    return text


class PatternSynthesizer:
    """Turns a prompt into a pattern through the generation service.

    Args:
        service: Async generation service; defaults to the configured provider
        model_identifier: Model id sent with every request
        timeout: Seconds to wait for a response before failing
    """

    def __init__(
        self,
        service: GenerationService | None = None,
        model_identifier: str | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        self.service = service or ProviderGenerationService.from_config()
        self.model_identifier = model_identifier
        self.timeout = timeout

    @classmethod
    def from_config(cls, service: GenerationService | None = None) -> "PatternSynthesizer":
        config = get_synthesis_config()
        return cls(
            service=service,
            model_identifier=config.get("model_id"),
            timeout=to_optional_float(config.get("timeout", DEFAULT_TIMEOUT)),
        )

    def build_request(self, prompt: str) -> SynthesisRequest:
        return SynthesisRequest(prompt_text=prompt, model_identifier=self.model_identifier)

    async def synthesize(self, prompt: str) -> str:
        """Request a pattern for ``prompt``.

        Args:
            prompt: Composed instruction prompt

        Returns:
            The pattern text

        Raises:
            SynthesisTimeoutError: No response within ``timeout`` seconds
            SynthesisRejectedError: The service raised
            EmptyResponseError: The response held no pattern
        """
        request = self.build_request(prompt)
        logger.key_info(f"Requesting pattern for: {prompt!r}")
        start = time.monotonic()

        try:
            response = await asyncio.wait_for(self.service(request), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Generation service timed out after {self.timeout}s")
            raise SynthesisTimeoutError(
                f"Generation service did not respond within {self.timeout}s"
            ) from e
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Root cause only at debug level, callers only see the generic failure
            logger.error("Generation service failed")
            logger.debug(f"Generation service error: {type(e).__name__}: {e}", exc_info=True)
            raise SynthesisRejectedError("Generation service rejected the request") from e

        logger.timing(f"Generation service answered in {time.monotonic() - start:.2f}s")

        pattern = extract_pattern(response)
        logger.success(f"Generated pattern: {pattern}")
        return pattern
