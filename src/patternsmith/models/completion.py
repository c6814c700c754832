"""Direct Chat Completion Interface for Multi-Provider LLM Access.

Provides a single blocking call that sends a system directive and a user
message to the configured provider and returns the response text. Provider
credentials and endpoints come from the ``providers`` configuration section.

.. seealso::
   :mod:`patternsmith.models.providers` : Provider adapters
   :mod:`patternsmith.utils.config` : Provider configuration management
"""

import logging
import os
import time
from urllib.parse import urlparse

import httpx

from patternsmith.models.providers import get_provider
from patternsmith.utils.config import get_provider_config

logger = logging.getLogger(__name__)


def _validate_proxy_url(proxy_url: str) -> bool:
    """Validate HTTP proxy URL format.

    :param proxy_url: Proxy URL to validate
    :return: True if proxy URL appears valid, False otherwise
    """
    if not proxy_url:
        return False

    try:
        parsed = urlparse(proxy_url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def get_chat_completion(
    message: str,
    provider: str,
    model_id: str | None = None,
    system_prompt: str | None = None,
    max_tokens: int = 256,
    temperature: float = 0.0,
    timeout: float | None = None,
    base_url: str | None = None,
    provider_config: dict | None = None,
) -> str | None:
    """Execute a chat completion request against one provider.

    :param message: User message
    :param provider: Provider name ('openai', 'anthropic', 'ollama')
    :param model_id: Model identifier; defaults to the provider's default model
    :param system_prompt: System directive sent ahead of the message
    :param max_tokens: Maximum tokens to generate
    :param temperature: Sampling temperature
    :param timeout: Per-request timeout in seconds passed to the SDK client
    :param base_url: Custom API endpoint, overrides configuration
    :param provider_config: Provider configuration dict with api_key, base_url;
        loaded from configuration when omitted
    :raises ValueError: If the provider is unknown or required settings are missing
    :return: Response text, or None if the model returned no content

    Examples:
        >>> text = get_chat_completion(
        ...     message="Match email addresses",
        ...     provider="openai",
        ...     model_id="gpt-3.5-turbo",
        ...     system_prompt="Respond with only the regex pattern.",
        ... )
    """
    provider_class = get_provider(provider)
    if not provider_class:
        raise ValueError(f"Unknown provider: {provider}")

    if provider_config is None:
        provider_config = get_provider_config(provider)
    api_key = provider_config.get("api_key")
    if base_url is None:
        base_url = provider_config.get("base_url") or provider_class.default_base_url
    model_id = model_id or provider_class.default_model_id

    if provider_class.requires_api_key and not api_key:
        raise ValueError(f"API key required for {provider}")
    if provider_class.requires_base_url and not base_url:
        raise ValueError(f"Base URL required for {provider}")
    if not model_id:
        raise ValueError(f"Model ID required for {provider}")

    http_client = None
    if provider_class.supports_proxy:
        proxy_url = os.environ.get("HTTP_PROXY")
        if proxy_url and _validate_proxy_url(proxy_url):
            http_client = httpx.Client(proxy=proxy_url, timeout=timeout or 60.0)
        elif proxy_url:
            logger.warning(
                f"Invalid HTTP_PROXY URL format '{proxy_url}', ignoring proxy configuration"
            )

    start = time.monotonic()
    try:
        result = provider_class().execute_completion(
            message=message,
            model_id=model_id,
            api_key=api_key,
            base_url=base_url,
            max_tokens=max_tokens,
            temperature=temperature,
            system_prompt=system_prompt,
            http_client=http_client,
            timeout=timeout,
        )
    finally:
        if http_client is not None:
            http_client.close()

    logger.debug(
        f"{provider}/{model_id} completion in {time.monotonic() - start:.2f}s "
        f"(prompt {len(message)} chars, response {len(result or '')} chars)"
    )
    return result
