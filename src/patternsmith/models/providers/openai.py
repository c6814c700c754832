"""OpenAI Provider Adapter Implementation."""

import logging

import openai

from .base import BaseProvider

logger = logging.getLogger(__name__)


def _build_messages(message: str, system_prompt: str | None) -> list[dict[str, str]]:
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": message})
    return messages


class OpenAIProviderAdapter(BaseProvider):
    """OpenAI provider implementation."""

    name = "openai"
    description = "OpenAI (GPT models)"
    requires_api_key = True
    requires_base_url = False
    supports_proxy = True
    default_base_url = "https://api.openai.com/v1"
    default_model_id = "gpt-3.5-turbo"
    health_check_model_id = "gpt-3.5-turbo"

    def execute_completion(
        self,
        message: str,
        model_id: str,
        api_key: str | None,
        base_url: str | None,
        max_tokens: int = 256,
        temperature: float = 0.0,
        system_prompt: str | None = None,
        **kwargs,
    ) -> str | None:
        """Execute OpenAI chat completion."""
        client_args = {"api_key": api_key, "http_client": kwargs.get("http_client")}
        if base_url:
            client_args["base_url"] = base_url
        if kwargs.get("timeout") is not None:
            client_args["timeout"] = kwargs["timeout"]
        client = openai.OpenAI(**client_args)
        messages = _build_messages(message, system_prompt)

        # Try new API (max_completion_tokens) first, fall back to old API (max_tokens)
        try:
            response = client.chat.completions.create(
                model=model_id,
                messages=messages,
                max_completion_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.BadRequestError as e:
            error_str = str(e).lower()
            if (
                "max_tokens" in error_str
                or "unsupported parameter" in error_str
                or "max_completion_tokens" in error_str
            ):
                logger.debug(f"Falling back to max_tokens for model '{model_id}'")
                response = client.chat.completions.create(
                    model=model_id,
                    messages=messages,
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
            else:
                raise

        if not response.choices:
            raise ValueError("OpenAI API returned empty choices list")

        return response.choices[0].message.content

    def check_health(
        self,
        api_key: str | None,
        base_url: str | None,
        timeout: float = 5.0,
        model_id: str | None = None,
    ) -> tuple[bool, str]:
        """Check OpenAI API health with a minimal completion."""
        if not api_key:
            return False, "API key not set"

        if api_key.startswith("${") or "YOUR_API_KEY" in api_key.upper():
            return False, "API key not configured (placeholder value detected)"

        test_model = model_id or self.health_check_model_id

        try:
            client = openai.OpenAI(api_key=api_key, base_url=base_url or self.default_base_url)
            response = client.chat.completions.create(
                model=test_model,
                messages=[{"role": "user", "content": "Hi"}],
                max_tokens=5,
                timeout=timeout,
            )
            if response.choices:
                return True, f"API accessible and model '{test_model}' working"
            return False, "API returned empty response"
        except openai.AuthenticationError:
            return False, "Authentication failed (invalid API key)"
        except openai.PermissionDeniedError:
            return False, "Permission denied (check API key permissions)"
        except openai.NotFoundError:
            return False, f"Model '{test_model}' not found"
        except openai.RateLimitError:
            return True, "API key valid (rate limited, but functional)"
        except openai.APITimeoutError:
            return False, "Request timeout"
        except openai.APIConnectionError as e:
            return False, f"Connection failed: {str(e)[:50]}"
        except openai.APIError as e:
            return False, f"API error: {str(e)[:50]}"
        except Exception as e:
            return False, f"Unexpected error: {str(e)[:50]}"
