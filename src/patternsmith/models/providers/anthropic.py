"""Anthropic Provider Adapter Implementation."""

import anthropic

from .base import BaseProvider


class AnthropicProviderAdapter(BaseProvider):
    """Anthropic AI provider implementation."""

    name = "anthropic"
    description = "Anthropic (Claude models)"
    requires_api_key = True
    requires_base_url = False
    supports_proxy = True
    default_base_url = None
    default_model_id = "claude-haiku-4-5-20251001"
    health_check_model_id = "claude-haiku-4-5-20251001"

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
        """Execute Anthropic chat completion."""
        client_args = {"api_key": api_key, "http_client": kwargs.get("http_client")}
        if base_url:
            client_args["base_url"] = base_url
        if kwargs.get("timeout") is not None:
            client_args["timeout"] = kwargs["timeout"]
        client = anthropic.Anthropic(**client_args)

        request_params = {
            "model": model_id,
            "messages": [{"role": "user", "content": message}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if system_prompt:
            request_params["system"] = system_prompt

        response = client.messages.create(**request_params)

        # Concatenate text from all TextBlock instances
        text_parts = [
            block.text for block in response.content if isinstance(block, anthropic.types.TextBlock)
        ]
        if not text_parts:
            return None
        return "\n".join(text_parts)

    def check_health(
        self,
        api_key: str | None,
        base_url: str | None,
        timeout: float = 5.0,
        model_id: str | None = None,
    ) -> tuple[bool, str]:
        """Check Anthropic API health with minimal test call."""
        if not api_key:
            return False, "API key not set"

        if api_key.startswith("${") or api_key.startswith("sk-ant-xxx"):
            return False, "API key not configured (placeholder value detected)"

        test_model = model_id or self.health_check_model_id

        try:
            client_args = {"api_key": api_key}
            if base_url:
                client_args["base_url"] = base_url
            client = anthropic.Anthropic(**client_args)
            client.messages.create(
                model=test_model,
                max_tokens=1,
                messages=[{"role": "user", "content": "Hi"}],
                timeout=timeout,
            )
            return True, "API accessible and authenticated"
        except anthropic.AuthenticationError:
            return False, "Authentication failed (invalid API key)"
        except anthropic.PermissionDeniedError:
            return False, "Permission denied (check API key permissions)"
        except anthropic.RateLimitError:
            return True, "API key valid (rate limited, but functional)"
        except anthropic.NotFoundError:
            return False, f"Model '{test_model}' not found (check model ID)"
        except anthropic.APIConnectionError as e:
            return False, f"Connection failed: {str(e)[:50]}"
        except anthropic.APIError as e:
            return False, f"API error: {str(e)[:50]}"
        except Exception as e:
            return False, f"Unexpected error: {str(e)[:50]}"
