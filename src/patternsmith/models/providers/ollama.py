"""Ollama Provider Adapter Implementation."""

import httpx
import ollama

from .base import BaseProvider


class OllamaProviderAdapter(BaseProvider):
    """Ollama local model provider implementation."""

    name = "ollama"
    description = "Ollama (local models)"
    requires_api_key = False
    requires_base_url = True
    supports_proxy = False
    default_base_url = "http://localhost:11434"
    default_model_id = "mistral:7b"
    health_check_model_id = "mistral:7b"

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
        """Execute Ollama chat completion."""
        client = ollama.Client(
            host=base_url or self.default_base_url, timeout=kwargs.get("timeout")
        )

        chat_messages = []
        if system_prompt:
            chat_messages.append({"role": "system", "content": system_prompt})
        chat_messages.append({"role": "user", "content": message})

        response = client.chat(
            model=model_id,
            messages=chat_messages,
            options={"num_predict": max_tokens, "temperature": temperature},
        )
        return response["message"]["content"]

    def check_health(
        self,
        api_key: str | None,
        base_url: str | None,
        timeout: float = 5.0,
        model_id: str | None = None,
    ) -> tuple[bool, str]:
        """Check Ollama connectivity (no API key needed)."""
        base_url = base_url or self.default_base_url
        try:
            response = httpx.get(base_url.rstrip("/") + "/api/tags", timeout=timeout)
        except httpx.HTTPError as e:
            return False, f"Connection test failed: {str(e)[:50]}"

        if response.status_code == 200:
            return True, f"Accessible at {base_url}"
        return False, f"Not accessible at {base_url} (status {response.status_code})"
