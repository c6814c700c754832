"""Base Provider Interface for AI Model Access."""

from abc import ABC, abstractmethod


class BaseProvider(ABC):
    """Abstract base class for AI model providers.

    All provider implementations must inherit from this class and implement
    the two core methods: execute_completion and check_health.

    Metadata Attributes (define on subclass):
        name: Provider identifier (e.g., "anthropic", "openai")
        description: User-friendly description for display
        requires_api_key: Whether provider requires API key for authentication
        requires_base_url: Whether provider requires custom base URL
        supports_proxy: Whether provider supports HTTP proxy configuration
        default_base_url: Default API endpoint URL if applicable
        default_model_id: Default model used when none is configured
        health_check_model_id: Cheapest/fastest model for health checks
    """

    # Metadata - subclasses MUST override these class attributes
    name: str = NotImplemented
    description: str = NotImplemented
    requires_api_key: bool = NotImplemented
    requires_base_url: bool = NotImplemented
    supports_proxy: bool = NotImplemented
    default_base_url: str | None = None
    default_model_id: str | None = None
    health_check_model_id: str | None = None

    @abstractmethod
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
        """Execute a direct chat completion.

        :param message: User message to send
        :param model_id: Model identifier
        :param api_key: API authentication key
        :param base_url: Custom API endpoint URL
        :param max_tokens: Maximum tokens to generate
        :param temperature: Sampling temperature
        :param system_prompt: System directive sent ahead of the user message
        :param kwargs: Additional provider-specific arguments (``http_client``, ``timeout``)
        :return: Model response text, or None when the model returned no content
        """
        pass

    @abstractmethod
    def check_health(
        self,
        api_key: str | None,
        base_url: str | None,
        timeout: float = 5.0,
        model_id: str | None = None,
    ) -> tuple[bool, str]:
        """Test provider connectivity and authentication.

        :param api_key: API authentication key
        :param base_url: Custom API endpoint URL
        :param timeout: Request timeout in seconds
        :param model_id: Optional model ID to test with (uses cheapest if not provided)
        :return: (success, message) tuple
        """
        pass
