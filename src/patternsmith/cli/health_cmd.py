"""Check that the configured generation provider is reachable."""

import click

from patternsmith.cli.styles import Messages, console
from patternsmith.models.providers import get_provider
from patternsmith.utils.config import get_provider_config, get_synthesis_config


@click.command()
@click.option("--timeout", default=5.0, show_default=True, help="Request timeout in seconds")
def health(timeout):
    """Check provider configuration and connectivity."""
    synthesis = get_synthesis_config()
    provider_name = synthesis.get("provider", "openai")
    model_id = synthesis.get("model_id")

    console.print(f"\n{Messages.header('patternsmith - Health Check')}\n")
    console.print(f"Provider: [bold]{provider_name}[/bold]  Model: [bold]{model_id or '-'}[/bold]")

    provider_class = get_provider(provider_name)
    if provider_class is None:
        console.print(f"  {Messages.error(f'Unknown provider: {provider_name}')}")
        raise SystemExit(1)

    provider_config = get_provider_config(provider_name)
    with console.status("Contacting provider..."):
        ok, message = provider_class().check_health(
            api_key=provider_config.get("api_key"),
            base_url=provider_config.get("base_url"),
            timeout=timeout,
            model_id=model_id,
        )

    if ok:
        console.print(f"  {Messages.success(message)}")
    else:
        console.print(f"  {Messages.error(message)}")
        raise SystemExit(1)
