"""
Component Logger

Colored logging for patternsmith components with:
- Rich terminal output with component-specific colors
- Graceful fallbacks when configuration is unavailable
- Message hierarchy (key_info, info, debug, success, warning, error, timing)

Usage:
    logger = get_logger("synthesizer")
    logger.key_info("Requesting pattern")
    logger.debug("Detailed trace")
    logger.success("Pattern ready")
    logger.error("Generation failed", exc_info=True)

    # Custom loggers with explicit parameters
    logger = get_logger(name="custom_component", color="blue")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from patternsmith.utils.config import get_config_value, to_bool


class ComponentLogger:
    """
    Rich-formatted logger with color coding and message hierarchy.

    Message Types:
    - key_info: Important operational information
    - info: Normal operational messages
    - debug: Detailed tracing information
    - warning: Warning messages
    - error: Error messages
    - success: Success messages
    - timing: Timing information
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = "white"):
        """
        Initialize component logger.

        Args:
            base_logger: Underlying Python logger
            component_name: Name of the component (e.g., 'synthesizer', 'session')
            color: Rich color name for this component
        """
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _format_message(self, message: str, style: str, emoji: str = "") -> str:
        """Format message with Rich markup and emoji prefix.

        The message itself is escaped; patterns like ``[a-z]`` are not markup.
        """
        message = escape(message)
        prefix = f"{emoji}{self.component_name.title()}: "
        if style:
            return f"[{style}]{prefix}{message}[/{style}]"
        return f"{prefix}{message}"

    def key_info(self, message: str) -> None:
        style = f"bold {self.color}" if self.color != "white" else "bold white"
        self.base_logger.info(self._format_message(message, style))

    def info(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, self.color))

    def debug(self, message: str, exc_info: bool = False) -> None:
        style = f"dim {self.color}" if self.color != "white" else "dim white"
        self.base_logger.debug(self._format_message(message, style, "🔍 "), exc_info=exc_info)

    def warning(self, message: str) -> None:
        self.base_logger.warning(self._format_message(message, "bold yellow", "⚠️  "))

    def error(self, message: str, exc_info: bool = False) -> None:
        self.base_logger.error(self._format_message(message, "bold red", "❌ "), exc_info=exc_info)

    def success(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, "bold green", "✅ "))

    def timing(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, "bold white", "🕒 "))

    def exception(self, message: str, *args, **kwargs) -> None:
        formatted = self._format_message(message, "bold red", "❌ ")
        self.base_logger.exception(formatted, *args, **kwargs)

    # Properties for compatibility
    @property
    def level(self) -> int:
        return self.base_logger.level

    @property
    def name(self) -> str:
        return self.base_logger.name

    def setLevel(self, level: int) -> None:
        self.base_logger.setLevel(level)

    def isEnabledFor(self, level: int) -> bool:
        return self.base_logger.isEnabledFor(level)


def _setup_rich_logging(level: int | None = None) -> None:
    """Configure Rich logging for the root logger (called once)."""
    root_logger = logging.getLogger()

    # Prevent duplicate handler registration
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            return

    try:
        configured_level = get_config_value("logging.level", "INFO")
        rich_tracebacks = to_bool(get_config_value("logging.rich_tracebacks", True))
        show_traceback_locals = to_bool(get_config_value("logging.show_traceback_locals", False))
        show_full_paths = to_bool(get_config_value("logging.show_full_paths", False))
    except Exception:
        # Secure defaults when configuration system is unavailable
        configured_level = "INFO"
        rich_tracebacks = True
        show_traceback_locals = False
        show_full_paths = False

    if level is None:
        level = logging.getLevelName(str(configured_level).upper())
        if not isinstance(level, int):
            level = logging.INFO
    root_logger.setLevel(level)

    console = Console(stderr=True, width=120)

    handler = RichHandler(
        console=console,
        rich_tracebacks=rich_tracebacks,
        markup=True,  # Enable [bold], [green], etc. in log messages
        show_path=show_full_paths,
        show_time=True,
        show_level=True,
        tracebacks_show_locals=show_traceback_locals,
    )

    root_logger.addHandler(handler)

    # Reduce third-party library noise
    for lib in ["httpx", "httpcore", "openai", "anthropic", "urllib3"]:
        logging.getLogger(lib).setLevel(logging.WARNING)


def get_logger(
    component_name: str | None = None,
    level: int | None = None,
    *,
    name: str | None = None,
    color: str | None = None,
) -> ComponentLogger:
    """
    Get a component logger.

    Args:
        component_name: Component name (e.g., 'synthesizer', 'session'); the
            color comes from ``logging.logging_colors.<component_name>``
        level: Root logging level; defaults to ``logging.level`` from config
        name: Direct logger name (keyword-only), bypasses color lookup
        color: Direct color specification (keyword-only)

    Returns:
        ComponentLogger instance

    Raises:
        ValueError: If neither component_name nor name is given
    """
    _setup_rich_logging(level)

    if name is not None:
        return ComponentLogger(logging.getLogger(name), name, color or "white")

    if component_name is None:
        raise ValueError(
            "Component name is required. Usage: get_logger('component_name') or "
            "get_logger(name='custom_name', color='blue')"
        )

    base_logger = logging.getLogger(f"patternsmith.{component_name}")

    try:
        color = get_config_value(f"logging.logging_colors.{component_name}") or "white"
    except Exception:
        # Logging must keep working with a broken config
        color = "white"

    return ComponentLogger(base_logger, component_name, color)
