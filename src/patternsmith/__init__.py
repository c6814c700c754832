"""patternsmith: natural-language regex synthesis and validation.

This package contains:
- Preset registry and instruction composer
- Pattern synthesizer backed by LLM providers
- Crash-safe pattern validator
- Session state controller tying them together
"""

# Version information
__version__ = "0.1.0"

__all__ = ["__version__"]

# Import submodules directly, e.g. from patternsmith.session import SessionController
