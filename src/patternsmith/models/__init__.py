"""LLM model access for pattern synthesis.

.. seealso::
   :func:`get_chat_completion` : Direct chat completion requests
   :mod:`patternsmith.models.providers` : Provider adapters
"""

from .completion import get_chat_completion

__all__ = ["get_chat_completion"]
