"""
OpenAI provider package.

Exports:
- OpenAIAdapter: Chat Completions adapter over raw HTTP
"""

from .client import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
