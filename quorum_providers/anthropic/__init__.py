"""
Anthropic provider package.

Exports:
- AnthropicAdapter: Messages API adapter over raw HTTP
"""

from .client import AnthropicAdapter

__all__ = ["AnthropicAdapter"]
