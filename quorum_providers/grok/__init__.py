"""
Grok (xAI) provider package.

Exports:
- GrokAdapter: OpenAI-compatible adapter for the xAI API
"""

from .client import GrokAdapter

__all__ = ["GrokAdapter"]
