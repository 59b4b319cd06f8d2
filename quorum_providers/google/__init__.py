"""
Google provider package.

Exports:
- GoogleAdapter: Generative Language API (Gemini) adapter over raw HTTP
"""

from .client import GoogleAdapter

__all__ = ["GoogleAdapter"]
