"""OpenAI-compatible adapter base (public facade)."""

from .openai_style_parts import OpenAIStyleAdapter

__all__ = ["OpenAIStyleAdapter"]
