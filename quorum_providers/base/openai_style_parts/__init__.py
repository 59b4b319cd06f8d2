"""OpenAI-compatible adapter base and helpers."""

from .base import OpenAIStyleAdapter
from .style_helpers import (
    extract_openai_delta,
    extract_openai_text,
    openai_content_filter_error,
    openai_stream_error,
)

__all__ = [
    "OpenAIStyleAdapter",
    "extract_openai_delta",
    "extract_openai_text",
    "openai_content_filter_error",
    "openai_stream_error",
]
