"""OpenAIAdapter.

Talks to ``POST {base}/chat/completions`` with bearer auth. The whole
request flow is inherited from ``OpenAIStyleAdapter``; this module only pins
the provider id, which selects the configuration section (base URL
``https://api.openai.com/v1`` and the OpenAI model list by default).
"""

from __future__ import annotations

from ..base.openai_style import OpenAIStyleAdapter


class OpenAIAdapter(OpenAIStyleAdapter):
    provider_id = "openai"


__all__ = ["OpenAIAdapter"]
