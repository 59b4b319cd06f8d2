"""GrokAdapter.

xAI exposes an OpenAI-compatible Chat Completions API at
``https://api.x.ai/v1``, so the adapter reuses ``OpenAIStyleAdapter`` and
keeps the Grok defaults and provider naming. Credentials resolve from
``XAI_API_KEY`` (alias ``GROK_API_KEY``) when the store has none.
"""

from __future__ import annotations

from ..base.openai_style import OpenAIStyleAdapter


class GrokAdapter(OpenAIStyleAdapter):
    provider_id = "grok"


__all__ = ["GrokAdapter"]
