"""
Participant configuration DTO.

A participant bundles the provider, model, optional system prompt and
generation settings a caller uses for one conversational voice. The facade's
``send_participant_message`` unpacks it into a regular send.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .generation_settings import GenerationSettings


class ParticipantConfig(BaseModel):
    """One configured conversational participant.

    Attributes
    ----------
    provider_id:
        Provider identifier (``openai``, ``anthropic``, ``grok``, ``google``).
    model:
        Model id; ``None`` means the provider default.
    name:
        Display name (informational only).
    system_prompt:
        Prepended as a system message when the conversation has none.
    settings:
        Generation settings forwarded to the adapter.
    """

    model_config = ConfigDict(frozen=True)

    provider_id: str
    model: Optional[str] = None
    name: Optional[str] = None
    system_prompt: Optional[str] = None
    settings: GenerationSettings = Field(default_factory=GenerationSettings)

    @field_validator("provider_id")
    @classmethod
    def _normalize_provider(cls, v: str) -> str:
        return (v or "").strip().lower()


__all__ = ["ParticipantConfig"]
