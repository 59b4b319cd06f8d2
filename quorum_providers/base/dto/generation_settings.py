"""
Generation settings DTO.

Purpose
-------
Carry the optional sampling controls a caller may attach to a request. Values
are not range-checked here: providers reject out-of-range values themselves and
the resulting HTTP error is classified like any other.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for type coercion and ``model_dump``.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

# Generic field name -> OpenAI-compatible wire name. Adapters pass their own map.
DEFAULT_WIRE_NAMES: Mapping[str, str] = {
    "temperature": "temperature",
    "max_tokens": "max_tokens",
    "top_p": "top_p",
    "frequency_penalty": "frequency_penalty",
    "presence_penalty": "presence_penalty",
}


class GenerationSettings(BaseModel):
    """Optional sampling controls; unset fields are omitted from the payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None

    def to_wire(self, field_map: Mapping[str, str] = DEFAULT_WIRE_NAMES) -> Dict[str, Any]:
        """Return set fields renamed through ``field_map``.

        Fields absent from ``field_map`` are dropped (the provider has no
        equivalent); fields left at ``None`` are never sent.
        """
        out: Dict[str, Any] = {}
        for name, value in self.model_dump(exclude_none=True).items():
            wire = field_map.get(name)
            if wire:
                out[wire] = value
        return out


__all__ = ["GenerationSettings", "DEFAULT_WIRE_NAMES"]
