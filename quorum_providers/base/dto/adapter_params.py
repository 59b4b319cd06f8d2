"""Typed parameter object for provider adapter initialization.

Purpose
-------
Capture the per-adapter overrides a caller (or the factory) may supply: base
URL, model list, default model and extra static headers. Anything left unset
falls back to the layered configuration from ``get_provider_config``.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O side effects. Validation errors may be raised by
  Pydantic if inputs are of incorrect types.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider adapter initialization parameters.

    Attributes
    ----------
    base_url:
        Optional override for the API base URL (proxies, gateways).
    models:
        Optional replacement for the adapter's known model list.
    default_model:
        Optional default model; must be a member of the effective model list.
    headers:
        Optional static HTTP headers added to every request.
    """

    base_url: Optional[str] = None
    models: Optional[List[str]] = None
    default_model: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)


__all__ = ["AdapterParams"]
