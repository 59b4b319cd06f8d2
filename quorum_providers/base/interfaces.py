"""
Provider-agnostic interfaces for the providers layer.

Re-exports Protocols split into single-class modules under
``quorum_providers.base.interfaces_parts`` while keeping imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ProviderAdapter

__all__ = ["ProviderAdapter"]
