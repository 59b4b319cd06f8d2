"""Shared HTTP adapter base (public facade).

Concrete adapters subclass :class:`BaseHttpAdapter`; the implementation lives
under ``http_adapter_parts``.
"""

from .http_adapter_parts import BaseHttpAdapter, first, safe_json, split_system, to_wire_messages

__all__ = ["BaseHttpAdapter", "first", "safe_json", "split_system", "to_wire_messages"]
