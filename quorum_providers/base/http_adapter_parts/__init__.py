"""Shared HTTP adapter implementation pieces."""

from .base import BaseHttpAdapter
from .wire import first, safe_json, split_system, to_wire_messages

__all__ = ["BaseHttpAdapter", "first", "safe_json", "split_system", "to_wire_messages"]
