"""Per-provider capability descriptors.

Adapters expose their row through ``get_capabilities()``; the facade and UI
code query the same table without constructing an adapter.
"""

from .descriptor import CapabilityDescriptor
from .table import CAPABILITIES, get_capabilities

__all__ = ["CapabilityDescriptor", "CAPABILITIES", "get_capabilities"]
