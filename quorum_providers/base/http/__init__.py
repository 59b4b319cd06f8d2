"""HTTP utilities package for adapters.

Exposes pooled httpx clients and the cancel-time connection abort.
"""

from .abort import ConnectionAbort
from .client import close_all_clients, get_httpx_client, new_httpx_client

__all__ = ["ConnectionAbort", "get_httpx_client", "new_httpx_client", "close_all_clients"]
