"""Wire-format helpers shared by the HTTP adapters.

Role mapping, system-message extraction and tolerant JSON decoding live here
so each adapter module only describes its vendor's payload shape.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models import ConversationMessage


def to_wire_messages(messages: Sequence[ConversationMessage]) -> List[Dict[str, str]]:
    """Map messages 1:1 to ``{"role", "content"}`` dicts, order preserved."""
    return [{"role": m.wire_role, "content": m.text} for m in messages]


def split_system(
    messages: Sequence[ConversationMessage],
) -> Tuple[Optional[str], List[ConversationMessage]]:
    """Separate system messages from the rest.

    Returns the system texts joined by a blank line (``None`` when there are
    none) and the remaining messages in their original order.
    """
    system_parts: List[str] = []
    rest: List[ConversationMessage] = []
    for m in messages:
        if m.wire_role == "system":
            if m.text:
                system_parts.append(m.text)
        else:
            rest.append(m)
    return ("\n\n".join(system_parts) or None), rest


def safe_json(body: bytes) -> Any:
    """Decode ``body`` as JSON, returning ``None`` when it is not JSON."""
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def first(items: Any) -> Any:
    """Return the first element of a list-like value, or ``None``."""
    if isinstance(items, list) and items:
        return items[0]
    return None


__all__ = ["to_wire_messages", "split_system", "safe_json", "first"]
