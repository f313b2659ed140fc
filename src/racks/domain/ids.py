"""Identifier generation for rack entities."""

import uuid


def new_id(kind: str) -> str:
    """Generate a fresh identifier such as ``component-1f3a9c...``.

    Identifiers are generated once at creation time and never regenerated.
    """
    return f"{kind}-{uuid.uuid4().hex[:12]}"
