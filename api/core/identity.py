"""
Prefixed unique identifiers, e.g. `inv_3f2a...`.
"""

from __future__ import annotations

import uuid


def generate_id(prefix: str) -> str:
    prefix = (prefix or "").strip()
    if not prefix:
        raise ValueError("Id prefix is empty.")
    return f"{prefix}_{uuid.uuid4().hex}"
