"""Cache keys for composite uploads."""

from __future__ import annotations

import base64
import hashlib

KEY_LENGTH = 16


def derive_cache_key(base_url: str, overlay: str) -> str:
    """
    Derive a short deterministic key from the request inputs.

    The overlay is hashed exactly as received, data-URI prefix included.
    """
    digest = hashlib.sha256(f"{base_url}:{overlay}".encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")[:KEY_LENGTH]
