"""
Extension API keys.

Long-lived keys for the browser extension, sent in ``x-api-key``.
They are bound to one account, never expire, and bypass the token
service entirely.
"""

from __future__ import annotations

import re
import secrets

API_KEY_PREFIX = "webooks_"
_API_KEY_RE = re.compile(r"^webooks_[a-f0-9]{32}$")


def generate_api_key() -> str:
    """Generate a new ``webooks_<32 hex>`` key."""
    return f"{API_KEY_PREFIX}{secrets.token_hex(16)}"


def is_valid_api_key_format(api_key: str | None) -> bool:
    return bool(api_key) and _API_KEY_RE.match(api_key) is not None


def mask_api_key(api_key: str) -> str:
    """Show only the first ten characters."""
    return api_key[:10] + "..."
