"""
Tag grammar constants shared by the resolver, introspection, and mapper.

Notes:
    - An annotation is ``"<key>[,<option>]"``; only the text after the first
      separator is compared against OMIT_EMPTY.
    - EMBED_KEY is looked up in field metadata next to the tag keys.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_TAG_KEY",
    "TAG_SEPARATOR",
    "OMIT_EMPTY",
    "SKIP_MARKER",
    "EMBED_KEY",
]

# Tag key consulted when no other is configured.
DEFAULT_TAG_KEY: str = "json"

TAG_SEPARATOR: str = ","

# Option token that marks a field as omittable when empty.
OMIT_EMPTY: str = "omitempty"

# Key token that skips a field unconditionally.
SKIP_MARKER: str = "-"

# Metadata flag for anonymous (embedded) record fields.
EMBED_KEY: str = "embed"
