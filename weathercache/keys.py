from __future__ import annotations

import hashlib

KEY_PREFIX = "weather:current:"


def normalize_location(raw: str) -> str:
    """Return a stable cache key for a free-text location.

    Surrounding whitespace and case are ignored, so ``"Perth, Australia"`` and
    ``"  PERTH, AUSTRALIA  "`` share a key. The digest keeps keys bounded in
    length regardless of the input.
    """

    folded = raw.strip().lower()
    digest = hashlib.md5(folded.encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}{digest}"


__all__ = ["KEY_PREFIX", "normalize_location"]
