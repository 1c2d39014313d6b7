"""Resource version stamps (ETags) and helpers for minting them.

An ETag is an opaque token compared by exact string equality. It is returned
alongside a resource on reads and echoed back by clients in ``If-Match`` on
writes.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ETag:
    """Validated, non-blank version token."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("ETag cannot be null or whitespace.")

    def __str__(self) -> str:
        return self.value


def stable_etag(seed: str, *, length: int = 16) -> ETag:
    """Deterministic ETag derived from a seed string.

    Notes:
      - Uses SHA-1 for compactness and determinism (not for security).
      - Same seed, same tag; the store seeds with ``<id>|<revision>``.
    """

    digest = hashlib.sha1(seed.encode("utf-8")).hexdigest()
    return ETag(digest[:length])
