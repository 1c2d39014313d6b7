"""Request header and path helpers.

Conditional requests carry their precondition in ``If-Match``, a header that
clients may legally repeat. Lookups here therefore return *every* value sent
under a name (case-insensitive), or ``None`` when the header is absent, and
leave the policy for "how many values are acceptable" to the caller.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


IF_MATCH = "If-Match"


def _lower_map(headers: Mapping[str, Any]) -> dict[str, list[Optional[str]]]:
    out: dict[str, list[Optional[str]]] = {}
    for key, value in headers.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        out.setdefault(str(key).lower(), []).extend(None if v is None else str(v) for v in values)
    return out


def get_header_values(headers: Any, name: str) -> Optional[list[Optional[str]]]:
    """Return all values sent for ``name``, or ``None`` if it was not sent.

    Accepts Starlette ``Headers`` (repeated headers are kept apart via
    ``getlist``) or a plain mapping whose values are strings or lists.
    """

    getlist = getattr(headers, "getlist", None)
    if callable(getlist):
        values = list(getlist(name))
        return values if values else None

    h = _lower_map(headers)
    key = name.lower()
    if key not in h:
        return None
    return h[key]


def last_path_segment(path: str) -> str:
    """Return the final non-empty ``/``-delimited segment of ``path``.

    ``/v1/orders/abc`` and ``/v1/orders/abc/`` both yield ``abc``.
    """

    segments = [segment for segment in (path or "").split("/") if segment]
    if not segments:
        return ""
    return segments[-1]
