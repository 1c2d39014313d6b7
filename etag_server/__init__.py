"""Conditional-request (ETag) building blocks for HTTP resource APIs.

Generic GET/DELETE handlers, the API error model, validating JSON accessors
and the result combinators they are built from, plus a small order service
that wires them together.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
