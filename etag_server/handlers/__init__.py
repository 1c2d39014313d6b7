"""Generic conditional-request handlers.

Collaborators supply the ID parser and the lookup/delete callbacks; the
handlers own validation order and the HTTP shape of every outcome.
"""

from __future__ import annotations

from .common import IdParser, try_get_id
from .delete_resource import DeleteError, RecordDeleter, delete_resource, try_get_etag
from .get_resource import ResourceFinder, ResourceSerializer, get_resource

__all__ = [
    "DeleteError",
    "IdParser",
    "RecordDeleter",
    "ResourceFinder",
    "ResourceSerializer",
    "delete_resource",
    "get_resource",
    "try_get_etag",
    "try_get_id",
]
