"""Generic handler for ``GET /<collection>/{id}``.

Steps:
  1. parse the ID from the last path segment  -> 400 InvalidId
  2. look the resource up                      -> 404 ResourceNotFound
  3. serialize it and add ``eTag``             -> 200

There is no conditional-read support: ``If-Match``/``If-None-Match`` are not
consulted on reads.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Awaitable, Callable, Optional, Union

from fastapi import Request, Response

from ..errors import ApiErrorCode
from ..json_access import JsonObject, set_property
from ..responses import ok
from ..result import Result, bind_async, resolve, to_either
from ..versioning import ETag
from .common import IdParser, respond, try_get_id


Found = Optional[tuple[Any, ETag]]
ResourceFinder = Callable[[Any], Union[Found, Awaitable[Found]]]
ResourceSerializer = Callable[[Any], JsonObject]


async def _try_find(resource_id: Any, find_resource: ResourceFinder) -> Result:
    found = await resolve(find_resource(resource_id))
    return to_either(
        found,
        lambda: ApiErrorCode.RESOURCE_NOT_FOUND.as_error("Resource with ID was not found.").with_status(
            HTTPStatus.NOT_FOUND
        ),
    )


def _found_body(found: tuple[Any, ETag], serialize: ResourceSerializer) -> JsonObject:
    resource, etag = found
    return set_property(serialize(resource), "eTag", etag.value)


async def get_resource(
    request: Request,
    parse_id: IdParser,
    find_resource: ResourceFinder,
    serialize: ResourceSerializer,
) -> Response:
    result = try_get_id(request, parse_id)
    result = await bind_async(result, lambda resource_id: _try_find(resource_id, find_resource))
    return respond(request, result, lambda found: ok(_found_body(found, serialize)))
