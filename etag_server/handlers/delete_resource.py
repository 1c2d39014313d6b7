"""Generic handler for ``DELETE /<collection>/{id}`` guarded by ``If-Match``.

Steps:
  1. parse the ID from the last path segment  -> 400 InvalidId
  2. read exactly one ``If-Match`` value       -> 428 / 400 InvalidConditionalHeader
  3. delegate the delete                       -> 412 ETagMismatch
  4. success                                   -> 204

Both validation steps finish before the delete callback is invoked.
"""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Any, Awaitable, Callable, Union

from fastapi import Request, Response

from ..errors import ApiErrorCode, ApiErrorWithStatusCode
from ..headers import IF_MATCH, get_header_values
from ..responses import no_content
from ..result import Err, Ok, Result, bind, bind_async, map_right, resolve
from ..versioning import ETag
from .common import IdParser, respond, try_get_id


class DeleteError(str, Enum):
    """Reasons a delete callback may refuse to delete.

    Closed set: a value the handler does not know is a programming error.
    """

    ETAG_MISMATCH = "ETagMismatch"


RecordDeleter = Callable[[Any, ETag], Union[Result, Awaitable[Result]]]


def _invalid_header(message: str, status: int = HTTPStatus.BAD_REQUEST) -> Err:
    return Err(ApiErrorCode.INVALID_CONDITIONAL_HEADER.as_error(message).with_status(status))


def try_get_etag(headers: Any) -> Result:
    """Extract the ``If-Match`` precondition as an :class:`ETag`."""

    values = get_header_values(headers, IF_MATCH)
    if values is None:
        return _invalid_header("'If-Match' header must be specified.", HTTPStatus.PRECONDITION_REQUIRED)
    if len(values) == 1 and values[0] is None:
        return _invalid_header("'If-Match' header cannot be null.")
    if len(values) == 0 or (len(values) == 1 and not values[0].strip()):
        return _invalid_header("'If-Match' header cannot be empty or whitespace.")
    if len(values) == 1:
        return Ok(ETag(values[0]))
    return _invalid_header("Must specify exactly one 'If-Match' header.")


def _delete_failed(error: Any) -> ApiErrorWithStatusCode:
    if error is DeleteError.ETAG_MISMATCH:
        return ApiErrorCode.ETAG_MISMATCH.as_error(
            "The eTag passed in the 'If-Match' header is invalid. Another process might have updated the resource."
        ).with_status(HTTPStatus.PRECONDITION_FAILED)
    raise NotImplementedError(f"Unhandled delete error: {error!r}")


async def _try_delete(resource_id: Any, etag: ETag, try_delete_record: RecordDeleter) -> Result:
    outcome = await resolve(try_delete_record(resource_id, etag))
    if isinstance(outcome, Ok):
        return Ok(None)
    if isinstance(outcome, Err):
        return Err(_delete_failed(outcome.error))
    raise NotImplementedError(f"Unhandled delete outcome: {outcome!r}")


async def delete_resource(
    request: Request,
    parse_id: IdParser,
    try_delete_record: RecordDeleter,
) -> Response:
    result = bind(
        try_get_id(request, parse_id),
        lambda resource_id: map_right(try_get_etag(request.headers), lambda etag: (resource_id, etag)),
    )
    result = await bind_async(result, lambda pair: _try_delete(pair[0], pair[1], try_delete_record))
    return respond(request, result, lambda _: no_content())
