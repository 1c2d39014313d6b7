"""Steps shared by the resource handlers.

Each step returns ``Ok(value)`` or ``Err(ApiErrorWithStatusCode)``; handlers
chain them and turn the final result into a response with :func:`respond`.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Callable

from fastapi import Request, Response

from ..errors import ApiErrorCode, ApiErrorWithStatusCode
from ..headers import last_path_segment
from ..responses import error_response
from ..result import Result, coalesce, map_left, map_right


log = logging.getLogger("etag_server.handlers")

# parse_id(raw) -> Ok(TId) | Err(str)
IdParser = Callable[[str], Result]


def try_get_id(request: Request, parse_id: IdParser) -> Result:
    """Parse the resource ID from the last path segment.

    A parser failure becomes ``400 InvalidId`` carrying the parser's message.
    """

    raw_id = last_path_segment(request.url.path)
    return map_left(
        parse_id(raw_id),
        lambda message: ApiErrorCode.INVALID_ID.as_error(message).with_status(HTTPStatus.BAD_REQUEST),
    )


def _reject(request: Request, error: ApiErrorWithStatusCode) -> Response:
    log.info(
        "%s %s rejected: %s %s (%s)",
        request.method,
        request.url.path,
        error.status_code,
        error.code.value,
        error.message,
    )
    return error_response(error)


def respond(request: Request, result: Result, on_success: Callable[[Any], Response]) -> Response:
    """Collapse a handler pipeline into the response it describes."""

    return coalesce(
        map_left(
            map_right(result, on_success),
            lambda error: _reject(request, error),
        )
    )
