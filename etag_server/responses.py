"""Response helpers.

Handlers only ever produce one of these shapes:
  - 200 with a JSON object body (``ok``)
  - 201 with a JSON object body and ``Location`` (``created``)
  - 204 with no body (``no_content``)
  - 4xx/5xx with an API error body (``error_response``)

Bodies go through :func:`fastapi.encoders.jsonable_encoder`, so UUIDs and
datetimes inside a serialized resource render as strings.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping

from fastapi import Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .errors import ApiErrorWithStatusCode


def ok(body: Mapping[str, Any]) -> JSONResponse:
    return JSONResponse(jsonable_encoder(dict(body)), status_code=HTTPStatus.OK)


def no_content() -> Response:
    return Response(status_code=HTTPStatus.NO_CONTENT)


def error_response(error: ApiErrorWithStatusCode) -> JSONResponse:
    return JSONResponse(error.to_dict(), status_code=error.status_code)


def created(body: Mapping[str, Any], location: str) -> JSONResponse:
    return JSONResponse(
        jsonable_encoder(dict(body)),
        status_code=HTTPStatus.CREATED,
        headers={"Location": location},
    )
