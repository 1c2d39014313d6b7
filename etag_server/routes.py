"""Route table for the order endpoints.

Each route binds a generic handler to the order model and to the store kept
on ``app.state.store``:

  GET    /v1/orders/{orderId}   -> handlers.get_resource
  DELETE /v1/orders/{orderId}   -> handlers.delete_resource (If-Match required)
  POST   /v1/orders             -> create, 201 with ``eTag``
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, Response

from .errors import ApiErrorCode
from .handlers import delete_resource, get_resource
from .json_access import set_property, try_parse_object
from .orders import serialize_order, try_deserialize_order, try_parse_order_id
from .responses import created, error_response
from .result import Err, bind, map_left
from .state import OrderStore


log = logging.getLogger("etag_server.routes")


def _store(request: Request) -> OrderStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Order store is not configured on app.state.store.")
    return store


async def get_order(request: Request) -> Response:
    store = _store(request)
    return await get_resource(request, try_parse_order_id, store.find, serialize_order)


async def delete_order(request: Request) -> Response:
    store = _store(request)
    return await delete_resource(request, try_parse_order_id, store.try_delete)


def _as_list(error: Any) -> list[str]:
    return error if isinstance(error, list) else [error]


async def post_order(request: Request) -> Response:
    store = _store(request)

    body = await request.body()
    result = map_left(bind(try_parse_object(body), try_deserialize_order), _as_list)
    if isinstance(result, Err):
        error = ApiErrorCode.INVALID_JSON_BODY.as_error(
            "Request body is not a valid order.",
            [ApiErrorCode.INVALID_JSON_BODY.as_error(message) for message in result.error],
        ).with_status(HTTPStatus.BAD_REQUEST)
        log.info("POST %s rejected: %s", request.url.path, "; ".join(result.error))
        return error_response(error)

    order = result.value
    etag = store.try_add(order)
    if etag is None:
        return error_response(
            ApiErrorCode.RESOURCE_ALREADY_EXISTS.as_error(f"Order '{order.id}' already exists.").with_status(
                HTTPStatus.CONFLICT
            )
        )

    body_out = set_property(serialize_order(order), "eTag", etag.value)
    return created(body_out, f"{request.url.path.rstrip('/')}/{order.id}")


# Each item: {'path': str, 'methods': [str], 'handler': endpoint}
ROUTES: list[dict[str, Any]] = [
    {
        "path": "/v1/orders/{orderId}",
        "methods": ["GET"],
        "handler": get_order,
    },
    {
        "path": "/v1/orders/{orderId}",
        "methods": ["DELETE"],
        "handler": delete_order,
    },
    {
        "path": "/v1/orders",
        "methods": ["POST"],
        "handler": post_order,
    },
]


def register_routes(app: FastAPI) -> None:
    for item in ROUTES:
        app.add_route(item["path"], item["handler"], methods=item["methods"])
