"""Shared fixtures: a fresh store/app per test and a raw request builder."""

from __future__ import annotations

import os
from typing import Iterable, Optional
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

# Keep exception details out of 500 bodies unless a test opts in.
os.environ.setdefault("ETAG_DEBUG", "0")

from etag_server.config import Settings  # noqa: E402
from etag_server.orders import Order, OrderId  # noqa: E402
from etag_server.server import create_app  # noqa: E402
from etag_server.state import OrderStore  # noqa: E402


def _make_request(
    method: str,
    path: str,
    headers: Optional[Iterable[tuple[str, str]]] = None,
) -> Request:
    """Build a Starlette request without a server; repeated headers are kept apart."""

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or [])],
    }
    return Request(scope)


@pytest.fixture
def make_request():
    return _make_request


@pytest.fixture
def store() -> OrderStore:
    return OrderStore()


@pytest.fixture
def order() -> Order:
    return Order(id=OrderId(uuid4()))


@pytest.fixture
def app(store: OrderStore):
    return create_app(store=store, settings=Settings())


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
