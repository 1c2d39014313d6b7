from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from etag_server.config import Settings
from etag_server.handlers import DeleteError
from etag_server.orders import Order, OrderId, serialize_order, try_deserialize_order, try_parse_order_id
from etag_server.result import Err, Ok
from etag_server.server import create_app
from etag_server.state import OrderStore
from etag_server.versioning import ETag


def test_get_existing_order_returns_body_with_etag(client, store, order) -> None:
    store.put(order, etag=ETag("abc"))

    response = client.get(f"/v1/orders/{order.id}")

    assert response.status_code == 200
    assert response.json() == {"id": str(order.id), "eTag": "abc"}


def test_get_unknown_order_is_404(client) -> None:
    response = client.get(f"/v1/orders/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["code"] == "ResourceNotFound"


def test_get_with_non_guid_id_is_400(client) -> None:
    response = client.get("/v1/orders/not-a-guid")

    assert response.status_code == 400
    assert response.json() == {"code": "InvalidId", "message": "Order ID must be a GUID."}


def test_delete_with_matching_etag_removes_the_order(client, store, order) -> None:
    store.put(order, etag=ETag("abc"))

    response = client.delete(f"/v1/orders/{order.id}", headers={"If-Match": "abc"})

    assert response.status_code == 204
    assert response.content == b""
    assert store.find(order.id) is None
    assert client.get(f"/v1/orders/{order.id}").status_code == 404


def test_delete_with_wrong_etag_is_412_and_keeps_the_order(client, store, order) -> None:
    store.put(order, etag=ETag("abc"))

    response = client.delete(f"/v1/orders/{order.id}", headers={"If-Match": "wrong"})

    assert response.status_code == 412
    assert response.json()["code"] == "ETagMismatch"
    assert store.find(order.id) == (order, ETag("abc"))


def test_delete_without_if_match_is_428(client, store, order) -> None:
    store.put(order, etag=ETag("abc"))

    response = client.delete(f"/v1/orders/{order.id}")

    assert response.status_code == 428
    assert response.json() == {
        "code": "InvalidConditionalHeader",
        "message": "'If-Match' header must be specified.",
    }
    assert store.find(order.id) is not None


def test_delete_with_repeated_if_match_is_400(client, store, order) -> None:
    store.put(order, etag=ETag("abc"))

    response = client.delete(
        f"/v1/orders/{order.id}",
        headers=[("If-Match", "abc"), ("If-Match", "abc")],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Must specify exactly one 'If-Match' header."


def test_delete_of_unknown_order_succeeds(client) -> None:
    response = client.delete(f"/v1/orders/{uuid4()}", headers={"If-Match": "abc"})
    assert response.status_code == 204


def test_create_then_read_then_delete(client) -> None:
    order_id = str(uuid4())

    created = client.post("/v1/orders", json={"id": order_id})
    assert created.status_code == 201
    assert created.headers["location"] == f"/v1/orders/{order_id}"
    etag = created.json()["eTag"]

    fetched = client.get(f"/v1/orders/{order_id}")
    assert fetched.json() == {"id": order_id, "eTag": etag}

    assert client.delete(f"/v1/orders/{order_id}", headers={"If-Match": etag}).status_code == 204


def test_create_duplicate_is_409(client, store, order) -> None:
    store.put(order)

    response = client.post("/v1/orders", json={"id": str(order.id)})

    assert response.status_code == 409
    assert response.json()["code"] == "ResourceAlreadyExists"


@pytest.mark.parametrize(
    ("body", "detail"),
    [
        (b"{", None),
        (b"[]", "Cannot deserialize body to JSON object."),
        (b"{}", "Property 'id' is missing."),
        (b'{"id": "x"}', "Property 'id' cannot be converted to UUID."),
    ],
)
def test_create_with_bad_body_is_400_with_details(client, body: bytes, detail) -> None:
    response = client.post("/v1/orders", content=body, headers={"content-type": "application/json"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["code"] == "InvalidJsonBody"
    assert len(payload["details"]) == 1
    if detail is not None:
        assert payload["details"][0] == {"code": "InvalidJsonBody", "message": detail}


def test_new_writes_mint_new_etags(store, order) -> None:
    first = store.put(order)
    second = store.put(order)

    assert first != second
    assert store.find(order.id) == (order, second)
    assert store.try_delete(order.id, first) == Err(DeleteError.ETAG_MISMATCH)
    assert store.try_delete(order.id, second) == Ok(None)


def test_unhandled_fault_is_mapped_to_500(order) -> None:
    class _BrokenStore(OrderStore):
        def find(self, order_id):
            raise RuntimeError("disk on fire")

    client = TestClient(create_app(store=_BrokenStore(), settings=Settings()))

    response = client.get(f"/v1/orders/{order.id}")

    assert response.status_code == 500
    assert response.json() == {"code": "InternalServerError", "message": "An error has occurred."}


def test_unhandled_fault_includes_detail_in_debug_mode(order) -> None:
    class _BrokenStore(OrderStore):
        def find(self, order_id):
            raise RuntimeError("disk on fire")

    client = TestClient(create_app(store=_BrokenStore(), settings=Settings(debug=True)))

    response = client.get(f"/v1/orders/{order.id}")

    assert response.status_code == 500
    assert response.json()["details"] == [{"code": "InternalServerError", "message": "RuntimeError: disk on fire"}]


def test_healthz(client) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_order_id_parsing_and_serialization() -> None:
    guid = uuid4()

    assert try_parse_order_id(str(guid)) == Ok(OrderId(guid))
    assert try_parse_order_id(guid.hex) == Ok(OrderId(guid))
    assert try_parse_order_id("abc") == Err("Order ID must be a GUID.")
    assert serialize_order(Order(id=OrderId(guid))) == {"id": str(guid)}
    assert try_deserialize_order(serialize_order(Order(id=OrderId(guid)))) == Ok(Order(id=OrderId(guid)))


def test_create_with_deeply_nested_body_is_400(client) -> None:
    body = b'{"id":' + b"[" * 100_000 + b"]" * 100_000 + b"}"

    response = client.post("/v1/orders", content=body, headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json()["details"] == [{"code": "InvalidJsonBody", "message": "Body is nested too deeply."}]
