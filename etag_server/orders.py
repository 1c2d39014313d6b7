"""Order resource: identity, model and JSON mapping.

Orders are deliberately thin; they exist so the generic handlers have a
concrete resource to serve under ``/v1/orders``.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .json_access import JsonObject, try_get_uuid_property
from .result import Err, Ok, Result, apply, map_right


@dataclass(frozen=True, slots=True)
class OrderId:
    value: UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Order:
    id: OrderId


def try_parse_order_id(raw: str) -> Result:
    try:
        return Ok(OrderId(UUID(raw)))
    except ValueError:
        return Err("Order ID must be a GUID.")


def serialize_order(order: Order) -> JsonObject:
    return {"id": str(order.id)}


def try_deserialize_order(obj: JsonObject) -> Result:
    """Build an :class:`Order` from a request body; ``Err`` lists every problem."""

    return map_right(
        apply(try_get_uuid_property(obj, "id")),
        lambda values: Order(id=OrderId(values[0])),
    )
