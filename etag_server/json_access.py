"""Validating accessors over JSON documents.

Documents are the plain shapes produced by :mod:`json`: ``dict`` objects with
string keys, ``list`` arrays, primitive values and ``None``. Request bodies are
untrusted, so every read goes through a ``try_get_*`` accessor that returns
``Ok(value)`` or ``Err(message)`` naming the property, e.g.::

    Property 'id' is missing.
    Property 'code' is not a JSON object.

The ``get_*`` counterparts raise :class:`JsonAccessError` instead, for places
where a bad document is an internal fault. ``try_get_optional_*`` treat a
missing or null property as ``None`` but still reject a present value of the
wrong type.

Documents are values: ``add_property``/``set_property`` return a deep copy and
never touch the receiver.
"""

from __future__ import annotations

import json
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional
from uuid import UUID

from fastapi.encoders import jsonable_encoder

from .result import Err, Ok, Result, bind, if_left_raise, map_left


JsonObject = dict[str, Any]
JsonArray = list[Any]

# Order matters: bool is an int subclass and datetime is a date subclass.
PRIMITIVE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    Decimal,
    str,
    UUID,
    datetime,
    date,
    time,
)


class JsonAccessError(ValueError):
    """A document did not have the shape a caller required."""


class UnsupportedJsonValueError(TypeError):
    """A node is none of the recognised JSON shapes."""


def _raise(result: Result) -> Any:
    return if_left_raise(result, JsonAccessError)


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def is_json_value(node: Any) -> bool:
    return isinstance(node, PRIMITIVE_TYPES)


def clone(node: Any) -> Any:
    """Deep-copy a JSON node.

    Objects and arrays are rebuilt recursively. Primitives are matched against
    :data:`PRIMITIVE_TYPES` in order; anything else raises
    :class:`UnsupportedJsonValueError`.
    """

    if node is None:
        return None
    if isinstance(node, dict):
        return {str(key): clone(value) for key, value in node.items()}
    if isinstance(node, (list, tuple)):
        return [clone(item) for item in node]
    for primitive in PRIMITIVE_TYPES:
        if isinstance(node, primitive):
            return node
    raise UnsupportedJsonValueError(f"Cannot clone JSON node of type {type(node).__name__}.")


def to_json_array(nodes: Iterable[Any]) -> JsonArray:
    return [clone(node) for node in nodes]


# ---------------------------------------------------------------------------
# Generic property lookup
# ---------------------------------------------------------------------------


def try_get_property(obj: JsonObject, name: str) -> Result:
    if name not in obj:
        return Err(f"Property '{name}' is missing.")
    node = obj[name]
    if node is None:
        return Err(f"Property '{name}' is null.")
    return Ok(node)


def get_property(obj: JsonObject, name: str) -> Any:
    return _raise(try_get_property(obj, name))


def get_optional_property(obj: JsonObject, name: str) -> Optional[Any]:
    """Return the property value, or ``None`` when missing or null."""

    return obj.get(name)


def _optional(obj: JsonObject, name: str, check: Callable[[Any, str], Result]) -> Result:
    node = get_optional_property(obj, name)
    if node is None:
        return Ok(None)
    return check(node, name)


# ---------------------------------------------------------------------------
# Structural accessors
# ---------------------------------------------------------------------------


def _as_object(node: Any, name: str) -> Result:
    if isinstance(node, dict):
        return Ok(node)
    return Err(f"Property '{name}' is not a JSON object.")


def _as_array(node: Any, name: str) -> Result:
    if isinstance(node, list):
        return Ok(node)
    return Err(f"Property '{name}' is not a JSON array.")


def _as_object_array(node: Any, name: str) -> Result:
    def _objects(items: JsonArray) -> Result:
        if all(isinstance(item, dict) for item in items):
            return Ok(list(items))
        return Err(f"Property '{name}' is not an array of JSON objects.")

    return bind(_as_array(node, name), _objects)


def _as_value(node: Any, name: str) -> Result:
    if is_json_value(node):
        return Ok(node)
    return Err(f"Property '{name}' is not a JSON value.")


def try_get_json_object_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_object(node, name))


def try_get_optional_json_object_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_object)


def get_json_object_property(obj: JsonObject, name: str) -> JsonObject:
    return _raise(try_get_json_object_property(obj, name))


def get_optional_json_object_property(obj: JsonObject, name: str) -> Optional[JsonObject]:
    return _raise(try_get_optional_json_object_property(obj, name))


def try_get_json_array_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_array(node, name))


def try_get_optional_json_array_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_array)


def get_json_array_property(obj: JsonObject, name: str) -> JsonArray:
    return _raise(try_get_json_array_property(obj, name))


def get_optional_json_array_property(obj: JsonObject, name: str) -> Optional[JsonArray]:
    return _raise(try_get_optional_json_array_property(obj, name))


def try_get_json_object_array_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_object_array(node, name))


def try_get_optional_json_object_array_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_object_array)


def get_json_object_array_property(obj: JsonObject, name: str) -> list[JsonObject]:
    return _raise(try_get_json_object_array_property(obj, name))


def get_optional_json_object_array_property(obj: JsonObject, name: str) -> Optional[list[JsonObject]]:
    return _raise(try_get_optional_json_object_array_property(obj, name))


def try_get_json_value_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_value(node, name))


def get_json_value_property(obj: JsonObject, name: str) -> Any:
    return _raise(try_get_json_value_property(obj, name))


# ---------------------------------------------------------------------------
# Typed value accessors
# ---------------------------------------------------------------------------


def _to_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _to_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    return float(value)


def _to_uuid(value: Any) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            return None
    return None


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _converter(type_name: str, convert: Callable[[Any], Any]) -> Callable[[Any, str], Result]:
    def check(node: Any, name: str) -> Result:
        def _convert(value: Any) -> Result:
            converted = convert(value)
            if converted is None:
                return Err(f"Property '{name}' cannot be converted to {type_name}.")
            return Ok(converted)

        return bind(_as_value(node, name), _convert)

    return check


_as_string = _converter("string", _to_string)
_as_bool = _converter("bool", _to_bool)
_as_int = _converter("int", _to_int)
_as_float = _converter("float", _to_float)
_as_uuid = _converter("UUID", _to_uuid)
_as_datetime = _converter("datetime", _to_datetime)


def try_get_string_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_string(node, name))


def try_get_optional_string_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_string)


def get_string_property(obj: JsonObject, name: str) -> str:
    return _raise(try_get_string_property(obj, name))


def try_get_bool_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_bool(node, name))


def try_get_optional_bool_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_bool)


def get_bool_property(obj: JsonObject, name: str) -> bool:
    return _raise(try_get_bool_property(obj, name))


def try_get_int_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_int(node, name))


def try_get_optional_int_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_int)


def get_int_property(obj: JsonObject, name: str) -> int:
    return _raise(try_get_int_property(obj, name))


def try_get_float_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_float(node, name))


def try_get_optional_float_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_float)


def get_float_property(obj: JsonObject, name: str) -> float:
    return _raise(try_get_float_property(obj, name))


def try_get_uuid_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_uuid(node, name))


def try_get_optional_uuid_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_uuid)


def get_uuid_property(obj: JsonObject, name: str) -> UUID:
    return _raise(try_get_uuid_property(obj, name))


def try_get_datetime_property(obj: JsonObject, name: str) -> Result:
    return bind(try_get_property(obj, name), lambda node: _as_datetime(node, name))


def try_get_optional_datetime_property(obj: JsonObject, name: str) -> Result:
    return _optional(obj, name, _as_datetime)


def get_datetime_property(obj: JsonObject, name: str) -> datetime:
    return _raise(try_get_datetime_property(obj, name))


# ---------------------------------------------------------------------------
# Clone-on-write mutation
# ---------------------------------------------------------------------------


def add_property(obj: JsonObject, name: str, value: Any) -> JsonObject:
    """Return a copy of ``obj`` with a new property; the key must be absent."""

    if name in obj:
        raise JsonAccessError(f"Property '{name}' already exists.")
    cloned = clone(obj)
    cloned[name] = clone(value)
    return cloned


def add_optional_property(obj: JsonObject, name: str, value: Optional[Any]) -> JsonObject:
    if value is None:
        return clone(obj)
    return add_property(obj, name, value)


def set_property(obj: JsonObject, name: str, value: Any) -> JsonObject:
    """Return a copy of ``obj`` with ``name`` added or overwritten."""

    cloned = clone(obj)
    cloned[name] = clone(value)
    return cloned


# ---------------------------------------------------------------------------
# Bytes
# ---------------------------------------------------------------------------


def try_parse_object(data: bytes | str | None) -> Result:
    if data is None:
        return Err("Body cannot be null.")
    try:
        parsed = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return Err(str(exc))
    except RecursionError:
        return Err("Body is nested too deeply.")
    if not isinstance(parsed, dict):
        return Err("Cannot deserialize body to JSON object.")
    return Ok(parsed)


def parse_object(data: bytes | str | None) -> JsonObject:
    return _raise(try_parse_object(data))


def dump_object(obj: JsonObject) -> bytes:
    """Encode an object; UUIDs and datetimes are rendered the way FastAPI does."""

    return json.dumps(jsonable_encoder(obj), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def prefix_errors(result: Result, prefix: str) -> Result:
    """Prefix every error message of a failed result, e.g. with a parent path."""

    def _prefix(error: Any) -> Any:
        if isinstance(error, list):
            return [f"{prefix}{message}" for message in error]
        return f"{prefix}{error}"

    return map_left(result, _prefix)
