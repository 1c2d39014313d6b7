"""API error model and its wire encoding.

Wire shape::

    {"code": "<ErrorCodeName>", "message": "<text>", "details": [<error>, ...]}

``details`` is omitted when empty. Codes are a closed set; decoding an
unknown code name fails.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Iterable, Optional

from .json_access import (
    JsonObject,
    prefix_errors,
    try_get_optional_json_object_array_property,
    try_get_string_property,
)
from .result import Err, Ok, Result, apply, bind, sequence


class ApiErrorCode(str, Enum):
    """Stable error codes; the wire value is the variant name."""

    RESOURCE_NOT_FOUND = "ResourceNotFound"
    RESOURCE_ALREADY_EXISTS = "ResourceAlreadyExists"
    INVALID_CONDITIONAL_HEADER = "InvalidConditionalHeader"
    INVALID_JSON_BODY = "InvalidJsonBody"
    INVALID_ID = "InvalidId"
    ETAG_MISMATCH = "ETagMismatch"
    INTERNAL_SERVER_ERROR = "InternalServerError"

    @classmethod
    def try_parse(cls, value: str) -> Result:
        for member in cls:
            if member.value == value:
                return Ok(member)
        return Err(f"'{value}' is not a valid API error code.")

    def as_error(self, message: str, details: Iterable["ApiError"] = ()) -> "ApiError":
        return ApiError(code=self, message=message, details=tuple(details))


@dataclass(frozen=True, slots=True)
class ApiError:
    code: ApiErrorCode
    message: str
    details: tuple["ApiError", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.details, tuple):
            object.__setattr__(self, "details", tuple(self.details))

    def with_status(self, status_code: int) -> "ApiErrorWithStatusCode":
        return ApiErrorWithStatusCode(error=self, status_code=int(status_code))

    def to_dict(self) -> JsonObject:
        return encode_api_error(self)

    @classmethod
    def from_dict(cls, obj: JsonObject) -> "ApiError":
        return decode_api_error(obj)


@dataclass(frozen=True, slots=True)
class ApiErrorWithStatusCode:
    """An :class:`ApiError` bound to the HTTP status it is reported with.

    This is the only error shape that crosses the HTTP boundary.
    """

    error: ApiError
    status_code: int

    @property
    def code(self) -> ApiErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    def to_dict(self) -> JsonObject:
        return encode_api_error(self.error)


class ApiErrorDecodeError(ValueError):
    """Raised when a JSON object is not a valid API error.

    ``errors`` lists every invalid field, not just the first one.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Could not deserialize API error. {'; '.join(self.errors)}")


def encode_api_error(error: ApiError) -> JsonObject:
    out: JsonObject = {
        "code": error.code.value,
        "message": error.message,
    }
    if error.details:
        out["details"] = [encode_api_error(detail) for detail in error.details]
    return out


def _try_decode_details(items: Optional[list[JsonObject]]) -> Result:
    if items is None:
        return Ok(())
    decoded = [prefix_errors(try_decode_api_error(item), f"details[{index}]: ") for index, item in enumerate(items)]
    failures = [result for result in decoded if isinstance(result, Err)]
    if failures:
        return apply(*failures)
    return bind(sequence(decoded), lambda values: Ok(tuple(values)))


def try_decode_api_error(obj: JsonObject) -> Result:
    """Decode an API error, collecting every field failure into ``Err(list)``."""

    code = bind(try_get_string_property(obj, "code"), ApiErrorCode.try_parse)
    message = try_get_string_property(obj, "message")
    details = bind(try_get_optional_json_object_array_property(obj, "details"), _try_decode_details)

    return bind(
        apply(code, message, details),
        lambda values: Ok(ApiError(code=values[0], message=values[1], details=values[2])),
    )


def decode_api_error(obj: JsonObject) -> ApiError:
    result = try_decode_api_error(obj)
    if isinstance(result, Err):
        raise ApiErrorDecodeError(result.error)
    return result.value


def internal_server_error(exc: Optional[BaseException] = None, *, debug: bool = False) -> ApiErrorWithStatusCode:
    """Fallback error reported for any unhandled fault.

    The message is generic. With ``debug`` the exception type and text are
    attached as a nested detail for local troubleshooting.
    """

    details: list[ApiError] = []
    if debug and exc is not None:
        details.append(ApiErrorCode.INTERNAL_SERVER_ERROR.as_error(f"{type(exc).__name__}: {exc}"))
    return ApiErrorCode.INTERNAL_SERVER_ERROR.as_error("An error has occurred.", details).with_status(
        HTTPStatus.INTERNAL_SERVER_ERROR
    )
