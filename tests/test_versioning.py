from __future__ import annotations

import dataclasses

import pytest

from etag_server.versioning import ETag, stable_etag


@pytest.mark.parametrize(
    "value",
    [
        "abc",
        "x",
        "  padded  ",
        '"W/quoted"',
        'W/"weak"',
        '"a", "b"',
        "v1,v2",
        "caf\u00e9",
        "\u65e5\u672c",
        "\U0001f600",
        " \u00a0x",
        "a" * 1024,
    ],
)
def test_etag_keeps_non_blank_value_verbatim(value: str) -> None:
    assert ETag(value).value == value
    assert str(ETag(value)) == value


@pytest.mark.parametrize("value", ["", " ", "\t\n", "\u00a0\u2003"])
def test_etag_rejects_empty_or_whitespace(value: str) -> None:
    with pytest.raises(ValueError):
        ETag(value)


def test_etag_rejects_none() -> None:
    with pytest.raises(ValueError):
        ETag(None)  # type: ignore[arg-type]


def test_etags_compare_by_value() -> None:
    assert ETag("abc") == ETag("abc")
    assert ETag("abc") != ETag("ABC")
    assert hash(ETag("abc")) == hash(ETag("abc"))


def test_etag_is_immutable() -> None:
    tag = ETag("abc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        tag.value = "def"  # type: ignore[misc]


def test_stable_etag_is_deterministic_per_seed() -> None:
    assert stable_etag("order|1") == stable_etag("order|1")
    assert stable_etag("order|1") != stable_etag("order|2")
    assert len(stable_etag("seed", length=8).value) == 8
