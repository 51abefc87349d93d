import math

import pytest
from pydantic import ValidationError

from matomo_sdk.core.options import TrackOptions, encode_query, merge_base, stringify, to_params


def test_string_is_url_shorthand() -> None:
    assert to_params("http://mywebsite.com/") == {"url": "http://mywebsite.com/"}


def test_mapping_is_copied() -> None:
    options = {"url": "http://mywebsite.com/", "idsite": 7}

    params = to_params(options)
    params["idsite"] = 1

    assert options == {"url": "http://mywebsite.com/", "idsite": 7}


def test_track_options_dump_uses_wire_aliases() -> None:
    options = TrackOptions(url="http://mywebsite.com/", visitor_id="0123456789abcdef", ecommerce_ts=1700000000)

    params = to_params(options)

    assert params == {"url": "http://mywebsite.com/", "_id": "0123456789abcdef", "_ects": 1700000000}


def test_track_options_accepts_wire_names() -> None:
    options = TrackOptions.model_validate({"_id": "0123456789abcdef", "_cvar": "{}"})

    assert options.visitor_id == "0123456789abcdef"
    assert options.visit_cvar == "{}"


def test_track_options_passes_unknown_parameters_through() -> None:
    options = TrackOptions(url="http://mywebsite.com/", dimension1="premium")  # type: ignore[call-arg]

    assert to_params(options) == {"url": "http://mywebsite.com/", "dimension1": "premium"}


def test_track_options_rejects_invalid_media_type() -> None:
    with pytest.raises(ValidationError):
        TrackOptions(ma_mt="image")  # type: ignore[arg-type]


def test_merge_base_overwrites_in_place_and_appends() -> None:
    merged = merge_base({"idsite": 99, "url": "u", "rec": 0}, 1)

    assert list(merged.items()) == [("idsite", 1), ("url", "u"), ("rec", 1)]


def test_merge_base_appends_after_caller_keys() -> None:
    merged = merge_base({"url": "u"}, 1)

    assert list(merged) == ["url", "idsite", "rec"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("text", "text"),
        (1, "1"),
        (2.5, "2.5"),
        (3.0, "3"),
        (math.nan, "NaN"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (True, "1"),
        (False, "0"),
    ],
)
def test_stringify(value: str | int | float | bool, expected: str) -> None:
    assert stringify(value) == expected


def test_encode_query_percent_encodes_and_skips_none() -> None:
    query = encode_query({"url": "http://mywebsite.com/", "action_name": None, "e_n": "a b", "idsite": 1, "rec": 1})

    assert query == "url=http%3A%2F%2Fmywebsite.com%2F&e_n=a+b&idsite=1&rec=1"


def test_encode_query_keeps_asterisk_and_escapes_tilde() -> None:
    query = encode_query({"e_n": "a*b~c"})

    assert query == "e_n=a*b%7Ec"
