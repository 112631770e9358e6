"""Unit tests for URL ID parsing."""
import pytest

from lms.errors import ConvIDError
from lms.models import parse_id


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1", 1),
        ("+7", 7),
        ("-3", -3),
        ("007", 7),
        ("9223372036854775807", 2**63 - 1),
        ("-9223372036854775808", -(2**63)),
    ],
)
def test_parse_id(raw, expected):
    assert parse_id(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "abc",
        " 1",
        "1 ",
        "1\n",
        "1_000",
        "1.0",
        "\u0661",  # Arabic-Indic digit one
        "9223372036854775808",
        "-9223372036854775809",
        "99999999999999999999999",
    ],
)
def test_parse_id_rejects(raw):
    with pytest.raises(ConvIDError):
        parse_id(raw)
