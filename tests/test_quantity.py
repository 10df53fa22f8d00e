"""Tests for quantity parsing, comparison and rendering."""

from fractions import Fraction

import pytest

from memhotplug.exceptions import QuantityError
from memhotplug.fieldpath import TEMPLATE_SPEC_PATH, FieldPath
from memhotplug.quantity import Quantity, format_binary, parse_quantity


@pytest.mark.parametrize("raw,expected", [
    ("2Mi", 2 * 1024**2),
    ("1Gi", 1024**3),
    ("1.5Gi", 3 * 1024**3 // 2),
    ("512M", 512 * 10**6),
    ("1k", 1000),
    ("1e9", 10**9),
    ("1073741824", 1024**3),
    (4096, 4096),
    (" 64Ki ", 64 * 1024),
])
def test_parse_values(raw, expected):
    assert Quantity.parse(raw).value() == expected


@pytest.mark.parametrize("raw", ["", "abc", "1Xi", "-1Gi", "1 Gi", "Gi", -5, True, 1.5])
def test_parse_rejects_invalid(raw):
    with pytest.raises(QuantityError):
        Quantity.parse(raw)


def test_value_rounds_up_fractional_bytes():
    assert Quantity.parse("0.5").value() == 1
    assert Quantity.parse("1.5").amount == Fraction(3, 2)


def test_exact_comparison():
    assert Quantity.parse("1Gi") == Quantity.parse("1024Mi")
    assert Quantity.parse("1G") < Quantity.parse("1Gi")
    assert Quantity.parse("2Gi").cmp(Quantity.parse("2047Mi")) == 1
    assert Quantity.parse("1Gi").cmp(Quantity.parse("1073741824")) == 0
    assert Quantity.parse("1Mi").cmp(Quantity.parse("1M")) == 1
    # Differs only past float precision
    assert Quantity.parse("9007199254740993").cmp(Quantity.parse("9007199254740992")) == 1


@pytest.mark.parametrize("n,text", [
    (0x200000, "2Mi"),
    (128 * 1024**2, "128Mi"),
    (1536 * 1024**2, "1536Mi"),
    (3 * 1024**3, "3Gi"),
    (1000, "1000"),
    (0, "0"),
])
def test_format_binary(n, text):
    assert format_binary(n) == text
    assert str(Quantity.from_bytes(n)) == text


def test_str_keeps_parsed_text():
    assert str(Quantity.parse("512M")) == "512M"


def test_parse_quantity_passthrough():
    q = Quantity.parse("1Gi")
    assert parse_quantity(q) is q
    assert parse_quantity(None) is None
    assert parse_quantity("2Gi") == Quantity.parse("2048Mi")


def test_field_path_child_is_new_path():
    domain = TEMPLATE_SPEC_PATH.child("domain")
    assert str(domain.child("memory", "guest")) == "spec.template.spec.domain.memory.guest"
    assert str(TEMPLATE_SPEC_PATH) == "spec.template.spec"
    assert str(FieldPath.new("architecture")) == "architecture"


def test_large_quantities_stay_exact():
    big = Quantity.parse("10000000000000000000000000001Ki")
    assert big.value() == (10**28 + 1) * 1024
    assert big.cmp(Quantity.parse("10000000000000000000000000000Ki")) == 1
    assert Quantity.parse("12345678901234567890123456789.5").value() == 12345678901234567890123456790


@pytest.mark.parametrize("raw,expected", [
    ("128974848000m", 128974848),
    ("1500m", 2),
    ("1m", 1),
    ("0m", 0),
])
def test_milli_suffix_rounds_up(raw, expected):
    assert Quantity.parse(raw).value() == expected


def test_milli_suffix_is_exact():
    assert Quantity.parse("1500m").amount == Fraction(3, 2)
    assert Quantity.parse("2048Mi") == Quantity.parse("2147483648000m")


@pytest.mark.parametrize("raw", ["1e1000000", "1e-1000", "1e101"])
def test_out_of_range_exponent_rejected(raw):
    with pytest.raises(QuantityError):
        Quantity.parse(raw)


def test_exponent_within_range():
    assert Quantity.parse("1e100").value() == 10**100
    assert Quantity.parse("25e-1").value() == 3
