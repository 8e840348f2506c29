import pytest

from octet_model import (
    MalformedBulkAssignment,
    NonNumericOctet,
    OctetModel,
    OctetSlot,
    OutOfRangeOctet,
    canonicalize,
    clamp_focus,
    get_canonical_address,
    is_valid_octet,
    parse_address,
    parse_octet,
)


@pytest.mark.parametrize("text", ["0", "7", "255", " 42 ", "007"])
def test_is_valid_octet_accepts_in_range_numbers(text):
    assert is_valid_octet(text)


@pytest.mark.parametrize("text", ["", "   ", "256", "-1", "1a", "+5", "1.5", "²"])
def test_is_valid_octet_rejects_everything_else(text):
    assert not is_valid_octet(text)


def test_parse_octet_distinguishes_error_kinds():
    with pytest.raises(OutOfRangeOctet) as out_of_range:
        parse_octet("300", slot=2)
    assert out_of_range.value.slot == 2

    with pytest.raises(NonNumericOctet):
        parse_octet("ab")


@pytest.mark.parametrize(
    "raw, expected",
    [("", ""), ("0", "0"), ("00", "0"), ("000", "0"), ("007", "7"), ("010", "10"), ("120", "120")],
)
def test_canonicalize_collapses_leading_zeros(raw, expected):
    assert canonicalize(raw) == expected


def test_canonical_address_requires_four_valid_slots():
    assert get_canonical_address(["192", "168", "001", "010"]) == "192.168.1.10"
    assert get_canonical_address(["192", "168", "", "1"]) == ""
    assert get_canonical_address(["192", "168", "256", "1"]) == ""
    assert get_canonical_address(["1", "2", "3"]) == ""


def test_parse_address_requires_exactly_four_parts():
    assert parse_address("10.0.0.1") == ["10", "0", "0", "1"]
    with pytest.raises(MalformedBulkAssignment):
        parse_address("10.0.1")
    with pytest.raises(MalformedBulkAssignment) as excinfo:
        parse_address("10.0.300.1")
    assert excinfo.value.slot == 2
    assert isinstance(excinfo.value.__cause__, OutOfRangeOctet)


def test_set_from_address_round_trips_modulo_canonicalization():
    model = OctetModel()

    assert model.set_from_address("010.000.7.255")
    assert model.snapshot() == ("010", "000", "7", "255")
    assert model.canonical_address() == "10.0.7.255"


@pytest.mark.parametrize("text", ["1.2.3", "1.2.3.4.5", "1.2.3.256", "a.b.c.d", "1..2.3", ""])
def test_set_from_address_failure_clears_every_slot(text):
    model = OctetModel()
    model.set_from_address("9.9.9.9")
    model[1].has_error = True

    assert model.set_from_address(text) is False
    assert model.snapshot() == ("", "", "", "")
    assert model.error_flags() == (False, False, False, False)
    assert model.canonical_address() == ""


def test_set_from_address_shortens_overlong_zero_padding():
    model = OctetModel()

    assert model.set_from_address("0001.2.3.4")
    assert model[0].raw_text == "1"


def test_load_snapshot_sanitizes_text():
    model = OctetModel()
    model.load_snapshot(["1a2", "2555", "", " 3"])
    assert model.snapshot() == ("12", "255", "", "3")


def test_slot_numeric_value():
    assert OctetSlot().numeric_value is None
    assert OctetSlot(raw_text="300").numeric_value == 300


def test_clamp_focus():
    assert clamp_focus(-1) == 0
    assert clamp_focus(2) == 2
    assert clamp_focus(7) == 3
