"""Tests for S21 frame building, parsing and the checksum."""

import pytest

from daikin_s21_lib.const import ACK, ENQ, ETX, NAK, STX
from daikin_s21_lib.protocol import (
    Frame,
    build_raw_reply,
    build_reply,
    build_request,
    checksum,
    control,
    parse_frame,
)

# Home temperature reply captured from an FTXF20D: "SH", 25.0°C
CAPTURED_SH = bytes.fromhex("0253483035322B5D03")


def test_checksum_matches_captured_frame():
    """The checksum covers the command bytes and payload, not STX."""
    body = CAPTURED_SH[1:-2]
    assert checksum(body) == 0x5D


def test_checksum_is_byte_sum_mod_256():
    body = bytes([0x80, 0x90, 0x10])
    assert checksum(body) == (0x80 + 0x90 + 0x10) & 0xFF


def test_checksum_never_equals_etx():
    """A sum of 0x03 is sent as ENQ so it can't terminate the frame early."""
    assert checksum(bytes([0xFF, 0x04])) == ENQ
    assert checksum(bytes([0x01, 0x02])) == ENQ


def test_build_reply_echoes_command():
    """A query reply bumps the first command byte: RH is answered with SH."""
    assert build_reply(ord("R"), ord("H"), b"052+") == CAPTURED_SH


def test_build_raw_reply_framing():
    frame = build_raw_reply(b"MFFFF")
    assert frame == bytes([STX]) + b"MFFFF" + bytes([0x65, ETX])


def test_build_request():
    frame = build_request("F1")
    assert frame == bytes([STX, ord("F"), ord("1"), 0x77, ETX])


def test_parse_frame_valid():
    frame = parse_frame(build_request("D1", b"12NA"))
    assert frame is not None
    assert frame.cmd0 == ord("D")
    assert frame.cmd1 == ord("1")
    assert frame.payload == b"12NA"
    assert frame.name == "D1"


def test_parse_frame_single_byte_command():
    """'M' is sent without a second command byte."""
    frame = parse_frame(build_request("M"))
    assert frame is not None
    assert frame.cmd0 == ord("M")
    assert frame.cmd1 is None
    assert frame.payload == b""


def test_parse_frame_bad_checksum():
    raw = bytearray(build_request("F1"))
    raw[-2] ^= 0x01
    assert parse_frame(bytes(raw)) is None


def test_parse_frame_too_short():
    assert parse_frame(bytes([STX, ETX])) is None
    assert parse_frame(bytes([STX, 0x00, ETX])) is None


def test_parse_frame_missing_markers():
    raw = build_request("F1")
    assert parse_frame(raw[1:]) is None
    assert parse_frame(raw[:-1]) is None


def test_control_bytes():
    assert control(ACK) == b"\x06"
    assert control(NAK) == b"\x15"
    with pytest.raises(ValueError):
        control(STX)


def test_frame_repr():
    r = repr(Frame(b"F1"))
    assert "'F1'" in r
    assert "(empty)" in r
