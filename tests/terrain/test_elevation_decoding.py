"""Tests for decode_elevation and decode_unsigned_elevation."""

from __future__ import annotations

import struct

import numpy as np
import pytest

from domain.terrain.services import decode_elevation, decode_unsigned_elevation


def test_positive_sample():
    assert decode_elevation(struct.pack("<h", 10849)) == 1084.9


def test_negative_sample():
    """-7 is stored as 0xFFF9 and decodes to -0.7."""
    raw = (65529).to_bytes(2, "little")

    assert decode_elevation(raw) == -0.7


def test_zero_sample():
    assert decode_elevation(b"\x00\x00") == 0.0


def test_byte_order_is_little_endian():
    """0x0A 0x00 is 10 little-endian, 2560 big-endian."""
    assert decode_elevation(b"\x0a\x00") == 1.0


@pytest.mark.parametrize("raw", [b"", b"\x01", b"\x01\x02\x03"])
def test_wrong_width_raises(raw):
    with pytest.raises(ValueError, match="2 bytes"):
        decode_elevation(raw)


def test_unsigned_correction_example():
    assert decode_unsigned_elevation(65529) == -0.7
    assert decode_unsigned_elevation(32767) == 3276.7
    assert decode_unsigned_elevation(32768) == -3276.8


def test_signed_and_unsigned_decoding_agree_for_all_values():
    """Every stored int16 decodes identically via both paths, one decimal place."""
    stored = np.arange(-32768, 32768, dtype="<i2")
    raw_bytes = stored.tobytes()
    unsigned = stored.view("<u2")

    for i in range(0, len(stored), 97):
        raw = raw_bytes[i * 2 : i * 2 + 2]
        expected = int(stored[i]) / 10
        assert decode_elevation(raw) == expected
        assert decode_unsigned_elevation(int(unsigned[i])) == expected


def test_whole_metre_values_round_trip():
    """Whole-metre elevations survive storage as elevation x 10."""
    for metres in range(-3276, 3277):
        raw = struct.pack("<h", metres * 10)
        assert decode_elevation(raw) == metres
