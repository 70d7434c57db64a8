"""Value encoders for S21 payloads.

The unit sends decimal numbers as ASCII text spelled backwards: 24.5°C
goes out as "+245" with the characters in reverse order, "542+". Sensor
temperatures carry one implied decimal place, so they are handled here
as integers in tenths of a degree.
"""

import math

from .const import TARGET_TEMP_BASE, TARGET_TEMP_BIAS, FanSpeed

_FAN_TO_BYTE = {
    FanSpeed.AUTO: ord("A"),
    FanSpeed.QUIET: ord("B"),
    **{FanSpeed(level): ord("2") + level for level in range(1, 6)},
}
_BYTE_TO_FAN = {v: k for k, v in _FAN_TO_BYTE.items()}


def encode_signed_decimal(value: int) -> bytes:
    """Encode tenths of a degree as 4 reversed characters: 245 -> b"542+"."""
    if not -999 <= value <= 999:
        raise ValueError(f"Temperature must be -99.9..99.9, got {value / 10:.1f}")
    return format(value, "+04d").encode("ascii")[::-1]


def decode_signed_decimal(data: bytes) -> int:
    """Inverse of encode_signed_decimal(). Returns tenths of a degree."""
    return int(bytes(data[::-1]).decode("ascii"))


def encode_unsigned(value: int) -> bytes:
    """Encode a 3 digit integer, reversed: 52 -> b"250".

    Only 3 bytes, where every other query reply carries 4.
    """
    if not 0 <= value <= 999:
        raise ValueError(f"Value must be 0-999, got {value}")
    return format(value, "03d").encode("ascii")[::-1]


def encode_target_temp(temp: float) -> int:
    """Encode a setpoint, rounded to the nearest half degree."""
    v = math.floor(temp * 2 + 0.5) - int(TARGET_TEMP_BASE * 2) + TARGET_TEMP_BIAS
    if not 0 <= v <= 0xFF:
        raise ValueError(
            f"Target temperature must be "
            f"{decode_target_temp(0x00)}-{decode_target_temp(0xFF)}, got {temp}"
        )
    return v


def decode_target_temp(v: int) -> float:
    """18.0 + 0.5 * (v - '@')"""
    return TARGET_TEMP_BASE + 0.5 * (v - TARGET_TEMP_BIAS)


def encode_fan(speed: int) -> int:
    try:
        return _FAN_TO_BYTE[speed]
    except KeyError:
        raise ValueError(f"Unknown fan speed {speed}") from None


def decode_fan(v: int) -> FanSpeed:
    try:
        return _BYTE_TO_FAN[v]
    except KeyError:
        raise ValueError(f"Unknown fan byte 0x{v:02X}") from None


def encode_f9_temp(value: int) -> int:
    """Encode tenths of a degree as the single F9 byte: value / 5 + 0x80.

    The division truncates toward zero.
    """
    v = int(value / 5) + 0x80
    if not 0 <= v <= 0xFF:
        raise ValueError(f"Temperature {value / 10:.1f} does not fit the F9 reply")
    return v
