"""Daikin S21 serial protocol simulator library."""

from .commands import Response, dispatch
from .const import ACK, ETX, NAK, STX, FanSpeed, Mode
from .device import DeviceState
from .protocol import Frame, build_reply, build_request, checksum, parse_frame
from .reader import FrameReader, ReaderState
from .serial_bus import SerialBus
from .simulator import S21Simulator

__all__ = [
    "DeviceState",
    "S21Simulator",
    "SerialBus",
    "FrameReader",
    "ReaderState",
    "Frame",
    "Response",
    "dispatch",
    "checksum",
    "build_reply",
    "build_request",
    "parse_frame",
    "Mode",
    "FanSpeed",
    "STX",
    "ETX",
    "ACK",
    "NAK",
]
