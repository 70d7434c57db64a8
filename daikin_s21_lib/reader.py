"""Byte-at-a-time S21 frame acquisition."""

import logging
from enum import Enum

from .const import ACK, ETX, MAX_FRAME_LEN, STX

_LOGGER = logging.getLogger(__name__)


class ReaderState(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    AWAITING_ACK = "awaiting_ack"


class FrameReader:
    """Assembles candidate frames from a byte stream.

    Feed every received byte to feed(). It returns the raw buffer
    ([STX] ... [ETX]) once a frame is complete, otherwise None. The
    checksum is not checked here, see protocol.parse_frame().

    After sending a data reply call expect_ack(). The next byte should be
    the controller's ACK. Some controllers never send it and start the
    next frame instead, so an STX in its place is taken as the first
    byte of that frame.
    """

    def __init__(self, max_len: int = MAX_FRAME_LEN):
        self.max_len = max_len
        self.state = ReaderState.IDLE
        self._buf = bytearray()
        self._handlers = {
            ReaderState.IDLE: self._on_idle,
            ReaderState.ACCUMULATING: self._on_accumulating,
            ReaderState.AWAITING_ACK: self._on_awaiting_ack,
        }

    @property
    def buffer(self) -> bytes:
        return bytes(self._buf)

    def feed(self, byte: int) -> bytes | None:
        return self._handlers[self.state](byte)

    def expect_ack(self):
        self._buf.clear()
        self.state = ReaderState.AWAITING_ACK

    def reset(self):
        self._buf.clear()
        self.state = ReaderState.IDLE

    def _start_frame(self):
        self._buf[:] = bytes([STX])
        self.state = ReaderState.ACCUMULATING

    def _on_idle(self, byte: int) -> None:
        if byte == STX:
            self._start_frame()
        else:
            _LOGGER.info("Garbage byte received: 0x%02X", byte)

    def _on_accumulating(self, byte: int) -> bytes | None:
        self._buf.append(byte)
        if byte == ETX:
            frame = bytes(self._buf)
            self.reset()
            return frame
        if len(self._buf) >= self.max_len:
            _LOGGER.warning(
                "No ETX within %d bytes, dropping buffer", len(self._buf)
            )
            self.reset()
        return None

    def _on_awaiting_ack(self, byte: int) -> None:
        if byte == ACK:
            self.reset()
        elif byte == STX:
            _LOGGER.debug("The controller didn't ACK our response, next frame started")
            self._start_frame()
        else:
            _LOGGER.warning("Protocol error: expected ACK, got 0x%02X", byte)
            self.reset()
