"""The S21 protocol loop."""

import logging
from typing import Protocol

from .commands import Response, dispatch
from .device import DeviceState
from .protocol import control, parse_frame
from .reader import FrameReader

_LOGGER = logging.getLogger(__name__)


class Channel(Protocol):
    """Anything with blocking read() and write(), e.g. SerialBus."""

    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> int: ...


class S21Simulator:
    """Answers a controller on the other end of the channel as a Daikin unit would.

    Single threaded: one frame in, at most one reply out, then wait for the
    controller's ACK before the next frame. Set commands are the only thing
    that changes the state.
    """

    def __init__(self, channel: Channel, state: DeviceState):
        self.channel = channel
        self.state = state
        self.reader = FrameReader()

    def run(self):
        """Serve forever. Exceptions raised by the channel end the loop."""
        _LOGGER.info("Simulating model %s, protocol %d", self.state.model, self.state.protocol_version)
        while True:
            self.poll()

    def poll(self):
        """Read and process one byte. An empty read is simply retried."""
        data = self.channel.read(1)
        if data:
            self.process_byte(data[0])

    def feed(self, data: bytes):
        for byte in data:
            self.process_byte(byte)

    def process_byte(self, byte: int):
        raw = self.reader.feed(byte)
        if raw is not None:
            self.handle_frame(raw)

    def handle_frame(self, raw: bytes) -> Response | None:
        """Validate one raw frame, run it and send the reply.

        Returns None for a frame that was dropped.
        """
        frame = parse_frame(raw)
        if frame is None:
            # Silently dropped, no NAK. An FTXF20D does the same.
            _LOGGER.info("Bad checksum or framing, dropping %s", raw.hex(" ").upper())
            return None

        response = dispatch(frame, self.state)
        self.channel.write(control(response.control))
        if response.frame is not None:
            self.channel.write(response.frame)
            self.reader.expect_ack()
        return response
