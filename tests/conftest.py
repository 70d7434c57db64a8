"""Shared fixtures: an in-memory channel standing in for the serial port."""

from __future__ import annotations

import pytest

from daikin_s21_lib.device import DeviceState
from daikin_s21_lib.simulator import S21Simulator


class FakeChannel:
    """Serves scripted input one byte at a time and records every write.

    When the input runs out read() raises OSError, the same way a
    disconnected port would, so run() terminates.
    """

    def __init__(self, data: bytes = b""):
        self.input = bytearray(data)
        self.writes: list[bytes] = []

    @property
    def output(self) -> bytes:
        return b"".join(self.writes)

    def read(self, size: int = 1) -> bytes:
        if not self.input:
            raise OSError("end of scripted input")
        chunk = bytes(self.input[:size])
        del self.input[:size]
        return chunk

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)


@pytest.fixture
def state() -> DeviceState:
    return DeviceState()


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def sim(channel: FakeChannel, state: DeviceState) -> S21Simulator:
    return S21Simulator(channel, state)
