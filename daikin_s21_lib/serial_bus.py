"""Serial port carrying the S21 link."""

import logging
import time

import serial
import serial.tools.list_ports

from .const import DEFAULT_BAUDRATE, SETTLE_DELAY

_LOGGER = logging.getLogger(__name__)


class SerialBus:
    """S21 line: 2400 baud, 8 data bits, even parity, 2 stop bits.

    read() blocks until a byte arrives. Errors from the port are not
    handled here; the simulator has no way to recover from them.
    """

    def __init__(self, port: str, baudrate: int = DEFAULT_BAUDRATE, dump: bool = False):
        self.port = port
        self.dump = dump
        self._ser = serial.Serial(
            port,
            baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_EVEN,
            stopbits=serial.STOPBITS_TWO,
            timeout=None,
        )
        time.sleep(SETTLE_DELAY)
        self._ser.reset_input_buffer()
        self._ser.reset_output_buffer()

    def read(self, size: int = 1) -> bytes:
        data = self._ser.read(size)
        if data and self.dump:
            _LOGGER.info("Rx: %s", data.hex(" ").upper())
        return data

    def write(self, data: bytes) -> int:
        """Write all of data or raise OSError."""
        if self.dump:
            _LOGGER.info("Tx: %s", data.hex(" ").upper())
        written = self._ser.write(data)
        if written != len(data):
            raise OSError(f"Serial write failed; {written} bytes instead of {len(data)}")
        return written

    def close(self):
        """Close serial port."""
        if self._ser and self._ser.is_open:
            self._ser.close()

    @staticmethod
    def find_port() -> str | None:
        """Find first USB serial port (cross-platform)."""
        for port in serial.tools.list_ports.comports():
            if "usb" in port.device.lower() or "usb" in (port.description or "").lower():
                return port.device
        return None

    @staticmethod
    def list_ports() -> dict[str, str]:
        """List all serial ports as {device: description}."""
        return {p.device: p.description for p in serial.tools.list_ports.comports()}
