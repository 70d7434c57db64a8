"""S21 frame building and parsing. Pure functions, no serial dependency."""

from dataclasses import dataclass

from .const import ACK, ENQ, ETX, NAK, STX


@dataclass(frozen=True)
class Frame:
    """A checksum-verified S21 frame: the bytes between STX and the checksum."""

    body: bytes

    @property
    def cmd0(self) -> int:
        return self.body[0]

    @property
    def cmd1(self) -> int | None:
        # 'M' is a one-byte command
        return self.body[1] if len(self.body) > 1 else None

    @property
    def payload(self) -> bytes:
        return self.body[2:]

    @property
    def name(self) -> str:
        return self.body[:2].decode("ascii", errors="replace")

    def __repr__(self) -> str:
        return f"Frame({self.name!r}, payload={self.payload.hex(' ') or '(empty)'})"


def checksum(body: bytes) -> int:
    """Additive checksum over the command bytes and payload.

    STX is not part of the sum. A result equal to ETX is sent as ENQ so
    the checksum can never be mistaken for the end of the frame.
    """
    c = sum(body) & 0xFF
    return ENQ if c == ETX else c


def build_raw_reply(body: bytes) -> bytes:
    """Wrap an arbitrary body: [STX][body][checksum][ETX]."""
    return bytes([STX]) + body + bytes([checksum(body), ETX])


def build_reply(cmd0: int, cmd1: int, payload: bytes) -> bytes:
    """Build a query reply. The unit answers 'F1' with 'G1', 'RH' with 'SH'."""
    return build_raw_reply(bytes([cmd0 + 1, cmd1]) + payload)


def build_request(command: str, payload: bytes = b"") -> bytes:
    """Build a frame the way a controller sends it, e.g. build_request("F1")."""
    return build_raw_reply(command.encode("ascii") + payload)


def parse_frame(buf: bytes) -> Frame | None:
    """Validate a raw [STX]...[checksum][ETX] buffer.

    Returns None if the framing is broken or the checksum does not match.
    """
    if len(buf) < 4 or buf[0] != STX or buf[-1] != ETX:
        return None
    body = bytes(buf[1:-2])
    if checksum(body) != buf[-2]:
        return None
    return Frame(body)


def control(byte: int) -> bytes:
    """A single-byte ACK/NAK reply."""
    if byte not in (ACK, NAK):
        raise ValueError(f"Not a control byte: 0x{byte:02X}")
    return bytes([byte])
