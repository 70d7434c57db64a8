"""S21 command table and dispatch.

Commands are keyed by their two command bytes. Each entry is one of four
handler kinds:

- SetHandler: changes the device state, answered with a bare ACK.
- FixedReply: a constant 4-byte payload.
- DynamicReply: a payload computed from the device state.
- RawReply: a constant body with no command echo ('MM').

Anything not in the table gets a NAK, except for the 'D' family where
the unit ACKs unknown sub-commands too.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from .const import (
    ACK,
    FAMILY_MM,
    FAMILY_SET,
    NAK,
    UNKNOWN_RN_VALUE,
    UNKNOWN_RX_VALUE,
)
from .device import DeviceState
from .encoding import (
    decode_fan,
    decode_target_temp,
    encode_f9_temp,
    encode_fan,
    encode_signed_decimal,
    encode_target_temp,
    encode_unsigned,
)
from .protocol import Frame, build_raw_reply, build_reply

_LOGGER = logging.getLogger(__name__)

ON = ord("2")
OFF = ord("0")


@dataclass(frozen=True)
class Response:
    """What to send back: ACK or NAK, then optionally a data frame."""

    control: int
    frame: bytes | None = None


@dataclass(frozen=True)
class SetHandler:
    apply: Callable[[DeviceState, bytes], None]

    def respond(self, frame: Frame, state: DeviceState) -> Response:
        try:
            self.apply(state, frame.payload)
        except (IndexError, ValueError) as err:
            _LOGGER.warning("Ignoring malformed %s %s: %s", frame.name, frame.payload.hex(" "), err)
        return Response(ACK)


@dataclass(frozen=True)
class FixedReply:
    payload: bytes

    def respond(self, frame: Frame, state: DeviceState) -> Response:
        _LOGGER.debug("-> unknown (%r) = %s", frame.name, self.payload.hex(" "))
        return Response(ACK, build_reply(frame.cmd0, frame.cmd1, self.payload))


@dataclass(frozen=True)
class DynamicReply:
    render: Callable[[DeviceState], bytes]

    def respond(self, frame: Frame, state: DeviceState) -> Response:
        return Response(ACK, build_reply(frame.cmd0, frame.cmd1, self.render(state)))


@dataclass(frozen=True)
class RawReply:
    body: bytes

    def respond(self, frame: Frame, state: DeviceState) -> Response:
        _LOGGER.debug("-> unknown (%r)", frame.name)
        return Response(ACK, build_raw_reply(self.body))


Handler = SetHandler | FixedReply | DynamicReply | RawReply


# --- Set commands ---

def _set_control(state: DeviceState, payload: bytes):
    state.set_control(
        power=payload[0] != OFF,
        mode=payload[1] - OFF,
        target_temp=decode_target_temp(payload[2]),
        fan=decode_fan(payload[3]),
    )


def _set_swing(state: DeviceState, payload: bytes):
    # payload[1] is '?' for on and '0' for off, [2] and [3] always '0'
    _LOGGER.debug("Swing spare bytes: %s", payload[1:].hex(" "))
    state.set_swing(payload[0] - OFF)


def _set_powerful(state: DeviceState, payload: bytes):
    # Eco arrives here as 'D6 0000' for both on and off, so it can't be
    # told apart from "powerful off" and is left alone.
    _LOGGER.debug("Powerful spare bytes: %s", payload[1:].hex(" "))
    state.set_powerful(payload[0] == ON)


def _set_unknown(state: DeviceState, payload: bytes):
    _LOGGER.info("Set unknown: %s", payload.hex(" "))


# --- Queries ---

def _control_status(state: DeviceState) -> bytes:
    _LOGGER.debug(
        "-> power %d mode %d temp %.1f fan %d",
        state.power, state.mode, state.target_temp, state.fan,
    )
    return bytes([
        OFF + state.power,
        OFF + state.mode,
        encode_target_temp(state.target_temp),
        encode_fan(state.fan),
    ])


def _powerful_f3(state: DeviceState) -> bytes:
    _LOGGER.debug("-> powerful ('F3') %d", state.powerful)
    # First three bytes as seen on an FTXF20D, meaning unknown
    return bytes([0x30, 0xFE, 0xFE, ON if state.powerful else OFF])


def _powerful_f6(state: DeviceState) -> bytes:
    _LOGGER.debug("-> powerful ('F6') %d", state.powerful)
    return bytes([ON if state.powerful else OFF, 0, 0, 0])


def _swing(state: DeviceState) -> bytes:
    _LOGGER.debug("-> swing %d", state.swing)
    return bytes([state.swing & 0xFF, 0, 0, 0])


def _eco(state: DeviceState) -> bytes:
    _LOGGER.debug("-> eco %d", state.eco)
    return bytes([0, ON if state.eco else OFF, 0, 0])


def _protocol_version(state: DeviceState) -> bytes:
    # An FTXF20D answers "0020", reversed like everything else. Reporting
    # 0 or 1 makes a BRP069B41 skip most of the v2 command set.
    _LOGGER.debug("-> protocol version = %d", state.protocol_version)
    return bytes([OFF, OFF + state.protocol_version, OFF, OFF])


def _temperatures_f9(state: DeviceState) -> bytes:
    home = encode_f9_temp(state.home_temp)
    outside = encode_f9_temp(state.outside_temp)
    _LOGGER.debug(
        "-> home = 0x%02X (%.1f) outside = 0x%02X (%.1f)",
        home, state.home_temp / 10, outside, state.outside_temp / 10,
    )
    # Last two bytes copied from an FTXF20D
    return bytes([home, outside, 0xFF, 0x30])


def _model(state: DeviceState) -> bytes:
    # Only asked once after the controller boots
    _LOGGER.debug("-> model = %s", state.model)
    return state.model.encode("ascii")[::-1]


def _temp_sensor(name: str, get: Callable[[DeviceState], int]) -> DynamicReply:
    def render(state: DeviceState) -> bytes:
        value = get(state)
        _LOGGER.debug("-> %s = %+d", name, value)
        return encode_signed_decimal(value)

    return DynamicReply(render)


def _int_sensor(name: str, get: Callable[[DeviceState], int]) -> DynamicReply:
    def render(state: DeviceState) -> bytes:
        value = get(state)
        _LOGGER.debug("-> %s = %03d", name, value)
        return encode_unsigned(value)

    return DynamicReply(render)


def _key(name: str) -> tuple[int, int]:
    return ord(name[0]), ord(name[1])


COMMANDS: dict[tuple[int, int], Handler] = {
    _key("D1"): SetHandler(_set_control),
    _key("D5"): SetHandler(_set_swing),
    _key("D6"): SetHandler(_set_powerful),
    _key("F1"): DynamicReply(_control_status),
    # A BRP069B41 sends F2 first and retries forever on NAK. Values from a
    # CTXM60RVMA; the FTXF20D ones (34 3A 00 80) make it fail with error 252.
    _key("F2"): FixedReply(bytes([0x3D, 0x3B, 0x00, 0x80])),
    _key("F3"): DynamicReply(_powerful_f3),
    # Also CTXM60RVMA. FTXF20D: 30 00 A0 30
    _key("F4"): FixedReply(bytes([0x30, 0x00, 0x80, 0x30])),
    _key("F5"): DynamicReply(_swing),
    _key("F6"): DynamicReply(_powerful_f6),
    _key("F7"): DynamicReply(_eco),
    _key("F8"): DynamicReply(_protocol_version),
    _key("F9"): DynamicReply(_temperatures_f9),
    _key("FC"): DynamicReply(_model),
    # Mandatory for protocol v2 controllers, values from an FTXF20D.
    # FY is also asked for but NAK is accepted.
    _key("FB"): FixedReply(bytes([0x30, 0x33, 0x36, 0x30])),
    _key("FG"): FixedReply(bytes([0x30, 0x34, 0x30, 0x30])),
    _key("FK"): FixedReply(bytes([0x71, 0x73, 0x35, 0x31])),
    _key("FM"): FixedReply(bytes([0x33, 0x42, 0x30, 0x30])),
    _key("FN"): FixedReply(bytes([0x30, 0x30, 0x30, 0x30])),
    _key("FP"): FixedReply(bytes([0x37, 0x33, 0x30, 0x30])),
    _key("FQ"): FixedReply(bytes([0x45, 0x33, 0x30, 0x30])),
    _key("FR"): FixedReply(bytes([0x30, 0x30, 0x30, 0x30])),
    _key("FS"): FixedReply(bytes([0x30, 0x30, 0x30, 0x30])),
    _key("FT"): FixedReply(bytes([0x31, 0x30, 0x30, 0x30])),
    _key("FV"): FixedReply(bytes([0x33, 0x37, 0x83, 0x30])),
    _key("RH"): _temp_sensor("home", lambda s: s.home_temp),
    _key("RI"): _temp_sensor("inlet", lambda s: s.inlet_temp),
    _key("Ra"): _temp_sensor("outside", lambda s: s.outside_temp),
    _key("RL"): _int_sensor("fan rpm", lambda s: s.fan_rpm),
    _key("Rd"): _int_sensor("compressor rpm", lambda s: s.compressor_rpm),
    # Meaning unknown, distinct values so they can be spotted downstream
    _key("RN"): _temp_sensor("unknown ('RN')", lambda s: UNKNOWN_RN_VALUE),
    _key("RX"): _temp_sensor("unknown ('RX')", lambda s: UNKNOWN_RX_VALUE),
}

# Fallbacks by first byte. 'M' has no second byte and always gets the
# same reply; the controller loops forever on NAK.
FAMILY_DEFAULTS: dict[int, Handler] = {
    FAMILY_SET: SetHandler(_set_unknown),
    FAMILY_MM: RawReply(b"MFFFF"),
}


def lookup(frame: Frame) -> Handler | None:
    handler = COMMANDS.get((frame.cmd0, frame.cmd1))
    if handler is None:
        handler = FAMILY_DEFAULTS.get(frame.cmd0)
    return handler


def dispatch(frame: Frame, state: DeviceState) -> Response:
    """Run one command against the state and return what to send back."""
    _LOGGER.debug("Got command: %r", frame)
    handler = lookup(frame)
    if handler is None:
        _LOGGER.info("Unknown command %r, sending NAK", frame.name)
        return Response(NAK)
    return handler.respond(frame, state)
