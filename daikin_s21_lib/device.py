"""Simulated Daikin unit state."""

import logging
from dataclasses import asdict, dataclass

from .const import DEFAULT_MODEL, DEFAULT_PROTOCOL_VERSION, FanSpeed, Mode
from .encoding import (
    encode_f9_temp,
    encode_fan,
    encode_signed_decimal,
    encode_target_temp,
    encode_unsigned,
)

_LOGGER = logging.getLogger(__name__)


@dataclass
class DeviceState:
    """Everything the simulated A/C reports.

    Defaults are chosen to be distinct from each other so a controller's
    readout can be matched back to the field it came from. Temperatures
    are in tenths of a degree, except the setpoint.
    """

    power: bool = False
    mode: int = Mode.AUTO
    target_temp: float = 22.5
    fan: int = FanSpeed.LEVEL_3
    swing: int = 0
    powerful: bool = False
    eco: bool = False
    home_temp: int = 245
    outside_temp: int = 205
    inlet_temp: int = 185
    fan_rpm: int = 52  # divided by 10
    compressor_rpm: int = 42
    protocol_version: int = DEFAULT_PROTOCOL_VERSION
    model: str = DEFAULT_MODEL

    def validate(self) -> None:
        """Raise ValueError if any field can't be put on the wire.

        Called once at startup; the protocol loop assumes a valid state.
        """
        if len(self.model) != 4 or not self.model.isascii():
            raise ValueError(
                f"Invalid model code {self.model!r}, 4 ASCII characters required"
            )
        if self.mode not in list(Mode):
            raise ValueError(f"Unknown mode {self.mode}")
        if self.target_temp * 2 != int(self.target_temp * 2):
            raise ValueError(
                f"Target temperature must be a multiple of 0.5, got {self.target_temp}"
            )
        if not 0 <= self.protocol_version <= 9:
            raise ValueError(f"Protocol version must be 0-9, got {self.protocol_version}")
        if not 0 <= self.swing <= 0xFF:
            raise ValueError(f"Swing must be 0-255, got {self.swing}")

        encode_target_temp(self.target_temp)
        encode_fan(self.fan)
        for value in (self.home_temp, self.outside_temp, self.inlet_temp):
            encode_signed_decimal(value)
        encode_f9_temp(self.home_temp)
        encode_f9_temp(self.outside_temp)
        encode_unsigned(self.fan_rpm)
        encode_unsigned(self.compressor_rpm)

    def set_control(self, power: bool, mode: int, target_temp: float, fan: int) -> None:
        """Apply a 'D1' command."""
        self.power = power
        self.mode = mode
        self.target_temp = target_temp
        self.fan = fan
        _LOGGER.info(
            "Set power %d mode %d temp %.1f fan %d", power, mode, target_temp, fan
        )

    def set_swing(self, swing: int) -> None:
        """Apply a 'D5' command."""
        self.swing = swing
        _LOGGER.info("Set swing %d", swing)

    def set_powerful(self, powerful: bool) -> None:
        """Apply a 'D6' command."""
        self.powerful = powerful
        _LOGGER.info("Set powerful %d", powerful)

    def as_dict(self) -> dict:
        return asdict(self)
