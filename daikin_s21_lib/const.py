"""Constants for the Daikin S21 serial protocol."""

from enum import IntEnum

# Control bytes
STX = 0x02
ETX = 0x03
ENQ = 0x05
ACK = 0x06
NAK = 0x15

# Longest buffer accepted before the reader gives up on an ETX
MAX_FRAME_LEN = 256

# Command families (byte 0)
FAMILY_SET = ord("D")
FAMILY_MM = ord("M")

# Target temperature byte: 18.0°C is encoded as '@'
TARGET_TEMP_BASE = 18.0
TARGET_TEMP_BIAS = 0x40

# Placeholder readings for the RN/RX sensors (tenths of a degree)
UNKNOWN_RN_VALUE = 235
UNKNOWN_RX_VALUE = 215

# Serial line: 2400 8E2
DEFAULT_BAUDRATE = 2400
SETTLE_DELAY = 0.1  # seconds between open and flush

# Defaults for the simulated unit. Taken from an FTXF20D5V1B.
DEFAULT_MODEL = "135D"
DEFAULT_PROTOCOL_VERSION = 2


class Mode(IntEnum):
    """Operating mode codes, sent as the ASCII digit '0' + code."""

    FAN = 0
    HEAT = 1
    COOL = 2
    AUTO = 3
    DRY = 7


class FanSpeed(IntEnum):
    """Fan speed codes. The wire byte is given by encoding.encode_fan()."""

    AUTO = 0
    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4
    LEVEL_5 = 5
    QUIET = 6
