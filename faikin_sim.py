#!/usr/bin/env python3
"""Daikin air conditioner simulator for S21 protocol testing.

Usage:
    ./faikin_sim.py --port /dev/ttyUSB0            # serve with default state
    ./faikin_sim.py -p /dev/ttyUSB0 --on --mode 2 --temp 24.5 -v
    ./faikin_sim.py --list-ports

Requires: pip install pyserial
"""

import argparse
import logging
import sys

from daikin_s21_lib import DeviceState, S21Simulator, SerialBus
from daikin_s21_lib.const import DEFAULT_MODEL, DEFAULT_PROTOCOL_VERSION

_LOGGER = logging.getLogger("faikin_sim")

# Bad configuration, or the port failed
EXIT_FATAL = 255


def build_parser() -> argparse.ArgumentParser:
    defaults = DeviceState()
    parser = argparse.ArgumentParser(description="Daikin S21 air conditioner simulator")
    parser.add_argument("-p", "--port", help="serial port (auto-detected if omitted)")
    parser.add_argument("-v", "--debug", action="store_true", help="log commands and responses")
    parser.add_argument("-V", "--dump", action="store_true", help="hex dump of raw traffic")
    parser.add_argument("--list-ports", action="store_true", help="list serial ports and exit")

    state = parser.add_argument_group("simulated state")
    state.add_argument("--on", action="store_true", help="power on")
    state.add_argument("--mode", type=int, default=defaults.mode,
                       help="0=F, 1=H, 2=C, 3=A, 7=D")
    state.add_argument("--temp", type=float, default=defaults.target_temp, help="set point, °C")
    state.add_argument("--fan", type=int, default=defaults.fan,
                       help="0 = auto, 1-5 = set speed, 6 = quiet")
    state.add_argument("--swing", type=int, default=defaults.swing, help="swing direction")
    state.add_argument("--powerful", action="store_true", help="powerful mode")
    state.add_argument("--eco", action="store_true", help="eco mode")
    state.add_argument("--home", type=int, default=defaults.home_temp,
                       help="home temperature, tenths of °C")
    state.add_argument("--outside", type=int, default=defaults.outside_temp,
                       help="outside temperature, tenths of °C")
    state.add_argument("--inlet", type=int, default=defaults.inlet_temp,
                       help="inlet temperature, tenths of °C")
    state.add_argument("--fanrpm", type=int, default=defaults.fan_rpm,
                       help="fan rpm (divided by 10)")
    state.add_argument("--comprpm", type=int, default=defaults.compressor_rpm,
                       help="compressor rpm")
    state.add_argument("--protocol", type=int, default=DEFAULT_PROTOCOL_VERSION,
                       help="reported protocol version")
    state.add_argument("--model", default=DEFAULT_MODEL, help="reported model code, 4 characters")
    return parser


def state_from_args(args: argparse.Namespace) -> DeviceState:
    """Build and validate the initial state. Raises ValueError."""
    state = DeviceState(
        power=args.on,
        mode=args.mode,
        target_temp=args.temp,
        fan=args.fan,
        swing=args.swing,
        powerful=args.powerful,
        eco=args.eco,
        home_temp=args.home,
        outside_temp=args.outside,
        inlet_temp=args.inlet,
        fan_rpm=args.fanrpm,
        compressor_rpm=args.comprpm,
        protocol_version=args.protocol,
        model=args.model,
    )
    state.validate()
    return state


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s", level=logging.INFO)
    if args.debug:
        logging.getLogger("daikin_s21_lib").setLevel(logging.DEBUG)

    if args.list_ports:
        for device, description in SerialBus.list_ports().items():
            print(f"{device}\t{description}")
        return 0

    try:
        state = state_from_args(args)
    except ValueError as err:
        print(f"Error: {err}", file=sys.stderr)
        return EXIT_FATAL

    _LOGGER.info("Initial state: %s", state.as_dict())

    port = args.port or SerialBus.find_port()
    if not port:
        print("Error: no USB serial device found", file=sys.stderr)
        return 1

    try:
        bus = SerialBus(port, dump=args.dump)
    except OSError as err:
        print(f"Cannot open {port}: {err}", file=sys.stderr)
        return EXIT_FATAL

    try:
        S21Simulator(bus, state).run()
    except OSError as err:
        _LOGGER.error("Serial port failure: %s", err)
        return EXIT_FATAL
    except KeyboardInterrupt:
        return 0
    finally:
        bus.close()


if __name__ == "__main__":
    sys.exit(main())
