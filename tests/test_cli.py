"""Tests for the faikin_sim command line front end."""

import pytest

import faikin_sim
from conftest import FakeChannel
from daikin_s21_lib.const import ACK, FanSpeed, Mode
from daikin_s21_lib.protocol import build_reply, build_request


def parse(*argv):
    return faikin_sim.state_from_args(faikin_sim.build_parser().parse_args(list(argv)))


def test_defaults():
    state = parse()
    assert state.power is False
    assert state.mode == Mode.AUTO
    assert state.model == "135D"
    assert state.protocol_version == 2


def test_overrides():
    state = parse(
        "--on", "--mode", "2", "--temp", "24.5", "--fan", "6", "--powerful",
        "--eco", "--home", "-35", "--fanrpm", "80", "--protocol", "1", "--model", "ABCD",
    )
    assert state.power is True
    assert state.mode == Mode.COOL
    assert state.target_temp == 24.5
    assert state.fan == FanSpeed.QUIET
    assert state.powerful is True
    assert state.eco is True
    assert state.home_temp == -35
    assert state.fan_rpm == 80
    assert state.protocol_version == 1
    assert state.model == "ABCD"


def test_bad_model_rejected():
    with pytest.raises(ValueError):
        parse("--model", "135")


def test_main_bad_config_exits_before_opening_port(monkeypatch, capsys):
    def no_port(*args, **kwargs):
        raise AssertionError("port must not be opened")

    monkeypatch.setattr(faikin_sim, "SerialBus", no_port)
    assert faikin_sim.main(["--model", "XY"]) == faikin_sim.EXIT_FATAL
    assert "4 ASCII characters required" in capsys.readouterr().err


def test_main_no_port(monkeypatch):
    monkeypatch.setattr(faikin_sim.SerialBus, "find_port", staticmethod(lambda: None))
    assert faikin_sim.main([]) == 1


def test_main_list_ports(monkeypatch, capsys):
    monkeypatch.setattr(
        faikin_sim.SerialBus, "list_ports", staticmethod(lambda: {"/dev/ttyUSB0": "USB UART"})
    )
    assert faikin_sim.main(["--list-ports"]) == 0
    assert "/dev/ttyUSB0\tUSB UART" in capsys.readouterr().out


def test_main_serves_until_port_fails(monkeypatch):
    opened = {}

    class Bus(FakeChannel):
        def __init__(self, port, dump=False):
            super().__init__(build_request("F8") + bytes([ACK]))
            self.closed = False
            opened["bus"] = self
            opened["port"] = port

        def close(self):
            self.closed = True

    monkeypatch.setattr(faikin_sim, "SerialBus", Bus)
    assert faikin_sim.main(["--port", "/dev/ttyUSB1", "--protocol", "0"]) == faikin_sim.EXIT_FATAL
    bus = opened["bus"]
    assert opened["port"] == "/dev/ttyUSB1"
    assert bus.writes[1] == build_reply(ord("F"), ord("8"), b"0000")
    assert bus.closed
