"""Pytest fixtures for sheet-beautify tests."""

import pytest

from sheet_beautify import config as config_module
from sheet_beautify.builder import SheetBuilder, get_ok_or_fail, port_of
from sheet_beautify.geometry import XYPos
from sheet_beautify.router import ManhattanRouter
from sheet_beautify.sheet import ComponentKind, ComponentType, FlipType

AND2 = ComponentType.gate(ComponentKind.AND, 2)


@pytest.fixture
def router():
    """The reference router with default settings."""
    return ManhattanRouter()


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    """Point the user config at a file that does not exist."""
    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", tmp_path / "user" / "config.toml")
    return tmp_path


@pytest.fixture
def input_jog_sheet():
    """An input stub whose wire to G1 has a 40 unit jog.

    A's port is at (1030, 950), G1's first input at (1170, 990).
    """
    return get_ok_or_fail(
        SheetBuilder()
        .place_symbol("A", ComponentType.input(), XYPos(1000, 950))
        .place_symbol("G1", AND2, XYPos(1200, 1000))
        .place_wire(port_of("A", 0), port_of("G1", 0))
        .result()
    )


@pytest.fixture
def blocked_input_jog_sheet():
    """As input_jog_sheet, with FF1 sitting where A would move to."""
    return get_ok_or_fail(
        SheetBuilder()
        .place_symbol("A", ComponentType.input(), XYPos(1000, 950))
        .place_symbol("G1", AND2, XYPos(1200, 1000))
        .place_symbol("FF1", ComponentType.dff(), XYPos(1000, 1010))
        .place_wire(port_of("A", 0), port_of("G1", 0))
        .result()
    )


@pytest.fixture
def facing_away_sheet():
    """A mirrored gate driving an output stub whose port faces the same way.

    G1's output is on its LEFT edge at (1170, 1000); Y's input is on its
    LEFT edge at (970, 1020).
    """
    return get_ok_or_fail(
        SheetBuilder()
        .place_symbol("G1", AND2, XYPos(1200, 1000))
        .flip_symbol("G1", FlipType.HORIZONTAL)
        .place_symbol("Y", ComponentType.output(), XYPos(1000, 1020))
        .place_wire(port_of("G1", 0), port_of("Y", 0))
        .result()
    )


@pytest.fixture
def gate_driver_sheet():
    """A -> G1 -> FF1, where the G1 -> FF1 wire has a 40 unit jog.

    The A -> G1 wire is straight.
    """
    return get_ok_or_fail(
        SheetBuilder()
        .place_symbol("A", ComponentType.input(), XYPos(800, 990))
        .place_symbol("G1", AND2, XYPos(1000, 1000))
        .place_symbol("FF1", ComponentType.dff(), XYPos(1200, 1040))
        .place_wire(port_of("A", 0), port_of("G1", 0))
        .place_wire(port_of("G1", 0), port_of("FF1", 0))
        .result()
    )


@pytest.fixture
def demux_gate_sheet():
    """A 2-way demux wired port for port into an AND gate with a smaller pitch."""
    return get_ok_or_fail(
        SheetBuilder()
        .place_symbol("DM1", ComponentType.demux2(), XYPos(1000, 1000))
        .place_symbol("G1", AND2, XYPos(1200, 1000))
        .place_wire(port_of("DM1", 0), port_of("G1", 0))
        .place_wire(port_of("DM1", 1), port_of("G1", 1))
        .result()
    )
