"""
Display sinks for failing samples.

The test harness hands the sheet of the first failing sample to a
:class:`DisplaySink` so a human can inspect it.  The harness does not care
what the sink does with it.
"""

from __future__ import annotations

from typing import Optional, Protocol

from rich.console import Console
from rich.table import Table

from ..segments import WireShape, classify_wire, visible_segments
from ..sheet import SheetModel


class DisplaySink(Protocol):
    def show_failing_sample(self, sheet: SheetModel) -> None: ...


class NullDisplay:
    """Discards every sample."""

    def show_failing_sample(self, sheet: SheetModel) -> None:
        pass


class RecordingDisplay:
    """Keeps every sample it is shown, for tests."""

    def __init__(self):
        self.shown: list[SheetModel] = []

    def show_failing_sample(self, sheet: SheetModel) -> None:
        self.shown.append(sheet)

    @property
    def last(self) -> Optional[SheetModel]:
        return self.shown[-1] if self.shown else None


_SHAPE_STYLE = {
    WireShape.STRAIGHT: "[green]straight[/green]",
    WireShape.NEAR_STRAIGHT: "[yellow]one jog[/yellow]",
    WireShape.OTHER: "[red]other[/red]",
}


class ConsoleDisplay:
    """Prints symbol and wire tables of the sample with rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_failing_sample(self, sheet: SheetModel) -> None:
        symbols = Table(title="Symbols")
        symbols.add_column("Label", style="bold")
        symbols.add_column("Component")
        symbols.add_column("Position", justify="right")
        symbols.add_column("Rotation", justify="right")
        symbols.add_column("Flip")
        symbols.add_column("Scale (h, v)", justify="right")
        for sym in sorted(sheet.symbols.values(), key=lambda s: s.label):
            symbols.add_row(
                sym.label,
                sym.component.description,
                f"({sym.pos.x:.1f}, {sym.pos.y:.1f})",
                f"{sym.rotation.value}",
                sym.flip.value,
                f"({sym.h_scale or 1.0:.2f}, {sym.v_scale or 1.0:.2f})",
            )
        self.console.print(symbols)

        wires = Table(title="Wires")
        wires.add_column("Source")
        wires.add_column("Target")
        wires.add_column("Visible", justify="right")
        wires.add_column("Shape")
        for wire_id in sorted(sheet.wires):
            wire = sheet.wires[wire_id]
            wires.add_row(
                _port_name(sheet, wire.source_port),
                _port_name(sheet, wire.target_port),
                str(len(visible_segments(wire_id, sheet))),
                _SHAPE_STYLE[classify_wire(wire_id, sheet)],
            )
        self.console.print(wires)


def _port_name(sheet: SheetModel, port_id: str) -> str:
    symbol = sheet.symbol_of_port(port_id)
    return f"{symbol.label}.{port_id.rsplit('.', 1)[1]}"


def make_display(mode: str, console: Optional[Console] = None) -> DisplaySink:
    """Display sink for a ``[testing] display`` config value."""
    if mode == "console":
        return ConsoleDisplay(console)
    return NullDisplay()
