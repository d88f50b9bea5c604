"""Tests for the placement builder."""

import pytest

from sheet_beautify.builder import (
    LoadedComponent,
    PlacementResult,
    Project,
    SheetBuilder,
    flip_symbol,
    get_ok_or_fail,
    place_custom_symbol,
    place_symbol,
    place_wire,
    port_of,
    rotate_symbol,
    scale_symbol,
    separate_all_wires,
    swap_mux_inputs,
)
from sheet_beautify.exceptions import PlacementError, PlacementErrorKind
from sheet_beautify.geometry import XYPos
from sheet_beautify.segments import is_straight
from sheet_beautify.sheet import (
    ComponentKind,
    ComponentType,
    Edge,
    FlipType,
    Rotation,
    SheetModel,
)

AND2 = ComponentType.gate(ComponentKind.AND, 2)

PROJECT = Project(
    open_sheet="main",
    loaded_components=(
        LoadedComponent("main", ("A",), ("Y",)),
        LoadedComponent("alu", ("A", "B"), ("Y",)),
    ),
)


def two_gates():
    sheet = place_symbol(SheetModel(), "G1", AND2, XYPos(1000, 1000))
    return place_symbol(sheet, "G2", AND2, XYPos(1200, 1000))


class TestPlaceSymbol:
    """Test symbol placement."""

    def test_centred_on_position(self):
        sheet = place_symbol(SheetModel(), "G1", AND2, XYPos(1000, 1000))
        symbol = sheet.symbols["C1"]
        assert symbol.pos == XYPos(970, 970)
        assert symbol.centre == XYPos(1000, 1000)
        assert sheet.bounding_boxes["C1"] == symbol.bounding_box

    def test_ids_are_sequential(self):
        assert list(two_gates().symbols) == ["C1", "C2"]

    def test_duplicate_label(self):
        """Labels are unique, ignoring case."""
        sheet = place_symbol(SheetModel(), "G1", AND2, XYPos(1000, 1000))
        with pytest.raises(PlacementError) as exc_info:
            place_symbol(sheet, "g1", ComponentType.dff(), XYPos(1500, 1500))
        assert exc_info.value.kind is PlacementErrorKind.DUPLICATE_LABEL
        assert exc_info.value.context["label"] == "G1"

    def test_out_of_bounds(self):
        with pytest.raises(PlacementError) as exc_info:
            place_symbol(SheetModel(), "G1", AND2, XYPos(10, 10))
        assert exc_info.value.kind is PlacementErrorKind.OUT_OF_BOUNDS

    def test_failure_leaves_sheet_unchanged(self):
        sheet = two_gates()
        with pytest.raises(PlacementError):
            place_symbol(sheet, "G2", AND2, XYPos(1500, 1500))
        assert len(sheet.symbols) == 2
        assert sheet.serial == 2


class TestPlaceCustomSymbol:
    """Test custom component placement."""

    def test_places_scaled_custom_symbol(self):
        sheet = place_custom_symbol(
            SheetModel(), "U1", "alu", PROJECT, XYPos(1.0, 2.0), XYPos(1000, 1000)
        )
        symbol = sheet.symbols["C1"]
        assert symbol.component.kind is ComponentKind.CUSTOM
        assert symbol.component.custom.input_labels == ("A", "B")
        assert (symbol.h_scale, symbol.v_scale) == (1.0, 2.0)
        assert symbol.centre.approx_equal(XYPos(1000, 1000))

    def test_open_sheet_refused(self):
        with pytest.raises(PlacementError) as exc_info:
            place_custom_symbol(SheetModel(), "U1", "MAIN", PROJECT, XYPos(1, 1), XYPos(1000, 1000))
        assert exc_info.value.kind is PlacementErrorKind.CUSTOM_SHEET

    def test_unknown_sheet_refused(self):
        with pytest.raises(PlacementError) as exc_info:
            place_custom_symbol(SheetModel(), "U1", "fpu", PROJECT, XYPos(1, 1), XYPos(1000, 1000))
        assert exc_info.value.kind is PlacementErrorKind.CUSTOM_SHEET
        assert "fpu" in exc_info.value.message

    def test_duplicate_label(self):
        sheet = place_symbol(SheetModel(), "U1", AND2, XYPos(1000, 1000))
        with pytest.raises(PlacementError) as exc_info:
            place_custom_symbol(sheet, "u1", "alu", PROJECT, XYPos(1, 1), XYPos(2000, 2000))
        assert exc_info.value.kind is PlacementErrorKind.DUPLICATE_LABEL


class TestPlaceWire:
    """Test wiring."""

    def test_wire_is_routed(self):
        sheet = place_wire(two_gates(), port_of("G1", 0), port_of("G2", 1))
        wire = sheet.wires["W[C1.out0->C2.in1]"]
        assert wire.source_symbol == "C1"
        assert wire.target_symbol == "C2"
        assert len(wire.segments) == 7

    def test_unknown_symbol(self):
        with pytest.raises(PlacementError) as exc_info:
            place_wire(two_gates(), port_of("G9", 0), port_of("G2", 0))
        assert exc_info.value.kind is PlacementErrorKind.UNKNOWN_SYMBOL

    def test_unknown_port(self):
        with pytest.raises(PlacementError) as exc_info:
            place_wire(two_gates(), port_of("G1", 0), port_of("G2", 2))
        assert exc_info.value.kind is PlacementErrorKind.UNKNOWN_PORT

    def test_output_port_must_exist(self):
        with pytest.raises(PlacementError) as exc_info:
            place_wire(two_gates(), port_of("G1", 1), port_of("G2", 0))
        assert exc_info.value.kind is PlacementErrorKind.UNKNOWN_PORT

    def test_duplicate_wire(self):
        sheet = place_wire(two_gates(), port_of("G1", 0), port_of("G2", 0))
        with pytest.raises(PlacementError) as exc_info:
            place_wire(sheet, port_of("g1", 0), port_of("g2", 0))
        assert exc_info.value.kind is PlacementErrorKind.DUPLICATE_WIRE
        assert len(sheet.wires) == 1

    def test_fan_out_allowed(self):
        sheet = place_wire(two_gates(), port_of("G1", 0), port_of("G2", 0))
        sheet = place_wire(sheet, port_of("G1", 0), port_of("G2", 1))
        assert len(sheet.wires) == 2

    def test_separate_all_wires(self):
        sheet = place_wire(two_gates(), port_of("G1", 0), port_of("G2", 0))
        assert separate_all_wires(sheet).wires == sheet.wires


class TestSymbolTransforms:
    """Test rotate, flip, scale and input swap."""

    def test_rotate_reroutes_with_router(self, router):
        sheet = place_wire(two_gates(), port_of("G1", 0), port_of("G2", 0))
        sheet = rotate_symbol(sheet, "G2", Rotation.DEG90, router)
        assert sheet.symbols["C2"].port_edge("C2.in0") is Edge.TOP
        assert len(sheet.wires["W[C1.out0->C2.in0]"].segments) == 6

    def test_rotate_without_router_keeps_wires(self):
        sheet = place_wire(two_gates(), port_of("G1", 0), port_of("G2", 0))
        rotated = rotate_symbol(sheet, "G2", Rotation.DEG90)
        assert rotated.wires == sheet.wires
        assert rotated.bounding_boxes["C2"] == rotated.symbols["C2"].bounding_box

    def test_flip(self):
        sheet = flip_symbol(two_gates(), "g1", FlipType.HORIZONTAL)
        assert sheet.symbols["C1"].flip is FlipType.HORIZONTAL

    def test_missing_symbol(self):
        with pytest.raises(PlacementError) as exc_info:
            rotate_symbol(two_gates(), "G9", Rotation.DEG90)
        assert exc_info.value.kind is PlacementErrorKind.NOT_FOUND

    def test_missing_ok(self):
        sheet = two_gates()
        assert flip_symbol(sheet, "G9", FlipType.VERTICAL, missing_ok=True) is sheet

    def test_scale_keeps_unspecified_factor(self):
        sheet = scale_symbol(two_gates(), "G1", v_scale=2.0, h_scale=1.5)
        sheet = scale_symbol(sheet, "G1", v_scale=0.5)
        symbol = sheet.symbols["C1"]
        assert (symbol.v_scale, symbol.h_scale) == (0.5, 1.5)
        assert sheet.bounding_boxes["C1"].height == 30

    def test_rotate_off_sheet_refused(self):
        """A DFF hugging the top edge can't be turned upright."""
        sheet = place_symbol(SheetModel(), "D", ComponentType.dff(), XYPos(500, 31))
        assert sheet.symbols["C1"].bounding_box.top == 1
        with pytest.raises(PlacementError) as exc_info:
            rotate_symbol(sheet, "D", Rotation.DEG90)
        assert exc_info.value.kind is PlacementErrorKind.OUT_OF_BOUNDS
        assert exc_info.value.context["label"] == "D"

    def test_scale_off_sheet_refused(self):
        sheet = place_symbol(SheetModel(), "G1", AND2, XYPos(1000, 3960))
        with pytest.raises(PlacementError) as exc_info:
            scale_symbol(sheet, "G1", v_scale=2.0)
        assert exc_info.value.kind is PlacementErrorKind.OUT_OF_BOUNDS

    def test_builder_stops_on_off_sheet_rotation(self):
        result = (
            SheetBuilder()
            .place_symbol("D", ComponentType.dff(), XYPos(500, 31))
            .rotate_symbol("D", Rotation.DEG90)
            .result()
        )
        assert result.error.kind is PlacementErrorKind.OUT_OF_BOUNDS

    def test_swap_mux_inputs(self):
        sheet = place_symbol(SheetModel(), "MUX1", ComponentType.mux2(), XYPos(1000, 1000))
        before = sheet.symbols["C1"].port_position("C1.in0")
        sheet = swap_mux_inputs(sheet, "MUX1")
        symbol = sheet.symbols["C1"]
        assert symbol.reversed_inputs
        assert symbol.port_position("C1.in1") == before


class TestSheetBuilder:
    """Test chained construction."""

    def test_successful_chain(self):
        result = (
            SheetBuilder()
            .place_symbol("A", ComponentType.input(), XYPos(1000, 990))
            .place_symbol("G1", AND2, XYPos(1200, 1000))
            .place_wire(port_of("A", 0), port_of("G1", 0))
            .separate_all_wires()
            .result()
        )
        assert result.ok
        sheet = get_ok_or_fail(result)
        assert is_straight("W[C1.out0->C2.in0]", sheet)

    def test_first_error_wins(self):
        """Steps after a failure are skipped."""
        result = (
            SheetBuilder()
            .place_symbol("G1", AND2, XYPos(1000, 1000))
            .place_symbol("G1", AND2, XYPos(1200, 1000))
            .place_wire(port_of("G1", 0), port_of("G9", 0))
            .result()
        )
        assert not result.ok
        assert result.sheet is None
        assert result.error.kind is PlacementErrorKind.DUPLICATE_LABEL

    def test_get_ok_or_fail_raises(self):
        error = PlacementError("boom", kind=PlacementErrorKind.NOT_FOUND)
        with pytest.raises(PlacementError, match="boom"):
            get_ok_or_fail(PlacementResult(error=error))
