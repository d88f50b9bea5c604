"""Tests for the beautify phases and driver."""

from dataclasses import replace

import pytest

from sheet_beautify.beautify import (
    BeautifyOptions,
    align_multi_port_symbols,
    align_single_port_symbols,
    beautify_sheet,
    beautify_sheet_with_report,
    input_source_symbols,
    port_pitch,
    port_ratio,
    scale_align_symbol_pairs,
    signed_offset,
    symbol_pair_wires,
    try_commit,
)
from sheet_beautify.builder import place_symbol
from sheet_beautify.config import Config
from sheet_beautify.exceptions import ConfigurationError
from sheet_beautify.geometry import XYPos
from sheet_beautify.gentest.circuits import make_demux_mux_circuit, make_samples_demux_mux
from sheet_beautify.gentest.gen import truncate
from sheet_beautify.segments import is_straight, straight_wire_count
from sheet_beautify.sheet import ComponentType, Rotation

A_TO_G1 = "W[C1.out0->C2.in0]"
G1_TO_Y = "W[C1.out0->C2.in0]"


class TestHelpers:
    """Test the commit policy and offset signs."""

    def test_commit_accepts_clear_move(self, input_jog_sheet):
        moved = input_jog_sheet.symbols["C1"].moved(XYPos(0, 40))
        result, accepted = try_commit(input_jog_sheet, input_jog_sheet.with_symbol(moved), "C1")
        assert accepted
        assert result.bounding_boxes["C1"] == moved.bounding_box

    def test_rollback_returns_previous_model(self, blocked_input_jog_sheet):
        before = blocked_input_jog_sheet
        moved = before.symbols["C1"].moved(XYPos(0, 40))
        result, accepted = try_commit(before, before.with_symbol(moved), "C1")
        assert not accepted
        assert result is before

    def test_out_of_bounds_rejected_unless_disabled(self, input_jog_sheet):
        before = replace(input_jog_sheet, max_coord=1000.0)
        moved = before.symbols["C1"].moved(XYPos(0, 40))
        _, accepted = try_commit(before, before.with_symbol(moved), "C1")
        assert not accepted
        _, accepted = try_commit(
            before, before.with_symbol(moved), "C1", reject_out_of_bounds=False
        )
        assert accepted

    def test_signed_offset(self):
        offset = XYPos(0, 40)
        assert signed_offset(offset, moves_target=False) == XYPos(0, 40)
        assert signed_offset(offset, moves_target=True) == XYPos(0, -40)


class TestSinglePortAlignment:
    """Test phase 1."""

    def test_moves_symbol_to_straighten_wire(self, router, input_jog_sheet):
        sheet = input_jog_sheet.recompute_bounding_boxes()
        result = align_single_port_symbols(sheet, router)
        assert result.symbols["C1"].pos == sheet.symbols["C1"].pos + XYPos(0, 40)
        assert is_straight(A_TO_G1, result)
        assert result.symbols["C2"] == sheet.symbols["C2"]

    def test_rolls_back_on_overlap(self, router, blocked_input_jog_sheet):
        sheet = blocked_input_jog_sheet
        result = align_single_port_symbols(sheet, router)
        assert result.symbols == sheet.symbols
        assert result.wires == sheet.wires
        assert not result.overlapping_pairs()

    def test_turns_symbol_to_face_far_port(self, router, facing_away_sheet):
        """An output stub facing the same way as its driver is turned round."""
        sheet = facing_away_sheet
        result = align_single_port_symbols(sheet, router)
        symbol = result.symbols["C2"]
        assert symbol.rotation is Rotation.DEG180
        assert symbol.centre.approx_equal(XYPos(1000, 1000))
        assert is_straight(G1_TO_Y, result)

    def test_straight_wire_left_alone(self, router, input_jog_sheet):
        sheet = align_single_port_symbols(input_jog_sheet, router)
        again = align_single_port_symbols(sheet, router)
        assert again.symbols == sheet.symbols

    def test_respects_bounds(self, router, input_jog_sheet):
        sheet = replace(input_jog_sheet, max_coord=1000.0).recompute_bounding_boxes()
        assert align_single_port_symbols(sheet, router).symbols == sheet.symbols
        moved = align_single_port_symbols(sheet, router, reject_out_of_bounds=False)
        assert is_straight(A_TO_G1, moved)


class TestScaleAlignment:
    """Test phase 2."""

    def test_pair_wires(self, demux_gate_sheet):
        pairs = symbol_pair_wires(demux_gate_sheet)
        assert list(pairs) == [("C1", "C2")]
        assert len(pairs[("C1", "C2")]) == 2

    def test_pitch_and_ratio(self, demux_gate_sheet):
        demux = demux_gate_sheet.symbols["C1"]
        gate = demux_gate_sheet.symbols["C2"]
        assert port_pitch(demux, ["C1.out0", "C1.out1"]) == pytest.approx(30.0)
        assert port_pitch(gate, ["C2.in0"]) is None
        assert port_ratio(demux, gate) == pytest.approx(1.5)

    def test_ratio_falls_back_to_one(self, input_jog_sheet):
        source = input_jog_sheet.symbols["C1"]
        target = input_jog_sheet.symbols["C2"]
        assert port_ratio(source, target) == 1.0

    def test_scales_target_to_match_pitch(self, router, demux_gate_sheet):
        result = scale_align_symbol_pairs(demux_gate_sheet, router)
        gate = result.symbols["C2"]
        demux = result.symbols["C1"]
        assert gate.v_scale == pytest.approx(1.5)
        assert gate.h_scale is None
        assert port_pitch(gate, ["C2.in0", "C2.in1"]) == pytest.approx(
            port_pitch(demux, ["C1.out0", "C1.out1"])
        )
        assert result.bounding_boxes["C2"].height == pytest.approx(90.0)

    def test_single_wire_pairs_skipped(self, router, input_jog_sheet):
        result = scale_align_symbol_pairs(input_jog_sheet, router)
        assert result.symbols == input_jog_sheet.symbols

    def test_rolls_back_on_overlap(self, router, demux_gate_sheet):
        sheet = place_symbol(demux_gate_sheet, "FF1", ComponentType.dff(), XYPos(1200, 1080))
        result = scale_align_symbol_pairs(sheet, router)
        assert result.symbols["C2"].v_scale is None


class TestMultiPortAlignment:
    """Test phase 3."""

    def test_input_source_symbols(self, gate_driver_sheet):
        assert input_source_symbols(gate_driver_sheet, "C2") == ["C1"]
        assert input_source_symbols(gate_driver_sheet, "C1") == []

    def test_moves_symbol_with_its_drivers(self, router, gate_driver_sheet):
        sheet = gate_driver_sheet.recompute_bounding_boxes()
        result = align_multi_port_symbols(sheet, router)
        assert result.symbols["C2"].pos == sheet.symbols["C2"].pos + XYPos(0, 40)
        assert result.symbols["C1"].pos == sheet.symbols["C1"].pos + XYPos(0, 40)
        assert straight_wire_count(result) == 2

    def test_blocked_driver_stays(self, router, gate_driver_sheet):
        """Each symbol of the group is committed on its own."""
        sheet = place_symbol(gate_driver_sheet, "FF2", ComponentType.dff(), XYPos(800, 1070))
        result = align_multi_port_symbols(sheet, router)
        assert result.symbols["C2"].pos == sheet.symbols["C2"].pos + XYPos(0, 40)
        assert result.symbols["C1"].pos == sheet.symbols["C1"].pos
        assert is_straight("W[C2.out0->C3.in0]", result)
        assert not result.overlapping_pairs()


class TestBeautifyDriver:
    """Test the phase driver."""

    def test_report(self, router, input_jog_sheet):
        sheet, report = beautify_sheet_with_report(input_jog_sheet, router)
        assert report.straight_before == 0
        assert report.straight_after == 1
        assert report.improvement == 1
        assert report.total_wires == 1
        assert report.phases == ("single_port", "scale_align", "multi_port")
        assert is_straight(A_TO_G1, sheet)

    def test_phases_run_in_canonical_order(self, router, input_jog_sheet):
        options = BeautifyOptions(phases=("multi_port", "single_port"))
        _, report = beautify_sheet_with_report(input_jog_sheet, router, options)
        assert report.phases == ("single_port", "multi_port")

    def test_no_phases_is_identity(self, input_jog_sheet):
        result = beautify_sheet(input_jog_sheet, options=BeautifyOptions(phases=()))
        assert result.symbols == input_jog_sheet.symbols
        assert result.wires == input_jog_sheet.wires

    def test_unknown_phase(self):
        with pytest.raises(ConfigurationError, match="Unknown beautify phase"):
            BeautifyOptions(phases=("phase4",))

    def test_options_from_config(self):
        config = Config()
        config.beautify.phases = ["scale_align"]
        config.beautify.reject_out_of_bounds = False
        options = BeautifyOptions.from_config(config)
        assert options.phases == ("scale_align",)
        assert not options.reject_out_of_bounds

    def test_never_adds_overlaps_or_leaves_sheet(self, router):
        """Beautify keeps every overlap-free, on-sheet symbol that way."""
        samples = truncate(make_samples_demux_mux(limit=20), 8)
        for n in range(len(samples)):
            sheet = make_demux_mux_circuit(450.0, samples[n]).recompute_bounding_boxes()
            result = beautify_sheet(sheet, router)
            assert set(result.overlapping_pairs()) <= set(sheet.overlapping_pairs())
            for symbol_id in sheet.symbols:
                if sheet.symbol_in_bounds(symbol_id):
                    assert result.symbol_in_bounds(symbol_id)
