import pytest

from spicekit.draw import Drawer, DrawerError
from spicekit.probe.errors import (
    InnerError,
    NoSuchBranch,
    NoSuchNode,
    PlotError,
    TimeOutOfRange,
)
from spicekit.probe.tran import TranAnalysis
from spicekit.units import Number, Quantity, Suffix, Unit

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def ns(v):
    return Quantity(Number(v, Suffix.NANO), Unit.TIME)


def volts(v):
    return Quantity(Number(v), Unit.VOLTAGE)


def amps(v):
    return Quantity(Number(v, Suffix.MILLI), Unit.CURRENT)


@pytest.fixture
def analysis():
    return TranAnalysis(
        time=[ns(0), ns(1), ns(2)],
        nodes={"out": [volts(0), volts(1), volts(4)], "in": [volts(1), volts(1), volts(1)]},
        branches={"v1": [amps(0), amps(2), amps(3)]},
        internal_parameters={"temp": [Number(27), Number(27), Number(27)]},
    )


def test_lookups(analysis):
    assert analysis.get_node("out") == [volts(0), volts(1), volts(4)]
    assert analysis.get_node("missing") is None
    assert analysis.get_branch("v1")[1] == amps(2)
    assert analysis.get_internal("temp")[0] == Number(27)


@pytest.mark.parametrize("index", [0, 1, 2])
def test_voltage_at_sample_points(analysis, index):
    assert analysis.get_voltage_at("out", ns(index)) == analysis.nodes["out"][index]


@pytest.mark.parametrize("index", [0, 1, 2])
def test_current_at_sample_points(analysis, index):
    assert analysis.get_current_at("v1", ns(index)) == analysis.branches["v1"][index]


def test_voltage_interpolates_linearly(analysis):
    assert analysis.get_voltage_at("out", ns(0.5)) == volts(0.5)


def test_voltage_between_neighbours(analysis):
    value = analysis.get_voltage_at("out", ns(1.3))
    assert volts(1) < value < volts(4)


def test_constant_node_stays_constant(analysis):
    assert analysis.get_voltage_at("in", ns(1.7)) == volts(1)


def test_accepts_plain_seconds(analysis):
    assert analysis.get_voltage_at("out", 1e-9) == volts(1)


def test_time_out_of_range(analysis):
    with pytest.raises(TimeOutOfRange) as info:
        analysis.get_voltage_at("out", ns(5))
    assert info.value.time == ns(5)


def test_unknown_node(analysis):
    with pytest.raises(NoSuchNode) as info:
        analysis.get_voltage_at("nowhere", ns(1))
    assert info.value.name == "nowhere"


def test_unknown_branch(analysis):
    with pytest.raises(NoSuchBranch) as info:
        analysis.get_current_at("i9", ns(1))
    assert info.value.name == "i9"


def test_length_mismatch_is_inner_error(analysis):
    analysis.nodes["short"] = [volts(0), volts(1)]
    with pytest.raises(InnerError) as info:
        analysis.get_voltage_at("short", ns(1))
    assert info.value.detail == "Bad value/time in tran analysis"


def test_single_sample_is_inner_error():
    single = TranAnalysis(time=[ns(0)], nodes={"out": [volts(1)]})
    with pytest.raises(InnerError):
        single.get_voltage_at("out", ns(0))


def test_draw_all_nodes_writes_png(analysis, tmp_path):
    path = tmp_path / "nodes.png"
    analysis.draw_all_nodes(Drawer(width=320, height=240), path)
    assert path.read_bytes()[:8] == PNG_SIGNATURE


def test_draw_branches_split_writes_png(analysis, tmp_path):
    path = tmp_path / "branches.png"
    analysis.draw_branches(Drawer(split=True, width=320, height=240), ["v1"], path)
    assert path.read_bytes()[:8] == PNG_SIGNATURE


def test_draw_nodes_filter_writes_png(analysis, tmp_path):
    path = tmp_path / "filtered.png"
    analysis.draw_nodes_filter(
        Drawer(width=320, height=240), path, lambda name: name.startswith("o")
    )
    assert path.read_bytes()[:8] == PNG_SIGNATURE


def test_draw_without_signals_is_plot_error(analysis, tmp_path):
    path = tmp_path / "empty.png"
    with pytest.raises(PlotError) as info:
        analysis.draw_nodes(Drawer(width=320, height=240), ["absent"], path)
    assert isinstance(info.value.error, DrawerError)
    assert not path.exists()


def test_draw_all_branches_writes_png(analysis, tmp_path):
    path = tmp_path / "all_branches.png"
    analysis.draw_all_branches(Drawer(width=320, height=240), path)
    assert path.stat().st_size > len(PNG_SIGNATURE)