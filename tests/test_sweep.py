import pytest

from spicekit.draw import Drawer
from spicekit.probe.errors import NoSuchNode, PlotError
from spicekit.probe.sweep import AcAnalysis, DcAnalysis, OpAnalysis
from spicekit.units import Number, Quantity, Unit

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def volts(*values):
    return [Quantity.of(v, Unit.VOLTAGE) for v in values]


def amps(*values):
    return [Quantity.of(v, Unit.CURRENT) for v in values]


@pytest.fixture
def dc():
    return DcAnalysis(
        sweep=volts(0, 1, 2),
        nodes={"out": volts(0, 1, 4), "in": volts(0, 1, 2)},
        branches={"v1": amps(0, 0.5, 1)},
        internal_parameters={"gm": [Number(1), Number(2), Number(3)]},
    )


@pytest.fixture
def ac():
    freqs = [Quantity.of(f, Unit.FREQUENCY) for f in (10, 100, 1000)]
    return AcAnalysis(
        frequency=freqs,
        nodes={"in": [1 + 0j, 1 + 0j, 1 + 0j], "out": [2 + 0j, 1j, 0.5 + 0.5j]},
        branches={"v1": [0.1j, 0.2j, 0.3j]},
    )


def test_op_lookup_lowercases_query():
    op = OpAnalysis(
        nodes={"out": Quantity.of(3, Unit.VOLTAGE)},
        branches={"v1": Quantity.of(0.5, Unit.CURRENT)},
        internal_parameters={"m1.gm": Number(7)},
    )
    assert op.get_node("OUT") == Quantity.of(3, Unit.VOLTAGE)
    assert op.get_branch("V1") == Quantity.of(0.5, Unit.CURRENT)
    assert op.get_internal("M1.GM") == Number(7)


def test_op_missing_and_uppercase_keys():
    op = OpAnalysis(nodes={"OUT": Quantity.of(3, Unit.VOLTAGE)})
    assert op.get_node("OUT") is None
    assert op.get_branch("x") is None


def test_dc_getters(dc):
    assert dc.get_node("out") == volts(0, 1, 4)
    assert dc.get_branch("v1") == amps(0, 0.5, 1)
    assert dc.get_internal("gm") == [Number(1), Number(2), Number(3)]
    assert dc.get_node("nope") is None


def test_dc_voltage_at_sweep_points_matches_samples(dc):
    for when, expected in zip(dc.sweep, dc.nodes["out"]):
        assert dc.get_voltage_at("out", when) == expected


def test_dc_voltage_interpolates(dc):
    assert dc.get_voltage_at("out", 1.5) == Quantity.of(2.5, Unit.VOLTAGE)
    mid = dc.get_voltage_at("in", Quantity.of(0.25, Unit.VOLTAGE))
    assert mid == Quantity.of(0.25, Unit.VOLTAGE)


def test_dc_voltage_none_cases(dc):
    assert dc.get_voltage_at("out", 3) is None
    assert dc.get_voltage_at("missing", 1) is None
    short = DcAnalysis(sweep=volts(0), nodes={"a": volts(1)})
    assert short.get_voltage_at("a", 0) is None
    mismatched = DcAnalysis(sweep=volts(0, 1, 2), nodes={"a": volts(1, 2)})
    assert mismatched.get_voltage_at("a", 0.5) is None


def test_dc_draw_all_nodes_writes_png(dc, tmp_path):
    path = tmp_path / "nodes.png"
    dc.draw_all_nodes(Drawer(width=320, height=240), path)
    assert path.read_bytes()[:8] == PNG_MAGIC


def test_dc_draw_branches_split_writes_png(dc, tmp_path):
    path = tmp_path / "branches.png"
    dc.draw_branches(Drawer(split=True, width=320, height=240), ["v1"], path)
    assert path.read_bytes()[:8] == PNG_MAGIC


def test_dc_draw_no_selected_nodes_is_plot_error(dc, tmp_path):
    path = tmp_path / "none.png"
    with pytest.raises(PlotError) as info:
        dc.draw_nodes(Drawer(width=320, height=240), ["absent"], path)
    assert info.value.error.stage == "build cartesian"
    assert not path.exists()


def test_ac_getters(ac):
    assert ac.get_node("out") == [2 + 0j, 1j, 0.5 + 0.5j]
    assert ac.get_branch("v1") == [0.1j, 0.2j, 0.3j]
    assert ac.get_node("zz") is None


def test_ac_gain_missing_node(ac, tmp_path):
    with pytest.raises(NoSuchNode) as info:
        ac.draw_gain(Drawer(), "in", "nowhere", tmp_path / "g.png")
    assert info.value.name == "nowhere"


def test_ac_phase_missing_input_node(ac, tmp_path):
    with pytest.raises(NoSuchNode) as info:
        ac.draw_phase(Drawer(), "gone", "out", tmp_path / "p.png")
    assert info.value.name == "gone"


def test_ac_gain_and_phase_write_png(ac, tmp_path):
    drawer = Drawer(width=320, height=240)
    gain = tmp_path / "gain.png"
    phase = tmp_path / "phase.png"
    ac.draw_gain(drawer, "in", "out", gain)
    ac.draw_phase(drawer, "in", "out", phase)
    assert gain.read_bytes()[:8] == PNG_MAGIC
    assert phase.read_bytes()[:8] == PNG_MAGIC