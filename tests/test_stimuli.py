import pytest

from spicekit.parse.lexer import ParseError, ParseFailure
from spicekit.parse.stimuli import (
    ac_current,
    ac_voltage,
    dc_current,
    dc_voltage,
    pulse_voltage,
    pwl_voltage,
    sine_voltage,
    source,
    source_value,
)
from spicekit.sources import (
    AcCurrent,
    AcVoltage,
    PulseVoltage,
    PwlVoltage,
    SineVoltage,
    Source,
    SourceKind,
)
from spicekit.units import Number, Quantity, Suffix, Unit


def q(value, unit, suffix=Suffix.NONE):
    return Quantity(Number(value, suffix), unit)


def test_dc_source_voltage():
    _, s = dc_voltage("DC 5V")
    assert s == q(5.0, Unit.VOLTAGE)


def test_dc_source_current_no_keyword():
    _, s = dc_current("1.2mA")
    assert s == q(1.2, Unit.CURRENT, Suffix.MILLI)


def test_dc_source_equals_syntax():
    _, s = dc_current("DC=1.0")
    assert s == q(1.0, Unit.CURRENT)


def test_dc_keyword_without_value_fails():
    with pytest.raises(ParseFailure):
        dc_voltage("DC abc")


def test_dc_without_keyword_is_recoverable():
    with pytest.raises(ParseError):
        dc_voltage("abc")


def test_ac_voltage_source():
    _, src = ac_voltage("AC 1.0 90")
    assert src.magnitude == q(1.0, Unit.VOLTAGE)
    assert src.phase_deg == q(90.0, Unit.ANGLE)


def test_ac_current_source_with_ac_eq():
    _, src = ac_current("AC=2.5 180")
    assert src.magnitude == q(2.5, Unit.CURRENT)
    assert src.phase_deg == q(180.0, Unit.ANGLE)


def test_sine_voltage_basic():
    _, s = sine_voltage("SIN(0 1 1k)")
    assert s.freq_hz == q(1.0, Unit.FREQUENCY, Suffix.KILO)
    assert s.phase_deg == Number(0.0)
    assert s.delay == q(0, Unit.TIME)
    assert s.damping == q(0, Unit.FREQUENCY)


def test_pwl_voltage_points():
    _, s = pwl_voltage("PWL(0 0 1n 1.8 2n 0)")
    assert len(s.points) == 3
    assert s.points[1] == (q(1, Unit.TIME, Suffix.NANO), q(1.8, Unit.VOLTAGE))


def test_pulse_voltage():
    rest, s = pulse_voltage("PULSE(0 1 1n 1n 1n 10n 20n)")
    assert rest == ""
    assert s.v1 == q(1.0, Unit.VOLTAGE)
    assert s.width == q(10.0, Unit.TIME, Suffix.NANO)
    assert s.period == q(20.0, Unit.TIME, Suffix.NANO)


def test_source_sine():
    _, src = source("Vsig n1 0 SIN(0 1 1k 0.1 0.05 45)")
    assert src.name == "sig"
    assert isinstance(src.value, SineVoltage)
    assert src.value.freq_hz == q(1.0, Unit.FREQUENCY, Suffix.KILO)
    assert src.value.phase_deg == Number(45.0)
    assert src.value.delay == q(0.1, Unit.TIME)
    assert src.value.damping == q(0.05, Unit.FREQUENCY)


def test_source_dc_voltage():
    _, src = source("Vdd vdd 0 1.8")
    assert src.value == q(1.8, Unit.VOLTAGE)


def test_source_ac_current():
    _, src = source("Iin in 0 AC 2.0 180")
    assert isinstance(src.value, AcCurrent)
    assert src.value.magnitude == q(2.0, Unit.CURRENT)


def test_source_current_dc_value_is_current():
    _, src = source("I1 2 0 0.001")
    assert src.value == q(0.001, Unit.CURRENT)


def test_source_bad_prefix():
    with pytest.raises(ParseError):
        source("X1 0 N001 5")


def test_source_missing_value():
    with pytest.raises(ParseFailure):
        source("V1 0 N001")


def test_source_invalid_sin_format():
    with pytest.raises(ParseFailure):
        source("V1 0 N001 SIN(1 0.5)")


def test_source_invalid_pwl_point():
    with pytest.raises(ParseFailure):
        source("I1 N1 N2 PWL(0 1 2)")


def test_source_line_continuation():
    rest, src = source("V1 1 0 \n+ DC 5\nR1 a b 1k")
    assert rest == "\nR1 a b 1k"
    assert src.value == q(5, Unit.VOLTAGE)


def test_source_value_voltage_ac():
    _, value = source_value("AC 1 0", SourceKind.VOLTAGE)
    assert isinstance(value, AcVoltage)
    assert value.magnitude == q(1, Unit.VOLTAGE)


def test_source_value_pwl_for_current_source():
    _, value = source_value("PWL(0 0 1u 5)", SourceKind.CURRENT)
    assert isinstance(value, PwlVoltage)
    assert len(value.points) == 2


def test_dc_source_round_trip():
    original = Source("1", "in", "0", q(5, Unit.VOLTAGE))
    _, parsed = source(original.to_spice())
    assert parsed.name == "1"
    assert parsed.node_pos == "in"
    assert parsed.value == original.value


def test_pulse_round_trip():
    pulse = PulseVoltage.clock(q(1.8, Unit.VOLTAGE), q(10, Unit.TIME, Suffix.NANO), q(1, Unit.TIME, Suffix.NANO))
    _, parsed = pulse_voltage(pulse.to_spice())
    assert parsed.v1 == pulse.v1
    assert parsed.width == pulse.width
    assert parsed.period == pulse.period