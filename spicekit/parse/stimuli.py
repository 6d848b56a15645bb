"""Parsers for independent source lines and their values (DC, AC, SIN, PWL, PULSE)."""

from __future__ import annotations

from spicekit.parse.lexer import (
    Parsed,
    ParseError,
    _alt,
    _char,
    _committed,
    _hws,
    _opt,
    _tag_no_case,
    angle_number,
    current_number,
    frequency_number,
    identifier,
    node,
    number,
    time_number,
    voltage_number,
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
from spicekit.units import Number, Quantity, Unit

_SOURCE_KINDS = {"V": SourceKind.VOLTAGE, "I": SourceKind.CURRENT}

_dc_keyword = _opt(_alt(_hws(_tag_no_case("DC=")), _hws(_tag_no_case("DC"))))
_ac_keyword = _opt(_alt(_hws(_tag_no_case("AC=")), _hws(_tag_no_case("AC"))))
_open = _hws(_char("("))
_close = _hws(_char(")"))


def source(text: str) -> Parsed:
    """``Vname N+ N- value`` or ``Iname N+ N- value``."""
    rest, name = _hws(identifier)(text)
    kind = _SOURCE_KINDS.get(name[:1].upper())
    if kind is None:
        raise ParseError(rest, "Source must begin with V or I")
    with _committed():
        rest, node_pos = _hws(node)(rest)
        rest, node_neg = _hws(node)(rest)
        rest, value = _hws(lambda t: source_value(t, kind))(rest)
    return rest, Source(name[1:], node_pos, node_neg, value)


def source_value(text: str, kind: SourceKind) -> Parsed:
    """The value part of a source line, read as a voltage or current source."""
    if kind is SourceKind.VOLTAGE:
        parser = _alt(dc_voltage, ac_voltage, sine_voltage, pwl_voltage, pulse_voltage)
    else:
        parser = _alt(dc_current, ac_current, sine_voltage, pwl_voltage, pulse_voltage)
    return parser(text)


def _dc(text: str, value_parser) -> Parsed:
    rest, keyword = _dc_keyword(text)
    if keyword is None:
        return _hws(value_parser)(rest)
    with _committed():
        return _hws(value_parser)(rest)


def dc_voltage(text: str) -> Parsed:
    """``[DC|DC=] value`` as a voltage."""
    return _dc(text, voltage_number)


def dc_current(text: str) -> Parsed:
    """``[DC|DC=] value`` as a current."""
    return _dc(text, current_number)


def _ac(text: str, magnitude_parser) -> tuple[str, Quantity, Quantity]:
    rest, keyword = _ac_keyword(text)

    def body(t: str):
        t, magnitude = _hws(magnitude_parser)(t)
        t, phase = _hws(angle_number)(t)
        return t, magnitude, phase

    if keyword is None:
        return body(rest)
    with _committed():
        return body(rest)


def ac_voltage(text: str) -> Parsed:
    """``[AC|AC=] magnitude phase`` for a voltage source."""
    rest, magnitude, phase = _ac(text, voltage_number)
    return rest, AcVoltage(magnitude, phase)


def ac_current(text: str) -> Parsed:
    """``[AC|AC=] magnitude phase`` for a current source."""
    rest, magnitude, phase = _ac(text, current_number)
    return rest, AcCurrent(magnitude, phase)


def sine_voltage(text: str) -> Parsed:
    """``SIN(vo va freq [td [damping [phase]]])``"""
    rest, _ = _hws(_tag_no_case("SIN"))(text)
    with _committed():
        rest, _ = _open(rest)
        rest, vo = _hws(voltage_number)(rest)
        rest, va = _hws(voltage_number)(rest)
        rest, freq = _hws(frequency_number)(rest)
        rest, delay = _opt(_hws(time_number))(rest)
        rest, damping = _opt(_hws(frequency_number))(rest)
        rest, phase = _opt(_hws(number))(rest)
        rest, _ = _close(rest)
    return rest, SineVoltage(
        vo=vo,
        va=va,
        freq_hz=freq,
        delay=delay if delay is not None else Quantity.of(0, Unit.TIME),
        damping=damping if damping is not None else Quantity.of(0, Unit.FREQUENCY),
        phase_deg=phase if phase is not None else Number(0),
    )


def pwl_voltage(text: str) -> Parsed:
    """``PWL(t1 v1 t2 v2 ...)``"""
    rest, _ = _hws(_tag_no_case("PWL"))(text)
    points = []
    with _committed():
        rest, _ = _open(rest)
        while True:
            rest, t = _hws(time_number)(rest)
            rest, v = _hws(voltage_number)(rest)
            points.append((t, v))
            rest, end = _opt(_close)(rest)
            if end is not None:
                break
    return rest, PwlVoltage(points)


def pulse_voltage(text: str) -> Parsed:
    """``PULSE(v0 v1 td tr tf tw period)``"""
    rest, _ = _hws(_tag_no_case("PULSE"))(text)
    with _committed():
        rest, _ = _open(rest)
        rest, v0 = _hws(voltage_number)(rest)
        rest, v1 = _hws(voltage_number)(rest)
        times = []
        for _ in range(5):
            rest, t = _hws(time_number)(rest)
            times.append(t)
        rest, _ = _close(rest)
    delay, rise, fall, width, period = times
    return rest, PulseVoltage(v0, v1, delay, rise, fall, width, period)