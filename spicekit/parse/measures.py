"""Parsers for ``.MEAS`` measurement statements."""

from __future__ import annotations

from spicekit.control import (
    AnalysisType,
    CurrentOutput,
    EdgeType,
    FindWhenCondition,
    MeasureBasicStat,
    MeasureFindWhen,
    MeasureFunction,
    MeasureRise,
    OutputSuffix,
    TrigTargCondition,
    VoltageOutput,
)
from spicekit.parse.lexer import (
    Parsed,
    ParseError,
    _alt,
    _committed,
    _hws,
    _tag_no_case,
    identifier,
    number,
    time_number,
    unsigned_int,
)

_ANALYSES = {"TRAN": AnalysisType.TRAN, "AC": AnalysisType.AC, "DC": AnalysisType.DC}
_FUNCTIONS = {f.value: f for f in MeasureFunction}
_EDGES = {"RISE": EdgeType.RISE, "FALL": EdgeType.FALL}
_SUFFIXES = (
    ("M", OutputSuffix.MAGNITUDE),
    ("DB", OutputSuffix.DECIBEL),
    ("P", OutputSuffix.PHASE),
    ("R", OutputSuffix.REAL),
    ("I", OutputSuffix.IMAG),
)


def _keyword(table: dict):
    parser = _hws(_alt(*(_tag_no_case(tag) for tag in table)))

    def run(text: str) -> Parsed:
        rest, word = parser(text)
        return rest, table[word.upper()]

    return run


_analysis_type = _keyword(_ANALYSES)
_measure_function = _keyword(_FUNCTIONS)
_edge_type = _keyword(_EDGES)


def _tag(tag: str):
    return _hws(_tag_no_case(tag))


def _output_variable(text: str) -> Parsed:
    rest, kind = _hws(_alt(_tag_no_case("V"), _tag_no_case("I")))(text)
    rest, _ = _tag("(")(rest)
    end = rest.find(")")
    if end < 0:
        raise ParseError(rest, "expected ')'")
    var, rest = rest[:end], rest[end + 1:]
    rest = _hws(lambda t: (t, None))(rest)[0]

    suffix = next((s for tail, s in _SUFFIXES if var.endswith(tail)), None)
    if kind.upper() == "V":
        parts = [p.strip() for p in var.split(",")]
        node2 = parts[1] if len(parts) > 1 else None
        return rest, VoltageOutput(parts[0], node2, suffix)
    return rest, CurrentOutput(var, suffix)


def _trig_targ_condition(text: str) -> Parsed:
    rest, variable = _hws(_output_variable)(text)
    rest, _ = _tag("VAL=")(rest)
    rest, value = _hws(number)(rest)
    rest, edge = _edge_type(rest)
    rest, _ = _tag("=")(rest)
    rest, count = _hws(unsigned_int)(rest)
    return rest, TrigTargCondition(variable, value, edge, count)


def _find_when_condition(text: str) -> Parsed:
    rest, variable = _hws(_output_variable)(text)
    rest, _ = _tag("=")(rest)
    rest, value = _hws(number)(rest)
    return rest, FindWhenCondition(variable, value)


def _measure_rise(text: str, name: str, analysis: AnalysisType) -> Parsed:
    rest, _ = _tag("TRIG")(text)
    with _committed():
        rest, trig = _hws(_trig_targ_condition)(rest)
        rest, _ = _tag("TARG")(rest)
        rest, targ = _hws(_trig_targ_condition)(rest)
    return rest, MeasureRise(name, analysis, trig, targ)


def _measure_basic_stat(text: str, name: str, analysis: AnalysisType) -> Parsed:
    rest, stat = _measure_function(text)
    with _committed():
        rest, variable = _hws(_output_variable)(rest)
        rest, _ = _tag("FROM=")(rest)
        rest, start = _hws(time_number)(rest)
        rest, _ = _tag("TO=")(rest)
        rest, stop = _hws(time_number)(rest)
    return rest, MeasureBasicStat(
        name=name, analysis=analysis, stat=stat, variable=variable, from_=start, to=stop
    )


def _measure_find_when(text: str, name: str, analysis: AnalysisType) -> Parsed:
    rest, _ = _tag("FIND")(text)
    with _committed():
        rest, variable = _hws(_output_variable)(rest)
        rest, _ = _tag("WHEN")(rest)
        rest, condition = _hws(_find_when_condition)(rest)
    return rest, MeasureFindWhen(name, analysis, variable, condition)


def measure_command(text: str) -> Parsed:
    """``.MEAS <analysis> <name> ...`` in rise, statistic or find-when form."""
    rest, _ = _tag(".MEAS")(text)
    with _committed():
        rest, analysis = _analysis_type(rest)
        rest, name = _hws(identifier)(rest)
        return _alt(
            lambda t: _measure_rise(t, name, analysis),
            lambda t: _measure_basic_stat(t, name, analysis),
            lambda t: _measure_find_when(t, name, analysis),
        )(rest)