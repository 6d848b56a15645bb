"""Simulation and measurement control statements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from spicekit.units import Number, Quantity, Unit, _as_number


def _optional_time(value) -> Quantity | None:
    return None if value is None else Quantity.of(value, Unit.TIME)


@dataclass
class IncludeCommand:
    """An ``.include`` of another netlist file."""

    path: str

    def to_spice(self) -> str:
        return f".include {self.path}"


@dataclass
class DcCommand:
    """A DC sweep of a source from ``start`` to ``stop`` by ``step``."""

    src_name: str
    start: Quantity
    stop: Quantity
    step: Quantity

    def __post_init__(self) -> None:
        self.start = Quantity.of(self.start, Unit.VOLTAGE)
        self.stop = Quantity.of(self.stop, Unit.VOLTAGE)
        self.step = Quantity.of(self.step, Unit.VOLTAGE)

    def to_spice(self) -> str:
        return f".DC {self.src_name} {self.start} {self.stop} {self.step}"


class AcSweepType(Enum):
    """How frequency points of an AC sweep are spaced."""

    LIN = "LIN"
    DEC = "DEC"
    OCT = "OCT"

    def to_spice_str(self) -> str:
        return self.value


@dataclass
class AcCommand:
    """A small-signal AC frequency sweep."""

    sweep_type: AcSweepType
    points: int
    f_start: Quantity
    f_stop: Quantity

    def __post_init__(self) -> None:
        self.f_start = Quantity.of(self.f_start, Unit.FREQUENCY)
        self.f_stop = Quantity.of(self.f_stop, Unit.FREQUENCY)

    @classmethod
    def linear(cls, points, f_start, f_stop) -> AcCommand:
        return cls(AcSweepType.LIN, points, f_start, f_stop)

    @classmethod
    def dec(cls, points, f_start, f_stop) -> AcCommand:
        return cls(AcSweepType.DEC, points, f_start, f_stop)

    @classmethod
    def oct(cls, points, f_start, f_stop) -> AcCommand:
        return cls(AcSweepType.OCT, points, f_start, f_stop)

    def to_spice(self) -> str:
        return (
            f".AC {self.sweep_type.to_spice_str()} {self.points} "
            f"{self.f_start.to_spice()} {self.f_stop.to_spice()}"
        )


@dataclass
class TranCommand:
    """A transient analysis."""

    t_step: Quantity
    t_stop: Quantity
    t_start: Quantity | None = None
    t_max: Quantity | None = None
    uic: bool = False

    def __post_init__(self) -> None:
        self.t_step = Quantity.of(self.t_step, Unit.TIME)
        self.t_stop = Quantity.of(self.t_stop, Unit.TIME)
        self.t_start = _optional_time(self.t_start)
        self.t_max = _optional_time(self.t_max)

    def to_spice(self) -> str:
        parts = [".TRAN", str(self.t_step), str(self.t_stop)]
        if self.t_start is not None:
            parts.append(str(self.t_start))
        if self.t_max is not None:
            if self.t_start is None:
                parts.append("0")
            parts.append(str(self.t_max))
        if self.uic:
            parts.append("UIC")
        return " ".join(parts)


SimCommand = Union[DcCommand, AcCommand, TranCommand]


class EdgeType(Enum):
    RISE = "RISE"
    FALL = "FALL"


class MeasureFunction(Enum):
    AVG = "AVG"
    RMS = "RMS"
    MIN = "MIN"
    MAX = "MAX"
    PP = "PP"
    DERIV = "DERIV"
    INTEGRATE = "INTEGRATE"


class AnalysisType(Enum):
    DC = "DC"
    AC = "AC"
    TRAN = "TRAN"


class OutputSuffix(Enum):
    MAGNITUDE = "M"
    DECIBEL = "DB"
    PHASE = "P"
    REAL = "R"
    IMAG = "I"


@dataclass
class VoltageOutput:
    """``V(node1)`` or ``V(node1,node2)``; ``node2`` None means ground."""

    node1: str
    node2: str | None = None
    suffix: OutputSuffix | None = None


@dataclass
class CurrentOutput:
    """``I(element)``, the current through a named element."""

    element_name: str
    suffix: OutputSuffix | None = None


OutputVariable = Union[VoltageOutput, CurrentOutput]


@dataclass
class TrigTargCondition:
    """The n-th rising or falling crossing of ``value`` by ``variable``."""

    variable: OutputVariable
    value: Number
    edge: EdgeType
    number: int

    def __post_init__(self) -> None:
        self.value = _as_number(self.value)


@dataclass
class FindWhenCondition:
    variable: OutputVariable
    value: Number

    def __post_init__(self) -> None:
        self.value = _as_number(self.value)


@dataclass
class ExpressionCondition:
    variable: OutputVariable
    expression: str


@dataclass
class MeasureRise:
    """``.MEAS <analysis> <name> TRIG ... TARG ...``"""

    name: str
    analysis: AnalysisType
    trig: TrigTargCondition
    targ: TrigTargCondition


@dataclass
class MeasureBasicStat:
    """``.MEAS <analysis> <name> <stat> <var> FROM=.. TO=..``"""

    name: str
    analysis: AnalysisType
    stat: MeasureFunction
    variable: OutputVariable
    from_: Quantity
    to: Quantity

    def __post_init__(self) -> None:
        self.from_ = Quantity.of(self.from_, Unit.TIME)
        self.to = Quantity.of(self.to, Unit.TIME)


@dataclass
class MeasureFindWhen:
    """``.MEAS <analysis> <name> FIND <var> WHEN <var>=<value>``"""

    name: str
    analysis: AnalysisType
    variable: OutputVariable
    when: FindWhenCondition


MeasureCommand = Union[MeasureRise, MeasureBasicStat, MeasureFindWhen]