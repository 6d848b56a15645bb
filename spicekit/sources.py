"""Independent voltage and current sources and their waveforms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from spicekit.units import Number, Quantity, Unit, _as_number


def _v(value) -> Quantity:
    return Quantity.of(value, Unit.VOLTAGE)


def _t(value) -> Quantity:
    return Quantity.of(value, Unit.TIME)


@dataclass
class AcVoltage:
    magnitude: Quantity
    phase_deg: Quantity

    def __post_init__(self) -> None:
        self.magnitude = _v(self.magnitude)
        self.phase_deg = Quantity.of(self.phase_deg, Unit.ANGLE)

    def to_spice(self) -> str:
        return f"AC {self.magnitude} {self.phase_deg}"


@dataclass
class AcCurrent:
    magnitude: Quantity
    phase_deg: Quantity

    def __post_init__(self) -> None:
        self.magnitude = Quantity.of(self.magnitude, Unit.CURRENT)
        self.phase_deg = Quantity.of(self.phase_deg, Unit.ANGLE)

    def to_spice(self) -> str:
        return f"AC {self.magnitude} {self.phase_deg}"


@dataclass
class SineVoltage:
    vo: Quantity
    va: Quantity
    freq_hz: Quantity
    delay: Quantity = field(default_factory=lambda: _t(0))
    damping: Quantity = field(default_factory=lambda: Quantity.of(0, Unit.FREQUENCY))
    phase_deg: Number = field(default_factory=lambda: Number(0))

    def __post_init__(self) -> None:
        self.vo = _v(self.vo)
        self.va = _v(self.va)
        self.freq_hz = Quantity.of(self.freq_hz, Unit.FREQUENCY)
        self.delay = _t(self.delay)
        self.damping = Quantity.of(self.damping, Unit.FREQUENCY)
        self.phase_deg = _as_number(self.phase_deg)

    @classmethod
    def sin(cls, amplitude, frequency) -> SineVoltage:
        """A * sin(2*pi*f*t)."""
        return cls(vo=0, va=amplitude, freq_hz=frequency)

    @classmethod
    def cos(cls, amplitude, frequency) -> SineVoltage:
        """A * cos(2*pi*f*t), as a sine delayed by a negative quarter period."""
        freq = Quantity.of(frequency, Unit.FREQUENCY)
        period = 1.0 / freq.to_float()
        return cls(vo=0, va=amplitude, freq_hz=freq, delay=-0.25 * period)

    def period(self) -> Quantity:
        return _t(1.0 / self.freq_hz.to_float())

    def voltage_at(self, time) -> Quantity:
        time = _t(time)
        if time < self.delay:
            return self.vo
        td = (time - self.delay).to_float()
        envelope = math.exp(-self.damping.to_float() * td)
        omega = 2.0 * math.pi * self.freq_hz.to_float()
        sine = math.sin(omega * td + self.phase_deg.to_float() / 360.0)
        return self.vo + self.va * (envelope * sine)

    def to_spice(self) -> str:
        return (
            f"SIN({self.vo} {self.va} {self.freq_hz} {self.delay} "
            f"{self.damping} {self.phase_deg})"
        )


@dataclass
class PwlVoltage:
    points: list[tuple[Quantity, Quantity]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.points = [(_t(t), _v(v)) for t, v in self.points]

    def voltage_at(self, time) -> Quantity:
        time = _t(time)
        if not self.points:
            return _v(0)
        if len(self.points) == 1:
            return self.points[0][1]
        for (t0, v0), (t1, v1) in zip(self.points, self.points[1:]):
            if t0 <= time <= t1:
                ratio = (time - t0) / (t1 - t0)
                return v0 + (v1 - v0) * ratio
        return self.points[-1][1]

    def to_spice(self) -> str:
        return "PWL(" + " ".join(f"{t} {v}" for t, v in self.points) + ")"


@dataclass
class PulseVoltage:
    v0: Quantity
    v1: Quantity
    delay: Quantity
    rise: Quantity
    fall: Quantity
    width: Quantity
    period: Quantity

    def __post_init__(self) -> None:
        self.v0, self.v1 = _v(self.v0), _v(self.v1)
        self.delay, self.rise, self.fall = _t(self.delay), _t(self.rise), _t(self.fall)
        self.width, self.period = _t(self.width), _t(self.period)

    @classmethod
    def clock(cls, vdd, period, slew) -> PulseVoltage:
        """A 0-to-vdd square clock with equal rise/fall slew and 50% duty."""
        period, slew = _t(period), _t(slew)
        return cls(
            v0=0, v1=vdd, delay=0, rise=slew, fall=slew,
            width=(period - slew * 2.0) / 2.0, period=period,
        )

    def voltage_at(self, time) -> Quantity:
        time = _t(time)
        if time <= self.delay:
            return self.v0
        t = (time - self.delay) % self.period
        delta_v = self.v1 - self.v0
        if t.to_float() < 0.0:
            return self.v0
        if t < self.rise:
            return self.v0 + delta_v * (t / self.rise)
        if t < self.rise + self.width:
            return self.v1
        if t < self.rise + self.width + self.fall:
            return self.v1 - delta_v * ((t - self.rise - self.width) / self.fall)
        return self.v0

    def to_spice(self) -> str:
        return (
            f"PULSE({self.v0} {self.v1} {self.delay} {self.rise} "
            f"{self.fall} {self.width} {self.period})"
        )


class SourceKind(Enum):
    VOLTAGE = "V"
    CURRENT = "I"


SourceValue = Union[Quantity, AcVoltage, AcCurrent, SineVoltage, PwlVoltage, PulseVoltage]


@dataclass
class Source:
    """An independent source; a DC value is a voltage or current quantity."""

    name: str
    node_pos: str
    node_neg: str
    value: SourceValue

    def to_spice(self) -> str:
        value = self.value
        if isinstance(value, Quantity):
            if value.unit is Unit.VOLTAGE:
                kind = SourceKind.VOLTAGE
            elif value.unit is Unit.CURRENT:
                kind = SourceKind.CURRENT
            else:
                raise TypeError(f"a DC source needs a voltage or current, got {value}")
            text = f"DC {value}"
        else:
            kind = SourceKind.CURRENT if isinstance(value, AcCurrent) else SourceKind.VOLTAGE
            text = value.to_spice()
        return f"{kind.value}{self.name} {self.node_pos} {self.node_neg} {text}"