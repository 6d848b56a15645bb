"""Engineering numbers with SI suffixes, unit-tagged quantities and simulation values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union

Real = Union[int, float]


class Suffix(Enum):
    """Engineering-notation multiplier attached to a number."""

    NONE = ("", 1.0)
    KILO = ("k", 1e3)
    MEGA = ("M", 1e6)
    MILLI = ("m", 1e-3)
    MICRO = ("u", 1e-6)
    NANO = ("n", 1e-9)
    PICO = ("p", 1e-12)

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def factor(self) -> float:
        return self.value[1]


def _format_float(value: float) -> str:
    if math.isfinite(value) and float(value).is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(float(value))


def _close(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-12, abs_tol=1e-30)


@dataclass(frozen=True, eq=False)
class Number:
    """A plain value with an engineering suffix, such as ``1.5k``."""

    value: float
    suffix: Suffix = Suffix.NONE

    def to_float(self) -> float:
        return self.value * self.suffix.factor

    def to_spice(self) -> str:
        if self.suffix is Suffix.MEGA:
            return f"{_format_float(self.value)}Meg"
        return str(self)

    def __str__(self) -> str:
        return f"{_format_float(self.value)}{self.suffix.symbol}"

    def __float__(self) -> float:
        return self.to_float()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Number):
            return _close(self.to_float(), other.to_float())
        if isinstance(other, (int, float)):
            return _close(self.to_float(), float(other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: Number) -> bool:
        return self.to_float() < float(other)

    def __le__(self, other: Number) -> bool:
        return self.to_float() <= float(other)

    def __gt__(self, other: Number) -> bool:
        return self.to_float() > float(other)

    def __ge__(self, other: Number) -> bool:
        return self.to_float() >= float(other)


def _as_number(value: Number | Real) -> Number:
    if isinstance(value, Number):
        return value
    if isinstance(value, (int, float)):
        return Number(float(value))
    raise TypeError(f"cannot use {value!r} as a number")


class Unit(Enum):
    """Physical unit of a quantity, valued by its printed symbol."""

    VOLTAGE = "V"
    CURRENT = "A"
    RESISTANCE = "Ω"
    CAPACITANCE = "F"
    INDUCTANCE = "H"
    TIME = "s"
    FREQUENCY = "Hz"
    ANGLE = "rad"
    LENGTH = "m"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class Quantity:
    """A number carrying a physical unit."""

    number: Number
    unit: Unit

    @classmethod
    def of(cls, value: Quantity | Number | Real, unit: Unit) -> Quantity:
        """Build a quantity of ``unit`` from a quantity, a number or a float."""
        if isinstance(value, Quantity):
            if value.unit is not unit:
                raise TypeError(f"expected a {unit.name.lower()}, got a {value.unit.name.lower()}")
            return value
        return cls(_as_number(value), unit)

    def to_float(self) -> float:
        return self.number.to_float()

    def to_spice(self) -> str:
        return f"{self.number.to_spice()}{self.unit.symbol}"

    def __str__(self) -> str:
        return f"{self.number}{self.unit.symbol}"

    def __float__(self) -> float:
        return self.to_float()

    def _same(self, other: object) -> Quantity:
        if not isinstance(other, Quantity):
            raise TypeError(f"expected a quantity, got {other!r}")
        if other.unit is not self.unit:
            raise TypeError(f"unit mismatch: {self.unit.name} and {other.unit.name}")
        return other

    def _make(self, value: float) -> Quantity:
        return Quantity(Number(value), self.unit)

    def __add__(self, other: Quantity) -> Quantity:
        return self._make(self.to_float() + self._same(other).to_float())

    def __sub__(self, other: Quantity) -> Quantity:
        return self._make(self.to_float() - self._same(other).to_float())

    def __mul__(self, factor: Real) -> Quantity:
        if isinstance(factor, (Quantity, Number)):
            return NotImplemented
        return self._make(self.to_float() * float(factor))

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Quantity):
            return self.to_float() / self._same(other).to_float()
        return self._make(self.to_float() / float(other))

    def __mod__(self, other: Quantity) -> Quantity:
        return self._make(math.fmod(self.to_float(), self._same(other).to_float()))

    def __neg__(self) -> Quantity:
        return self._make(-self.to_float())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return other.unit is self.unit and _close(self.to_float(), other.to_float())

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: Quantity) -> bool:
        return self.to_float() < self._same(other).to_float()

    def __le__(self, other: Quantity) -> bool:
        return self.to_float() <= self._same(other).to_float()

    def __gt__(self, other: Quantity) -> bool:
        return self.to_float() > self._same(other).to_float()

    def __ge__(self, other: Quantity) -> bool:
        return self.to_float() >= self._same(other).to_float()


@dataclass(frozen=True)
class Value:
    """A real or complex simulation value; ``im`` is None for real values."""

    re: Number
    im: Number | None = None

    @property
    def is_complex(self) -> bool:
        return self.im is not None

    @classmethod
    def real(cls, v: Number | Real) -> Value:
        return cls(_as_number(v))

    @classmethod
    def complex(cls, re: Number | Real, im: Number | Real) -> Value:
        return cls(_as_number(re), _as_number(im))


def extract_numbers(values: Iterable[Value]) -> list[Number] | None:
    """All real parts, or None if any value is complex."""
    values = list(values)
    if any(v.is_complex for v in values):
        return None
    return [v.re for v in values]


def extract_complexes(values: Iterable[Value]) -> list[tuple[Number, Number]] | None:
    """All (re, im) pairs, or None if any value is real."""
    values = list(values)
    if not all(v.is_complex for v in values):
        return None
    return [(v.re, v.im) for v in values]


def extract_units(values: Iterable[Value], unit: Unit) -> list[Quantity] | None:
    """Real values as quantities of ``unit``, or None if any value is complex."""
    numbers = extract_numbers(values)
    if numbers is None:
        return None
    return [Quantity(n, unit) for n in numbers]


def extract_unit_complexes(
    values: Iterable[Value], unit: Unit
) -> list[tuple[Quantity, Quantity]] | None:
    """Complex values as (re, im) quantity pairs, or None if any value is real."""
    pairs = extract_complexes(values)
    if pairs is None:
        return None
    return [(Quantity(re, unit), Quantity(im, unit)) for re, im in pairs]