"""Results of operating-point, DC sweep and AC sweep analyses."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass, field
from itertools import pairwise
from typing import Callable, Iterable

from spicekit.draw import Drawer, DrawerError
from spicekit.probe.errors import NoSuchNode, PlotError
from spicekit.units import Number, Quantity, Unit


def _plot(drawer: Drawer, x_label: str, y_label: str, x, signals, path) -> None:
    try:
        drawer.draw(x_label, y_label, x, signals, path)
    except DrawerError as exc:
        raise PlotError(exc) from exc


def _log10(value: float) -> float:
    if value > 0:
        return math.log10(value)
    return -math.inf if value == 0 else math.nan


@dataclass
class OpAnalysis:
    """Operating point; names are looked up in lower case."""

    nodes: dict[str, Quantity] = field(default_factory=dict)
    branches: dict[str, Quantity] = field(default_factory=dict)
    internal_parameters: dict[str, Number] = field(default_factory=dict)

    def get_node(self, name: str) -> Quantity | None:
        return self.nodes.get(name.lower())

    def get_branch(self, name: str) -> Quantity | None:
        return self.branches.get(name.lower())

    def get_internal(self, name: str) -> Number | None:
        return self.internal_parameters.get(name.lower())


@dataclass
class DcAnalysis:
    """A DC sweep; ``unit`` is the unit of the swept source value."""

    sweep: list[Quantity] = field(default_factory=list)
    nodes: dict[str, list[Quantity]] = field(default_factory=dict)
    branches: dict[str, list[Quantity]] = field(default_factory=dict)
    internal_parameters: dict[str, list[Number]] = field(default_factory=dict)
    unit: Unit = Unit.VOLTAGE

    def get_node(self, name: str) -> list[Quantity] | None:
        return self.nodes.get(name)

    def get_branch(self, name: str) -> list[Quantity] | None:
        return self.branches.get(name)

    def get_internal(self, name: str) -> list[Number] | None:
        return self.internal_parameters.get(name)

    def get_voltage_at(self, node: str, when) -> Quantity | None:
        """Interpolated voltage of ``node`` at sweep value ``when``, or None."""
        values = self.nodes.get(node)
        if values is None or len(values) != len(self.sweep) or len(values) < 2:
            return None
        when = Quantity.of(when, self.unit)
        for (t0, t1), (v0, v1) in zip(pairwise(self.sweep), pairwise(values)):
            if t0 <= when <= t1:
                ratio = (when - t0) / (t1 - t0)
                return v0 + (v1 - v0) * ratio
        return None

    def _draw(self, drawer, y_label, series, path, predicate) -> None:
        signals = [
            (name, [v.to_float() for v in values])
            for name, values in series.items()
            if predicate(name)
        ]
        x = [s.to_float() for s in self.sweep]
        _plot(drawer, self.unit.symbol, y_label, x, signals, path)

    def draw_all_nodes(self, drawer: Drawer, path) -> None:
        self.draw_nodes_filter(drawer, path, lambda _: True)

    def draw_nodes(self, drawer: Drawer, nodes: Iterable[str], path) -> None:
        wanted = set(nodes)
        self.draw_nodes_filter(drawer, path, lambda name: name in wanted)

    def draw_nodes_filter(self, drawer: Drawer, path, predicate: Callable[[str], bool]) -> None:
        self._draw(drawer, "V", self.nodes, path, predicate)

    def draw_all_branches(self, drawer: Drawer, path) -> None:
        self.draw_branches_filter(drawer, path, lambda _: True)

    def draw_branches(self, drawer: Drawer, branches: Iterable[str], path) -> None:
        wanted = set(branches)
        self.draw_branches_filter(drawer, path, lambda name: name in wanted)

    def draw_branches_filter(
        self, drawer: Drawer, path, predicate: Callable[[str], bool]
    ) -> None:
        self._draw(drawer, "I", self.branches, path, predicate)


@dataclass
class AcAnalysis:
    """An AC sweep; node voltages and branch currents are complex phasors."""

    frequency: list[Quantity] = field(default_factory=list)
    nodes: dict[str, list[complex]] = field(default_factory=dict)
    branches: dict[str, list[complex]] = field(default_factory=dict)
    internal_parameters: dict[str, list[complex]] = field(default_factory=dict)

    def get_node(self, name: str) -> list[complex] | None:
        return self.nodes.get(name)

    def get_branch(self, name: str) -> list[complex] | None:
        return self.branches.get(name)

    def _pair(self, input_node: str, output_node: str):
        inputs = self.get_node(input_node)
        if inputs is None:
            raise NoSuchNode(input_node)
        outputs = self.get_node(output_node)
        if outputs is None:
            raise NoSuchNode(output_node)
        return zip(inputs, outputs)

    def _log_frequency(self) -> list[float]:
        return [_log10(f.to_float()) for f in self.frequency]

    def draw_gain(self, drawer: Drawer, input_node: str, output_node: str, path) -> None:
        """Plot 20*log10(|out|/|in|) against log10 of the frequency."""
        values = []
        for vin, vout in self._pair(input_node, output_node):
            ratio = abs(vout) / abs(vin) if abs(vin) else math.inf
            values.append(20.0 * _log10(ratio))
        _plot(drawer, "frequency", "Gain", self._log_frequency(), [("Gain", values)], path)

    def draw_phase(self, drawer: Drawer, input_node: str, output_node: str, path) -> None:
        """Plot the phase of ``out`` relative to ``in`` against log10 of the frequency."""
        values = [
            cmath.phase(vout) - cmath.phase(vin)
            for vin, vout in self._pair(input_node, output_node)
        ]
        _plot(drawer, "frequency", "Phase", self._log_frequency(), [("Phase", values)], path)