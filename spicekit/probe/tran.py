"""Results of a transient analysis: waveforms over time."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import pairwise
from typing import Callable, Iterable

from spicekit.draw import Drawer, DrawerError
from spicekit.probe.errors import (
    InnerError,
    NoSuchBranch,
    NoSuchNode,
    PlotError,
    TimeOutOfRange,
)
from spicekit.units import Number, Quantity, Unit


@dataclass
class TranAnalysis:
    """Node voltages, branch currents and internal values sampled at ``time``."""

    time: list[Quantity] = field(default_factory=list)
    nodes: dict[str, list[Quantity]] = field(default_factory=dict)
    branches: dict[str, list[Quantity]] = field(default_factory=dict)
    internal_parameters: dict[str, list[Number]] = field(default_factory=dict)

    def get_node(self, name: str) -> list[Quantity] | None:
        return self.nodes.get(name)

    def get_branch(self, name: str) -> list[Quantity] | None:
        return self.branches.get(name)

    def get_internal(self, name: str) -> list[Number] | None:
        return self.internal_parameters.get(name)

    def get_voltage_at(self, node: str, time) -> Quantity:
        """Linearly interpolated voltage of ``node`` at ``time``."""
        values = self.get_node(node)
        if values is None:
            raise NoSuchNode(node)
        return self._interpolate(values, time)

    def get_current_at(self, branch: str, time) -> Quantity:
        """Linearly interpolated current of ``branch`` at ``time``."""
        values = self.get_branch(branch)
        if values is None:
            raise NoSuchBranch(branch)
        return self._interpolate(values, time)

    def _interpolate(self, values: list[Quantity], time) -> Quantity:
        if len(values) != len(self.time) or len(values) < 2:
            raise InnerError("Bad value/time in tran analysis")
        time = Quantity.of(time, Unit.TIME)
        for (t0, t1), (v0, v1) in zip(pairwise(self.time), pairwise(values)):
            if t0 <= time <= t1:
                ratio = (time - t0) / (t1 - t0)
                return v0 + (v1 - v0) * ratio
        raise TimeOutOfRange(time)

    def _draw(
        self,
        drawer: Drawer,
        y_label: str,
        series: dict[str, list[Quantity]],
        path,
        predicate: Callable[[str], bool],
    ) -> None:
        signals = [
            (name, [v.to_float() for v in values])
            for name, values in series.items()
            if predicate(name)
        ]
        x = [t.to_float() for t in self.time]
        try:
            drawer.draw("time", y_label, x, signals, path)
        except DrawerError as exc:
            raise PlotError(exc) from exc

    def draw_all_nodes(self, drawer: Drawer, path) -> None:
        self.draw_nodes_filter(drawer, path, lambda _: True)

    def draw_nodes(self, drawer: Drawer, nodes: Iterable[str], path) -> None:
        wanted = set(nodes)
        self.draw_nodes_filter(drawer, path, lambda name: name in wanted)

    def draw_nodes_filter(self, drawer: Drawer, path, predicate) -> None:
        self._draw(drawer, "V", self.nodes, path, predicate)

    def draw_all_branches(self, drawer: Drawer, path) -> None:
        self.draw_branches_filter(drawer, path, lambda _: True)

    def draw_branches(self, drawer: Drawer, branches: Iterable[str], path) -> None:
        wanted = set(branches)
        self.draw_branches_filter(drawer, path, lambda name: name in wanted)

    def draw_branches_filter(self, drawer: Drawer, path, predicate) -> None:
        self._draw(drawer, "I", self.branches, path, predicate)