"""Line plots of simulation results written to image files."""

from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Sequence

from matplotlib.figure import Figure

_DPI = 100


class DrawerError(Exception):
    """Raised when a plot cannot be built or written."""

    def __init__(self, stage: str, detail: str) -> None:
        super().__init__(f"{stage} error: {detail}")
        self.stage = stage
        self.detail = detail


@contextmanager
def _stage(stage: str) -> Iterator[None]:
    try:
        yield
    except DrawerError:
        raise
    except Exception as exc:
        raise DrawerError(stage, str(exc)) from exc


def _x_range(x: Sequence[float]) -> tuple[float, float]:
    return (x[0] if x else 0.0, x[-1] if x else 1.0)


def _y_range(values) -> tuple[float, float]:
    values = list(values)
    low, high = min(values, default=math.inf), max(values, default=-math.inf)
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ValueError("no finite data to set the y range")
    return low, high


@dataclass
class Drawer:
    split: bool = False
    width: int = 1280
    height: int = 720
    background_color: str = "white"
    line_color: str = "red"
    font: tuple[str, int] = ("sans-serif", 15)

    def draw(self, x_label, y_label, x, ys, path) -> None:
        if self.split:
            self.draw_split(x_label, y_label, x, ys, path)
        else:
            self.draw_combined(x_label, y_label, x, ys, path)

    def _figure(self) -> Figure:
        with _stage("fill background"):
            return Figure(
                figsize=(self.width / _DPI, self.height / _DPI),
                dpi=_DPI,
                facecolor=self.background_color,
            )

    def _save(self, fig: Figure, path) -> None:
        with _stage("draw chart"):
            fig.savefig(path, dpi=_DPI, facecolor=self.background_color)

    def draw_split(self, x_label, y_label, x, ys, path) -> None:
        """One chart per signal, stacked vertically."""
        fig = self._figure()
        x = list(x)
        with _stage("build cartesian"):
            axes = fig.subplots(max(len(ys), 1), 1, squeeze=False)[:, 0]
        family, size = self.font
        for (label, values), ax in zip(ys, axes):
            with _stage("build cartesian"):
                ax.set_title(label, fontfamily=family, fontsize=size)
                ax.set_xlim(*_x_range(x))
                ax.set_ylim(*_y_range(values))
                ax.set_xlabel(x_label)
                ax.set_ylabel(y_label)
            with _stage(f"draw line {label}"):
                ax.plot(x, list(values), color=self.line_color)
        self._save(fig, path)

    def draw_combined(self, x_label, y_label, x, ys, path) -> None:
        """All signals on a single chart with a legend."""
        fig = self._figure()
        x = list(x)
        family, size = self.font
        with _stage("build cartesian"):
            ax = fig.add_subplot(1, 1, 1)
            ax.set_title("Combined Plot", fontfamily=family, fontsize=size)
            ax.set_xlim(*_x_range(x))
            ax.set_ylim(*_y_range(v for _, values in ys for v in values))
            ax.set_xlabel(x_label)
            ax.set_ylabel(y_label)
        for label, values in ys:
            with _stage(f"draw line {label}"):
                ax.plot(x, list(values), label=label, alpha=0.9)
        with _stage("draw chart"):
            ax.legend(edgecolor="black")
        self._save(fig, path)