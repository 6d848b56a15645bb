"""Errors raised when querying or plotting simulation results."""

from __future__ import annotations

from spicekit.draw import DrawerError
from spicekit.units import Quantity


class AnalysisError(Exception):
    """Base class of analysis query and plotting errors."""


class NoSuchNode(AnalysisError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No node {name} exits")
        self.name = name


class NoSuchBranch(AnalysisError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No node {name} exits")
        self.name = name


class TimeOutOfRange(AnalysisError):
    def __init__(self, time: Quantity) -> None:
        super().__init__(f"Time '{time} 'out of range")
        self.time = time


class InnerError(AnalysisError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Inner error: {detail}")
        self.detail = detail


class PlotError(AnalysisError):
    def __init__(self, error: DrawerError) -> None:
        super().__init__(f"Plot error: {error}")
        self.error = error