"""Core types shared by logo finders: geometry, results and callbacks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class Point:
    """A point with floating-point coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class Rectangle:
    """A rectangle with floating-point coordinates."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Box:
    """An integer pixel box; a box at x == 0 means nothing was found."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def found(self):
        """Whether this box marks a detected logo."""
        return self.x != 0

    def __str__(self):
        return f"[{self.x} {self.y} {self.width} {self.height}]"


@dataclass(frozen=True)
class LogoFinderResult:
    """A logo found in the inclusive frame range start_frame..end_frame."""

    start_frame: int
    end_frame: int
    x: int
    y: int
    width: int
    height: int


class FindResult(NamedTuple):
    """Outcome of a search: whether it succeeded and an error message."""

    ok: bool
    message: str = ""


class LogoFinderCallback(ABC):
    """Receives the results of a logo search as they are produced."""

    @abstractmethod
    def success(self, result):
        """Called when a logo was found for a range of frames."""

    @abstractmethod
    def failure(self, start_frame, end_frame):
        """Called when no logo was found in start_frame..end_frame."""


class LogoFinder(ABC):
    """Base class for searches that report logos to a callback."""

    def __init__(self, callback, verbose=False):
        self.callback = callback
        self.verbose = verbose
        self.start_frame = 0
        self.frame_interval_min = 0
        self.extra_frames = 0
        # Size limits for a box to be considered a possible logo.
        self.min_logo_width = 47
        self.max_logo_width = 135
        self.min_logo_height = 9
        self.max_logo_height = 23

    @abstractmethod
    def find_logos(self):
        """Run the search and return a FindResult."""

    @abstractmethod
    def stop(self):
        """Ask a running search to stop as soon as possible."""