"""
Abstract Base Class for Field Engines

Engines own a persistent world Grid and advance it one frame per step().
The driver (viewer, headless runner, tests) only talks to this interface,
so engines can be swapped without touching it.
"""

from abc import ABC, abstractmethod

from .grid import Grid


class FieldEngine(ABC):
    """Base class for field engines."""

    engine_name = ""   # e.g. "stamp"
    engine_label = ""  # e.g. "Blob Stamp"

    def __init__(self, width=256, height=256):
        self.world = Grid.create(width, height)
        self.generation = 0

    @property
    def width(self):
        return self.world.width

    @property
    def height(self):
        return self.world.height

    @abstractmethod
    def step(self):
        """Advance one frame. Returns the display Grid."""

    def step_n(self, n):
        """Advance n frames. Returns the last display Grid."""
        frame = None
        for _ in range(n):
            frame = self.step()
        return frame

    @abstractmethod
    def set_params(self, **params):
        """Update engine parameters."""

    @abstractmethod
    def get_params(self):
        """Return dict of current parameter values."""

    def clear(self):
        """Zero the world."""
        self.world.data[:] = 0
        self.generation = 0

    @property
    def stats(self):
        """Return current world statistics."""
        data = self.world.data
        return {
            "generation": self.generation,
            "mass": float(data.sum()),
            "mean": float(data.mean()),
            "max": float(data.max()),
            "lit_pct": float((data > 0.01).sum()) / data.size * 100,
        }

    @classmethod
    @abstractmethod
    def get_slider_defs(cls):
        """Return list of slider definitions for a control panel.

        Each entry is a dict:
            {"key": "contrast", "label": "Contrast", "section": "OUTPUT",
             "min": 0.0, "max": 4.0, "default": 1.0, "fmt": ".2f"}
        """
