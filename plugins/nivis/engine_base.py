"""
Abstract Base Class for Simulation Engines

The viewer drives any engine that implements this interface: it pushes
kappa/delta in, steps it, injects seeds, and reads RGBA pixel buffers
back out. Grid dimensions reported by the engine are authoritative and
may differ from the requested size.
"""

from abc import ABC, abstractmethod


class SimulationEngine(ABC):
    """Base class for stepped field simulations."""

    engine_name = ""   # e.g. "snowflake"
    engine_label = ""  # e.g. "Kobayashi Snowflake"

    def __init__(self, width=100, height=100):
        self.width = width
        self.height = height
        self.kappa = 1.8
        self.delta = 0.02
        self.generation = 0

    @abstractmethod
    def step(self):
        """Advance one tick."""

    def step_n(self, n):
        """Advance n ticks."""
        for _ in range(n):
            self.step()

    @abstractmethod
    def reset(self):
        """Reinitialize to a fresh starting state."""

    @abstractmethod
    def add_seed(self, x, y):
        """Inject a seed at grid coordinate (x, y)."""

    @abstractmethod
    def get_phi_buffer(self):
        """Return the phase field as RGBA8 bytes, width * height * 4 long."""

    @abstractmethod
    def get_temperature_buffer(self):
        """Return the temperature field as RGBA8 bytes, width * height * 4 long."""

    @property
    def stats(self):
        """Return current engine statistics."""
        return {
            "generation": self.generation,
            "width": self.width,
            "height": self.height,
            "kappa": self.kappa,
            "delta": self.delta,
        }
