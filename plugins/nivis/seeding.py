"""
Pointer and random seed injection.

Pointer positions arrive in window coordinates and are mapped into
simulation-grid coordinates before being handed to the engine. Random
seeds are drawn in the same simulation space, so both paths agree even
when the display is scaled.
"""

import logging

import numpy as np

from .errors import EngineCallFailure

logger = logging.getLogger(__name__)


class SeedInputHandler:

    def __init__(self, engine, on_failure=None, rng=None):
        """
        Args:
            engine: SimulationEngine receiving add_seed() calls
            on_failure: Called with an EngineCallFailure when add_seed raises;
                if None the failure propagates to the caller
            rng: numpy Generator for random_seed (default: fresh default_rng)
        """
        self.engine = engine
        self.on_failure = on_failure
        self.rng = rng if rng is not None else np.random.default_rng()

    @staticmethod
    def to_simulation(client_x, client_y, surface_origin, display_scale):
        """Map a window position to (sim_x, sim_y).

        surface_origin is (left, top) or anything with .left/.top (a
        pygame.Rect). display_scale is a number or an (sx, sy) pair.
        """
        if hasattr(surface_origin, "left"):
            left, top = surface_origin.left, surface_origin.top
        else:
            left, top = surface_origin[0], surface_origin[1]
        if isinstance(display_scale, (tuple, list)):
            sx, sy = display_scale
        else:
            sx = sy = display_scale
        return (client_x - left) / sx, (client_y - top) / sy

    def on_pointer_down(self, client_x, client_y, surface_origin, display_scale):
        """Seed at the pointer position. Out-of-grid points are passed through."""
        sim_x, sim_y = self.to_simulation(client_x, client_y, surface_origin, display_scale)
        logger.debug("pointer (%s, %s) -> seed (%.2f, %.2f)", client_x, client_y, sim_x, sim_y)
        self._add_seed(sim_x, sim_y)
        return sim_x, sim_y

    def random_seed(self, count):
        """Seed count uniform integer points inside the simulation grid."""
        if count < 0:
            raise ValueError(f"seed count must be >= 0, got {count}")
        xs = self.rng.integers(0, self.engine.width, size=count)
        ys = self.rng.integers(0, self.engine.height, size=count)
        points = list(zip(xs.tolist(), ys.tolist()))
        for x, y in points:
            if not self._add_seed(x, y):
                break
        return points

    def _add_seed(self, x, y):
        try:
            self.engine.add_seed(x, y)
        except Exception as exc:
            failure = EngineCallFailure("add_seed", exc)
            if self.on_failure is None:
                raise failure from exc
            self.on_failure(failure)
            return False
        return True
