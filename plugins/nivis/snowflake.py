"""
Kobayashi Phase-Field Snowflake Engine

A crystal grows into an undercooled melt. Two coupled fields evolve on
a 2D grid:
  phi  - phase (0 = liquid, 1 = solid)
  T    - dimensionless temperature (0 = undercooled, 1 = melting point)

Equations (anisotropic interface, mode j):
  theta   = atan2(dphi/dy, dphi/dx)
  eps     = eps_bar * (1 + delta * cos(j * (theta - theta0)))
  m       = alpha / pi * arctan(gamma * (T_eq - T))
  tau * dphi/dt = d/dy(eps eps' dphi/dx) - d/dx(eps eps' dphi/dy)
                  + eps^2 lap(phi) + phi (1 - phi) (phi - 1/2 + m)
  dT/dt = lap(T) + kappa * dphi/dt

kappa is the latent heat (larger = thinner, more dendritic arms);
delta is the anisotropy strength (0 = round, 0.05 = sharp six-fold).

References:
  Kobayashi, "Modeling and numerical simulations of dendritic crystal
  growth", Physica D 63 (1993)
"""

import math
import numpy as np

from .engine_base import SimulationEngine
from .numeric import atan2, diff_x, diff_y, laplace
from .colormaps import get_colormap, apply_colormap

MIN_SIZE = 3  # stencils need at least one interior cell


class Snowflake(SimulationEngine):

    engine_name = "snowflake"
    engine_label = "Kobayashi Snowflake"

    def __init__(self, width=100, height=100, kappa=1.8, delta=0.02,
                 tau=3e-4, epsilon_bar=0.01, aniso=6, theta0=0.2,
                 alpha=0.9, gamma=10.0, t_eq=1.0, dx=0.03, dy=0.03,
                 dt=1e-4, seed_radius=3.0):
        super().__init__(max(MIN_SIZE, int(width)), max(MIN_SIZE, int(height)))
        self.kappa = kappa
        self.delta = delta
        self.tau = tau
        self.epsilon_bar = epsilon_bar
        self.aniso = aniso
        self.theta0 = theta0
        self.alpha = alpha
        self.gamma = gamma
        self.t_eq = t_eq
        self.dx = dx
        self.dy = dy
        self.dt = dt
        self.seed_radius = seed_radius

        self.phi = np.zeros((self.height, self.width), dtype=np.float32)
        self.T = np.zeros((self.height, self.width), dtype=np.float32)

        self._phi_lut = get_colormap("ice")
        self._temp_lut = get_colormap("thermal")

    def step(self):
        """Advance one explicit Euler tick."""
        phi, T = self.phi, self.T
        dx, dy = self.dx, self.dy

        grad_x = diff_x(phi, dx)
        grad_y = diff_y(phi, dy)
        theta = atan2(grad_y, grad_x)

        angle = self.aniso * (theta - self.theta0)
        eps = self.epsilon_bar * (1.0 + self.delta * np.cos(angle))
        eps_deriv = -self.epsilon_bar * self.aniso * self.delta * np.sin(angle)
        eps_prod = eps * eps_deriv

        term1 = diff_y(eps_prod * grad_x, dy)
        term2 = -diff_x(eps_prod * grad_y, dx)
        m = (self.alpha / math.pi) * np.arctan(self.gamma * (self.t_eq - T))

        dphi = (self.dt / self.tau) * (
            term1 + term2 + eps * eps * laplace(phi, dx, dy)
            + phi * (1.0 - phi) * (phi - 0.5 + m)
        )
        self.phi = (phi + dphi).astype(np.float32)
        self.T = (T + self.dt * laplace(T, dx, dy) + self.kappa * dphi).astype(np.float32)
        self.generation += 1

    def reset(self):
        self.phi[:] = 0
        self.T[:] = 0
        self.generation = 0

    def add_seed(self, x, y):
        """Solidify a small disk around (x, y); off-grid cells are ignored."""
        cx, cy = round(float(x)), round(float(y))
        Y, X = np.ogrid[:self.height, :self.width]
        disk = (X - cx) ** 2 + (Y - cy) ** 2 < self.seed_radius ** 2
        self.phi[disk] = 1.0

    def get_phi(self, i, j):
        return float(self.phi[j, i])

    def get_temperature(self, i, j):
        return float(self.T[j, i])

    def get_phi_buffer(self):
        return apply_colormap(self.phi, self._phi_lut, 0.0, 1.0).tobytes()

    def get_temperature_buffer(self):
        return apply_colormap(self.T, self._temp_lut, -0.2, 1.2).tobytes()

    @property
    def stats(self):
        stats = super().stats
        stats["solid_pct"] = float((self.phi > 0.5).sum()) / self.phi.size * 100
        return stats
