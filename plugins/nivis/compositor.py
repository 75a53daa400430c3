"""
Pixel-buffer compositing onto the display surface.

A raw RGBA8 buffer at simulation resolution is turned into a pygame
image, scaled either to fit (uniform ratio, anchored top-left) or to
stretch (each axis independently), and drawn over the whole surface.
Composites carry a generation number; anything older than the last
drawn generation is discarded.
"""

import logging
import os
import time

import pygame

from .errors import InvalidBufferLength, MissingSurface

logger = logging.getLogger(__name__)

FIT = "fit"
STRETCH = "stretch"
MODES = (FIT, STRETCH)

BACKGROUND = (18, 18, 24)


class SurfaceGeometry:
    """Display and simulation dimensions, fixed at construction."""

    def __init__(self, display_width, display_height, simulation_width, simulation_height):
        self.display_width = int(display_width)
        self.display_height = int(display_height)
        self.simulation_width = int(simulation_width)
        self.simulation_height = int(simulation_height)

    def __repr__(self):
        return (f"SurfaceGeometry(display={self.display_width}x{self.display_height}, "
                f"simulation={self.simulation_width}x{self.simulation_height})")


class Compositor:

    def __init__(self, surface, geometry, mode=FIT, background=BACKGROUND, smooth=True):
        if surface is None:
            raise MissingSurface("compositor needs a display surface")
        if mode not in MODES:
            raise ValueError(f"Unknown compositing mode: {mode!r}. Use one of {MODES}")
        self.surface = surface
        self.geometry = geometry
        self.mode = mode
        self.background = background
        self.smooth = smooth
        self.last_generation = -1
        self.composites = 0

    def display_scale(self, src_width, src_height):
        """Return (sx, sy), display pixels per simulation cell on each axis."""
        g = self.geometry
        if self.mode == STRETCH:
            return g.display_width / src_width, g.display_height / src_height
        ratio = min(g.display_width / src_width, g.display_height / src_height)
        return ratio, ratio

    def fit_rect(self, src_width, src_height):
        """Destination rect for a src_width x src_height image."""
        if self.mode == STRETCH:
            return pygame.Rect(0, 0, self.geometry.display_width, self.geometry.display_height)
        sx, sy = self.display_scale(src_width, src_height)
        return pygame.Rect(0, 0, int(round(src_width * sx)), int(round(src_height * sy)))

    def build_image(self, buffer, src_width, src_height):
        """Copy a row-major RGBA8 buffer into a src-sized pygame image."""
        view = memoryview(buffer)
        if view.nbytes != src_width * src_height * 4:
            raise InvalidBufferLength(view.nbytes, src_width, src_height)
        # frombytes copies, so the engine may overwrite its buffer after this
        return pygame.image.frombytes(view.tobytes(), (src_width, src_height), "RGBA")

    def composite(self, buffer, src_width, src_height, generation=None):
        """Draw buffer onto the surface. Returns False if it was stale.

        Raises InvalidBufferLength when the buffer size is wrong; the
        surface is left untouched in that case.
        """
        if generation is not None and generation <= self.last_generation:
            logger.debug("dropping stale composite %s (last drawn %s)",
                         generation, self.last_generation)
            return False

        image = self.build_image(buffer, src_width, src_height)
        dest = self.fit_rect(src_width, src_height)
        if dest.size != (src_width, src_height):
            scale = pygame.transform.smoothscale if self.smooth else pygame.transform.scale
            image = scale(image, dest.size)

        self.surface.fill(self.background)
        self.surface.blit(image, dest.topleft)

        if generation is not None:
            self.last_generation = generation
        self.composites += 1
        return True

    def export(self, directory, prefix="nivis"):
        """Save the surface as a timestamped PNG plus latest.png. Returns the path."""
        os.makedirs(directory, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(directory, f"{prefix}_{timestamp}.png")
        pygame.image.save(self.surface, path)
        pygame.image.save(self.surface, os.path.join(directory, "latest.png"))
        logger.info("screenshot saved: %s", path)
        return path
