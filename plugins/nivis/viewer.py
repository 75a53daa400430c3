"""
Interactive Pygame Viewer for the Snowflake Simulation

Steps the engine once per display frame, draws the selected field
(phase or temperature) to the canvas, and exposes kappa/delta/field in
a side panel.

Controls:
  SPACE       Play / Pause
  R           Reset the engine (play state is kept)
  F           Toggle field (phi / temperature)
  N           Drop random seeds
  S           Save screenshot
  H           Toggle HUD overlay
  1-5         Presets
  Q / ESC     Quit
  Mouse L     Seed a crystal (on canvas area)
"""

import logging
import os

import numpy as np
import pygame

from .compositor import Compositor, SurfaceGeometry, FIT
from .controls import ControlPanel, THEME
from .fields import FieldSelector
from .loop import LoopController
from .parameters import ParameterStore
from .presets import PRESETS, PRESET_ORDER, DEFAULT_PRESET, get_preset
from .scheduler import FrameScheduler
from .seeding import SeedInputHandler
from .snowflake import Snowflake

logger = logging.getLogger(__name__)

PANEL_WIDTH = 260
RANDOM_SEED_COUNT = 5

SCREENSHOTS_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "screenshots"
)


class Viewer:
    def __init__(self, width=100, height=100, scale=3, mode=FIT,
                 start_preset=DEFAULT_PRESET, engine=None, fps=60, rng=None):
        self.fps = fps
        self.running = True
        self.show_hud = True
        self.fps_history = []

        self.preset_key = start_preset
        preset = get_preset(start_preset) or PRESETS[DEFAULT_PRESET]

        self.engine = engine if engine is not None else Snowflake(width, height)
        self.store = ParameterStore()
        self.store.apply_preset(preset)

        # Canvas size comes from the requested grid; the engine's own
        # readback decides the fit ratio
        self.canvas_w = int(width * scale)
        self.canvas_h = int(height * scale)
        self.canvas = pygame.Surface((self.canvas_w, self.canvas_h))
        self.canvas.fill(THEME["bg"])
        self.canvas_rect = self.canvas.get_rect()
        self.geometry = SurfaceGeometry(self.canvas_w, self.canvas_h,
                                        self.engine.width, self.engine.height)

        self.scheduler = FrameScheduler()
        self.compositor = Compositor(self.canvas, self.geometry, mode=mode)
        self.controller = LoopController(
            self.engine, self.store, FieldSelector(), self.compositor, self.scheduler,
        )
        self.seeder = SeedInputHandler(self.engine, on_failure=self.controller.fail, rng=rng)

        self.panel = None
        self.play_button = None
        self.controller.add_listener(self._on_play_state)

        # Something to look at on the first frame
        self.engine.add_seed(self.engine.width // 2, self.engine.height // 2)
        logger.info("viewer ready: %r", self.geometry)

    @property
    def total_w(self):
        return self.canvas_w + PANEL_WIDTH

    # --- UI commands ---

    def _on_play_state(self, label):
        if self.play_button is not None:
            self.play_button.label = f"{label}  [SPACE]"

    def _on_reset(self):
        self.controller.reset()

    def _on_random_seed(self):
        self.seeder.random_seed(RANDOM_SEED_COUNT)

    def _on_screenshot(self):
        return self.compositor.export(SCREENSHOTS_DIR, prefix=f"nivis_{self.store.field.value}")

    def _apply_preset(self, key):
        preset = get_preset(key)
        if preset is None:
            return
        self.preset_key = key
        self.store.apply_preset(preset)
        logger.info("preset %s: kappa=%.2f delta=%.3f field=%s", key,
                    self.store.kappa, self.store.delta, self.store.field.value)

    def _handle_canvas_click(self, event):
        if event.button != 1 or not self.canvas_rect.collidepoint(event.pos):
            return False
        scale = self.compositor.display_scale(self.engine.width, self.engine.height)
        self.seeder.on_pointer_down(event.pos[0], event.pos[1], self.canvas_rect, scale)
        return True

    # --- Drawing ---

    def _build_panel(self):
        panel = ControlPanel(self.canvas_w, 0, PANEL_WIDTH, max(self.canvas_h, 420))
        panel.add_section("PARAMETERS")
        panel.add_binding(self.store.binding("kappa"))
        panel.add_binding(self.store.binding("delta"))
        panel.add_binding(self.store.binding("field"))

        panel.add_section("ACTIONS")
        self.play_button = panel.add_button(
            f"{self.controller.label}  [SPACE]", on_click=self.controller.toggle_play_pause)
        panel.add_button("Reset  [R]", on_click=self._on_reset)
        panel.add_button("Random seeds  [N]", on_click=self._on_random_seed)
        panel.add_button("Screenshot  [S]", on_click=self._on_screenshot)
        self.panel = panel

    def _draw_hud(self, screen, fps):
        if not self.show_hud:
            return
        c = self.controller
        line = (f"{self.store.field.label}  |  Tick: {c.ticks:,}  |  "
                f"{self.engine.width}x{self.engine.height}  |  FPS: {fps:.0f}")
        if not c.running:
            line = "[PAUSED]  " + line

        bg_surface = pygame.Surface((self.canvas_w, 22), pygame.SRCALPHA)
        bg_surface.fill((0, 0, 0, 140))
        screen.blit(bg_surface, (0, 0))
        screen.blit(self.hud_font.render(line, True, THEME["text_bright"]), (6, 4))

        if c.status != "ok":
            err = self.hud_font.render(c.status, True, THEME["error"])
            screen.blit(err, (6, self.canvas_h - err.get_height() - 4))

    def run(self):
        """Main viewer loop."""
        pygame.init()
        screen = pygame.display.set_mode((self.total_w, max(self.canvas_h, 420)))
        pygame.display.set_caption("nivis")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 12)
        self.panel_font = pygame.font.SysFont("menlo", 12)
        self._build_panel()

        self.controller.start()

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event)
                elif (not self.panel.handle_event(event)
                      and event.type == pygame.MOUSEBUTTONDOWN):
                    self._handle_canvas_click(event)

            self.scheduler.run_pending()

            screen.fill(THEME["bg"])
            screen.blit(self.canvas, self.canvas_rect.topleft)

            self.fps_history.append(clock.get_time() / 1000.0)
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            self._draw_hud(screen, 1.0 / max(np.mean(self.fps_history), 0.001))

            self.panel.sync()
            self.panel.draw(screen, self.panel_font)

            pygame.display.flip()
            clock.tick(self.fps)

        self.controller.stop()
        pygame.quit()

    def _handle_keydown(self, event):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self.controller.toggle_play_pause()

        elif key == pygame.K_r:
            self._on_reset()

        elif key == pygame.K_f:
            self.store.toggle_field()

        elif key == pygame.K_n:
            self._on_random_seed()

        elif key == pygame.K_s:
            self._on_screenshot()

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(PRESET_ORDER):
                self._apply_preset(PRESET_ORDER[idx])
