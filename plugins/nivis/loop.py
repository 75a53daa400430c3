"""
Render-loop controller.

Owns the Idle / Running / Paused state machine and runs the frame cycle:

  1. push kappa/delta from the parameter store into the engine
  2. step the engine one tick
  3. fetch the buffer for the selected field
  4. composite it onto the display surface
  5. schedule the next frame, if still running

Engine errors, and any other error while drawing, pause the loop. A bad
buffer or field only skips that frame, unless it keeps happening, in
which case the loop pauses too.
"""

import enum
import logging

from .errors import EngineCallFailure, InvalidBufferLength, UnknownField
from .parameters import PARAM_RANGES, clamp

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


PLAYING_LABEL = "Playing"
PAUSED_LABEL = "Paused"


class LoopController:

    def __init__(self, engine, store, selector, compositor, scheduler,
                 max_frame_failures=30):
        self.engine = engine
        self.store = store
        self.selector = selector
        self.compositor = compositor
        self.scheduler = scheduler
        self.max_frame_failures = max_frame_failures

        self.phase = Phase.IDLE
        self.pending_token = None
        self.ticks = 0            # steps since the last reset
        self.frames = 0           # cycles that reached the surface
        self.generation = 0       # stamp for the next composite
        self.frame_failures = 0   # consecutive skipped frames
        self.status = "ok"
        self.last_error = None
        self._listeners = []

    @property
    def running(self):
        return self.phase is Phase.RUNNING

    @property
    def label(self):
        return PLAYING_LABEL if self.running else PAUSED_LABEL

    def add_listener(self, callback):
        """Register callback(label), called on every phase change."""
        self._listeners.append(callback)

    def _set_phase(self, phase):
        if phase is self.phase:
            return
        logger.debug("loop %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        for callback in self._listeners:
            callback(self.label)

    # --- Commands ---

    def start(self):
        if self.running:
            return
        self.pending_token = self.scheduler.request(self._on_frame)
        self._set_phase(Phase.RUNNING)
        logger.info("loop started at tick %d", self.ticks)

    def stop(self):
        if not self.running:
            return
        self.scheduler.cancel(self.pending_token)
        self.pending_token = None
        self._set_phase(Phase.PAUSED)
        logger.info("loop paused at tick %d", self.ticks)

    def toggle_play_pause(self):
        if self.running:
            self.stop()
        else:
            self.start()
        return self.label

    def reset(self):
        """Reset the engine. The loop phase is left as it was."""
        try:
            self.engine.reset()
        except Exception as exc:
            self.fail(EngineCallFailure("reset", exc))
            return False
        self.ticks = 0
        self.frame_failures = 0
        self.status = "ok"
        logger.info("engine reset")
        return True

    def fail(self, failure):
        """Report an engine failure and pause."""
        logger.error("%s", failure)
        self.last_error = failure
        self.status = str(failure)
        self.stop()

    # --- Frame cycle ---

    def _on_frame(self):
        if not self.running:
            return
        self._run_cycle()
        if self.running:
            self.pending_token = self.scheduler.request(self._on_frame)

    def _run_cycle(self):
        engine = self.engine
        kappa = clamp(self.store.kappa, *PARAM_RANGES["kappa"])
        delta = clamp(self.store.delta, *PARAM_RANGES["delta"])
        try:
            engine.kappa = kappa
            engine.delta = delta
            engine.step()
        except Exception as exc:
            self.fail(EngineCallFailure("step", exc))
            return False
        self.ticks += 1

        field = self.store.field
        try:
            buffer = self.selector.fetch(field, engine)
        except UnknownField as exc:
            self._skip_frame(exc)
            return False
        except Exception as exc:
            self.fail(EngineCallFailure(f"get_{field.value}_buffer", exc))
            return False

        self.generation += 1
        try:
            self.compositor.composite(buffer, engine.width, engine.height,
                                      generation=self.generation)
        except InvalidBufferLength as exc:
            self._skip_frame(exc)
            return False
        except Exception as exc:
            self.fail(EngineCallFailure("composite", exc))
            return False

        self.frames += 1
        self.frame_failures = 0
        self.status = "ok"
        return True

    def _skip_frame(self, exc):
        self.frame_failures += 1
        self.last_error = exc
        self.status = str(exc)
        logger.warning("skipping frame at tick %d: %s", self.ticks, exc)
        if self.frame_failures >= self.max_frame_failures:
            logger.error("%d frames failed in a row, pausing", self.frame_failures)
            self.stop()
