"""Shared fakes for the nivis tests. No display window is ever opened."""

import pygame
import pytest

from nivis.engine_base import SimulationEngine
from nivis.fields import FieldSelector
from nivis.loop import LoopController
from nivis.parameters import ParameterStore
from nivis.scheduler import FrameScheduler


class FakeEngine(SimulationEngine):
    """Records every call; buffers are solid colors so fields are distinguishable."""

    engine_name = "fake"

    PHI_COLOR = (0, 0, 255, 255)
    TEMPERATURE_COLOR = (255, 0, 0, 255)

    def __init__(self, width=4, height=3):
        super().__init__(width, height)
        self.kappa = None
        self.delta = None
        self.calls = []
        self.fail_on = set()
        self.buffer_len = None  # override buffer byte count

    def _check(self, name):
        if name in self.fail_on:
            raise RuntimeError(f"{name} exploded")

    def step(self):
        self.calls.append(("step", self.kappa, self.delta))
        self._check("step")
        self.generation += 1

    def reset(self):
        self.calls.append(("reset",))
        self._check("reset")
        self.generation = 0

    def add_seed(self, x, y):
        self.calls.append(("add_seed", x, y))
        self._check("add_seed")

    def _buffer(self, color):
        n = self.buffer_len if self.buffer_len is not None else self.width * self.height * 4
        pixel = bytes(color)
        return (pixel * (n // 4 + 1))[:n]

    def get_phi_buffer(self):
        self.calls.append(("phi",))
        self._check("phi")
        return self._buffer(self.PHI_COLOR)

    def get_temperature_buffer(self):
        self.calls.append(("temperature",))
        self._check("temperature")
        return self._buffer(self.TEMPERATURE_COLOR)

    def call_names(self):
        return [c[0] for c in self.calls]


class RecordingCompositor:
    """Stands in for Compositor; keeps what it was asked to draw."""

    def __init__(self):
        self.drawn = []

    def composite(self, buffer, src_width, src_height, generation=None):
        self.drawn.append((bytes(buffer[:4]), len(buffer), src_width, src_height, generation))
        return True


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def store():
    return ParameterStore()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def compositor():
    return RecordingCompositor()


@pytest.fixture
def controller(engine, store, compositor, scheduler):
    return LoopController(engine, store, FieldSelector(), compositor, scheduler,
                          max_frame_failures=3)


@pytest.fixture
def surface():
    return pygame.Surface((450, 450), 0, 32)
