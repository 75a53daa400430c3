"""
Tests for pointer and random seeding.
"""

import numpy as np
import pygame
import pytest

from nivis.errors import EngineCallFailure
from nivis.seeding import SeedInputHandler


def test_pointer_maps_to_simulation_space(engine):
    handler = SeedInputHandler(engine)
    assert handler.on_pointer_down(210, 210, (0, 0), 3) == (70, 70)
    assert engine.calls == [("add_seed", 70, 70)]


def test_pointer_uses_surface_origin(engine):
    handler = SeedInputHandler(engine)
    handler.on_pointer_down(110, 80, pygame.Rect(20, 50, 300, 300), 3)
    assert engine.calls == [("add_seed", 30, 10)]


def test_pointer_accepts_per_axis_scale(engine):
    handler = SeedInputHandler(engine)
    handler.on_pointer_down(90, 90, (0, 0), (3.0, 4.5))
    assert engine.calls == [("add_seed", 30, 20)]


def test_out_of_range_points_passed_through(engine):
    handler = SeedInputHandler(engine)
    handler.on_pointer_down(-30, 9000, (0, 0), 3)
    assert engine.calls == [("add_seed", -10, 3000)]


def test_random_seed_in_simulation_bounds(engine):
    handler = SeedInputHandler(engine, rng=np.random.default_rng(0))
    points = handler.random_seed(50)
    assert len(points) == 50
    assert len(engine.calls) == 50
    for x, y in points:
        assert isinstance(x, int) and isinstance(y, int)
        assert 0 <= x < engine.width
        assert 0 <= y < engine.height


def test_random_seed_zero_and_negative(engine):
    handler = SeedInputHandler(engine)
    assert handler.random_seed(0) == []
    with pytest.raises(ValueError):
        handler.random_seed(-1)


def test_engine_failure_reported(engine):
    failures = []
    engine.fail_on.add("add_seed")
    handler = SeedInputHandler(engine, on_failure=failures.append)
    handler.on_pointer_down(3, 3, (0, 0), 1)
    handler.random_seed(5)

    # random_seed stops at the first failure
    assert len(failures) == 2
    assert all(isinstance(f, EngineCallFailure) for f in failures)
    assert failures[0].operation == "add_seed"


def test_engine_failure_raises_without_callback(engine):
    engine.fail_on.add("add_seed")
    handler = SeedInputHandler(engine)
    with pytest.raises(EngineCallFailure):
        handler.on_pointer_down(3, 3, (0, 0), 1)


def test_failure_pauses_running_loop(engine, controller):
    engine.fail_on.add("add_seed")
    handler = SeedInputHandler(engine, on_failure=controller.fail)
    controller.start()
    handler.on_pointer_down(3, 3, (0, 0), 1)
    assert not controller.running
    assert "add_seed" in controller.status
