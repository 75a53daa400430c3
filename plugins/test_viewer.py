"""
Tests for the viewer wiring and the command line entry point.

The viewer is built without opening a window; frames are driven by
calling the scheduler directly.
"""

import pygame
import pytest
from PIL import Image

import nivis.viewer as viewer_module
from nivis.__main__ import main
from nivis.compositor import STRETCH
from nivis.errors import MissingBoundElement
from nivis.loop import Phase
from nivis.parameters import FieldKind
from nivis.viewer import Viewer


def _click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)


def test_viewer_wiring():
    v = Viewer(width=20, height=10, scale=3)
    assert (v.canvas_w, v.canvas_h) == (60, 30)
    assert v.geometry.simulation_width == 20
    assert v.controller.phase is Phase.IDLE
    # Centre seed placed at startup
    assert v.engine.get_phi(10, 5) == 1.0

    v.controller.start()
    v.scheduler.run_pending()
    assert v.controller.frames == 1
    assert v.compositor.last_generation == 1


def test_canvas_click_seeds_in_simulation_space():
    v = Viewer(width=20, height=10, scale=3)
    v.engine.reset()
    assert v._handle_canvas_click(_click((3, 27)))
    assert v.engine.get_phi(1, 9) == 1.0
    # Clicks outside the canvas belong to the panel
    assert not v._handle_canvas_click(_click((500, 5)))


def test_stretch_mode_scale():
    v = Viewer(width=20, height=10, scale=3, mode=STRETCH)
    assert v.compositor.display_scale(20, 10) == (3.0, 3.0)


def test_panel_play_button_mirrors_controller():
    v = Viewer(width=20, height=10, scale=3)
    v._build_panel()
    assert v.play_button.label.startswith("Paused")
    v.play_button.on_click()
    assert v.controller.running
    assert v.play_button.label.startswith("Playing")


def test_panel_requires_every_binding(monkeypatch):
    v = Viewer(width=20, height=10, scale=3)
    bindings = v.store.bindings()
    del bindings["delta"]
    monkeypatch.setattr(v.store, "bindings", lambda: bindings)
    with pytest.raises(MissingBoundElement):
        v._build_panel()


def test_keys():
    v = Viewer(width=20, height=10, scale=3)
    key = lambda k: pygame.event.Event(pygame.KEYDOWN, key=k)

    v._handle_keydown(key(pygame.K_SPACE))
    assert v.controller.running
    v._handle_keydown(key(pygame.K_f))
    assert v.store.field is FieldKind.TEMPERATURE
    v._handle_keydown(key(pygame.K_r))
    assert v.controller.running
    assert v.engine.generation == 0
    v._handle_keydown(key(pygame.K_5))
    assert v.preset_key == "heat"
    v._handle_keydown(key(pygame.K_q))
    assert not v.running


def test_screenshot(tmp_path, monkeypatch):
    monkeypatch.setattr(viewer_module, "SCREENSHOTS_DIR", str(tmp_path))
    v = Viewer(width=20, height=10, scale=3)
    v.controller.start()
    v.scheduler.run_pending()
    path = v._on_screenshot()
    assert "nivis_phi_" in path
    assert (tmp_path / "latest.png").exists()


def test_cli_list_and_bad_argument(capsys):
    assert main(["--list"]) == 0
    assert "classic" in capsys.readouterr().out
    assert main(["snowman"]) == 2


def test_cli_bench(capsys):
    assert main(["--bench", "3", "--size", "12x8"]) == 0
    assert "Average step cost" in capsys.readouterr().out


def test_cli_snap(tmp_path, monkeypatch):
    monkeypatch.setattr(viewer_module, "SCREENSHOTS_DIR", str(tmp_path))
    assert main(["fern", "--snap", "3", "--size", "12x8", "--scale", "2"]) == 0
    img = Image.open(tmp_path / "nivis_fern.png")
    assert img.size == (24, 16)
