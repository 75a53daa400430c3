"""
nivis - Snowflake Growth Viewer - Entry Point

Usage:
    python -m nivis [preset] [--size WxH] [--scale N] [--stretch]
    python -m nivis [preset] --snap STEPS [--size WxH] [--scale N]
    python -m nivis --bench STEPS [--size WxH]

Examples:
    python -m nivis
    python -m nivis fern --size 150x100 --scale 4
    python -m nivis heat --snap 2000
    python -m nivis --bench 500 --size 300x600

Options:
    --size WxH   Simulation grid (default 100x100)
    --scale N    Display pixels per cell (default 3)
    --stretch    Stretch the field to fill the canvas instead of fitting
    --snap N     Headless: run N steps from a centre seed, save a PNG
    --bench N    Headless: run N steps and print the average step cost
    --list       Show presets
    --verbose    Debug logging
"""

import logging
import os
import sys
import time

from .presets import PRESET_ORDER, DEFAULT_PRESET, get_preset, list_presets


def snap(preset_key, width, height, scale, steps):
    """Headless mode: run N steps, save the preset's field as PNG, exit."""
    from PIL import Image

    from .fields import FieldSelector
    from .parameters import ParameterStore
    from .snowflake import Snowflake
    from .viewer import SCREENSHOTS_DIR

    store = ParameterStore()
    store.apply_preset(get_preset(preset_key))
    engine = Snowflake(width, height, kappa=store.kappa, delta=store.delta)
    engine.add_seed(engine.width // 2, engine.height // 2)

    print(f"  {preset_key}: running {steps} steps...", end="", flush=True)
    engine.step_n(steps)

    buffer = FieldSelector().fetch(store.field, engine)
    img = Image.frombytes("RGBA", (engine.width, engine.height), buffer)
    if scale != 1:
        img = img.resize((engine.width * scale, engine.height * scale),
                         Image.Resampling.NEAREST)

    os.makedirs(SCREENSHOTS_DIR, exist_ok=True)
    path = os.path.join(SCREENSHOTS_DIR, f"nivis_{preset_key}.png")
    img.save(path)
    img.save(os.path.join(SCREENSHOTS_DIR, "latest.png"))
    print(f" saved: {path}")
    return path


def bench(width, height, steps):
    """Average cost of one step plus a phi buffer fetch, in milliseconds."""
    from .snowflake import Snowflake

    engine = Snowflake(width, height)
    engine.add_seed(engine.width // 2, engine.height // 2)

    tic = time.perf_counter()
    for _ in range(steps):
        engine.step()
        engine.get_phi_buffer()
    elapsed = time.perf_counter() - tic

    average_ms = elapsed * 1000.0 / max(steps, 1)
    print(f"Average step cost: {average_ms:.3f} ms "
          f"({steps} steps on {engine.width}x{engine.height})")
    return average_ms


def _parse_size(text):
    parts = text.lower().split("x")
    return int(parts[0]), int(parts[1])


def main(argv=None):
    preset = DEFAULT_PRESET
    width, height = 100, 100
    scale = 3
    mode = "fit"
    snap_steps = 0
    bench_steps = 0
    level = logging.INFO

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--size" and i + 1 < len(args):
            width, height = _parse_size(args[i + 1])
            i += 2
        elif arg == "--scale" and i + 1 < len(args):
            scale = int(args[i + 1])
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_steps = int(args[i + 1])
            i += 2
        elif arg == "--bench" and i + 1 < len(args):
            bench_steps = int(args[i + 1])
            i += 2
        elif arg == "--stretch":
            mode = "stretch"
            i += 1
        elif arg == "--verbose":
            level = logging.DEBUG
            i += 1
        elif arg == "--list":
            print("\nAvailable presets:")
            for key, name, desc in list_presets():
                print(f"    {key:10s} {name:18s} {desc}")
            print()
            return 0
        elif arg in ("--help", "-h"):
            print(__doc__)
            return 0
        elif arg in PRESET_ORDER:
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available presets")
            return 2

    logging.basicConfig(level=level,
                        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    if bench_steps > 0:
        bench(width, height, bench_steps)
        return 0

    if snap_steps > 0:
        print(f"Headless snap mode: {preset} @ {width}x{height}, {snap_steps} steps")
        snap(preset, width, height, scale, snap_steps)
        return 0

    from .viewer import Viewer

    print("Starting nivis")
    print(f"  Preset: {preset}")
    print(f"  Grid: {width}x{height}")
    print(f"  Window: {width * scale}x{height * scale} ({mode})")
    print()

    viewer = Viewer(width=width, height=height, scale=scale, mode=mode,
                    start_preset=preset)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
