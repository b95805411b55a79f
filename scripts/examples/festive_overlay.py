"""Festive overlay example: snowflakes, socks and candy figures on chains.

This example loads the overlay images, lets the scene sway headless for a
while, prints the ornament state periodically, and optionally writes PNG
frames through the matplotlib render sink.

The example uses reusable helpers from `src/ornament_sway`.

Run:
    python scripts/examples/festive_overlay.py --assets ./assets --frames-dir ./out
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[2]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from ornament_sway import (  # noqa: E402
    AssetLoadError,
    SceneController,
    SimulationRunner,
    Viewport,
    compose_frame,
    load_assets,
    load_scene_config,
)
from ornament_sway.metrics import max_abs_angle, swing_range  # noqa: E402
from ornament_sway.scenes import festive_scene_config  # noqa: E402
from ornament_sway.visualization import MatplotlibSink  # noqa: E402


PRINT_EVERY_MS = 500.0


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    p.add_argument("--assets", default="assets", help="directory holding the PNG assets")
    p.add_argument("--config", default=None, help="optional JSON5 scene overrides")
    p.add_argument("--width", type=float, default=1280.0)
    p.add_argument("--height", type=float, default=720.0)
    p.add_argument("--seconds", type=float, default=None, help="run length (overrides config)")
    p.add_argument("--frames-dir", default=None, help="write a PNG every --frame-every frames")
    p.add_argument("--frame-every", type=int, default=15)
    p.add_argument("--resize-at", type=float, default=None,
                   help="halve the viewport width at this time (s) to exercise re-anchoring")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)


def print_startup_parameters(cfg, viewport: Viewport) -> None:
    """Print the active scene parameters for debugging and tuning."""
    sim = cfg.sim
    print("=== festive_overlay.py parameters ===")
    print(f"viewport={viewport.width:.0f}x{viewport.height:.0f}  anchor_y={cfg.anchor_y}")
    print(f"frame_ms={sim.frame_ms:.3f}  max_step_ms={sim.max_step_ms}  duration_ms={sim.duration_ms}")
    print(f"gravity={sim.gravity}  damping={sim.damping}  seed={sim.seed}")
    print(f"ornaments={len(cfg.ornaments)}  lanes={cfg.lights.lanes}")


def main(argv=None) -> int:
    """Load, simulate, and optionally render the festive overlay."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    cfg = load_scene_config(args.config) if args.config else festive_scene_config()
    if args.seconds is not None:
        cfg.sim.duration_ms = args.seconds * 1000.0
    viewport = Viewport(args.width, args.height)
    print_startup_parameters(cfg, viewport)

    try:
        images = load_assets(cfg.assets, args.assets, required=cfg.required_images())
    except AssetLoadError as exc:
        print(f"[error] {exc}")
        return 1

    controller = SceneController(cfg, viewport)
    controller.load(images, now=0.0)

    sink = None
    frames_dir = None
    if args.frames_dir:
        frames_dir = Path(args.frames_dir)
        frames_dir.mkdir(parents=True, exist_ok=True)
        sink = MatplotlibSink(images)
        print(f"[info] writing frames to {frames_dir}")

    names = [orn.name for orn in controller.context.ornaments if orn.motion == "pendulum"]
    state = {"resized": False, "next_print": 0.0}

    def before_tick(ctl: SceneController, now: float, frame: int) -> None:
        if args.resize_at is None or state["resized"] or now < args.resize_at * 1000.0:
            return
        ctl.on_viewport_change(viewport.width / 2, viewport.height, now)
        state["resized"] = True
        print(f"[info] viewport resized to {viewport.width / 2:.0f}x{viewport.height:.0f}")

    def after_tick(ctl: SceneController, now: float, frame: int) -> None:
        if sink is not None and frame % max(1, args.frame_every) == 0:
            sink.draw(compose_frame(ctl.context))
            sink.save(frames_dir / f"frame_{frame:05d}.png")

        if now < state["next_print"] or not names:
            return
        flake = ctl.context.ornament(names[0])
        lit = sum(1 for light in ctl.context.lights if light.on)
        print(
            f"t={now / 1000.0:5.2f}s {flake.name} angle={flake.angle:+.3f} "
            f"omega={flake.angular_velocity:+.3f} lit={lit}/{len(ctl.context.lights)} "
            f"spin={ctl.context.spin.angle:+.2f}"
        )
        state["next_print"] += PRINT_EVERY_MS

    runner = SimulationRunner(config=cfg.sim)
    result = runner.run(controller, before_tick=before_tick, after_tick=after_tick)

    for name in names:
        print(
            f"{name:>14}: max|angle|={max_abs_angle(result, name):.3f} rad  "
            f"range={swing_range(result, name):.3f} rad"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
