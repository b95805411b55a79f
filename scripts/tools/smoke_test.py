"""
smoke_test.py — minimal Proof-of-Life for the ornament scene + matplotlib

- Synthetic RGBA assets (padded opaque squares), no files needed
- Festive scene ticked headless for ~2 s
- Tries to write one PNG frame; skips rendering if matplotlib output fails
"""

import sys
from pathlib import Path

import numpy as np

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ornament_sway import FrameClock, ImageAsset, SceneController, Viewport, compose_frame  # noqa: E402
from ornament_sway.scenes import festive_scene_config  # noqa: E402


def padded_square(name, size=64, pad=12, rgb=(200, 40, 40)):
    px = np.zeros((size, size, 4), dtype=np.uint8)
    px[pad:size - pad, pad:size - pad, :3] = rgb
    px[pad:size - pad, pad:size - pad, 3] = 255
    return ImageAsset(name, px)


def make_assets(cfg):
    images = {key: padded_square(key) for key in cfg.required_images()}
    line = np.zeros((80, 600, 4), dtype=np.uint8)
    line[30:50, :, :3] = (240, 200, 90)
    line[30:50, :, 3] = 255
    images[cfg.reference_key] = ImageAsset(cfg.reference_key, line)
    return images


def try_render(images, frame, out):
    try:
        from ornament_sway.visualization import MatplotlibSink

        sink = MatplotlibSink(images)
        sink.draw(frame)
        sink.save(out)
        return True
    except Exception as e:
        print("[info] Rendering not available:", e)
        return False


def main():
    cfg = festive_scene_config()
    cfg.sim.seed = 7
    images = make_assets(cfg)

    ctl = SceneController(cfg, Viewport(1024, 640))
    ctl.load(images, now=0.0)

    clock = FrameClock()
    while clock.now < 2000.0:
        ctl.tick(clock.advance())

    out = Path("smoke_frame.png")
    if try_render(images, compose_frame(ctl.context), out):
        print(f"[info] wrote {out}")

    flake = ctl.context.ornament("flake_short")
    print(f"OK: t={clock.now / 1000.0:.3f}s, flake angle={flake.angle:+.3f} rad, frames={ctl.context.frame}")


if __name__ == "__main__":
    main()
