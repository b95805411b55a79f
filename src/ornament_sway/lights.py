"""Twinkling light string.

Each light flips on and off on its own randomized schedule and fades through a
smoothed ``glow`` value. While a light is off and effectively invisible it may
drift to a new small offset, so it never visibly jumps.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from .bounds import ImageBounds
from .config import LightStringConfig


@dataclass(slots=True)
class Light:
    base_x: float
    base_y: float
    color: str
    on: bool = False
    glow: float = 0.0
    interval: float = 1200.0
    next_switch: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0
    next_move: float = 0.0

    @property
    def x(self) -> float:
        return self.base_x + self.offset_x

    @property
    def y(self) -> float:
        return self.base_y + self.offset_y


def pick_color(rng: random.Random, palette: tuple[str, ...]) -> str:
    return palette[int(rng.random() * len(palette))]


def build_lights(
    viewport_width: float,
    viewport_height: float,
    line_bounds: ImageBounds,
    anchor_y: float,
    now: float,
    rng: random.Random,
    cfg: LightStringConfig | None = None,
) -> list[Light]:
    """Scatter lights in wavy lanes below the line.

    Lanes span ``scene_h`` vertically starting a little above the line; each
    lane rides a sine arc with random amplitude and per-light jitter.
    """
    cfg = cfg or LightStringConfig()
    usable = max(cfg.min_usable_width, viewport_width - cfg.margin * 2)
    start_y = anchor_y + line_bounds.max_y + cfg.line_gap
    scene_h = max(cfg.min_scene_height, min(viewport_height * cfg.scene_height_ratio, cfg.max_scene_height))
    per_lane = max(cfg.min_per_lane, math.floor(usable / cfg.spacing))

    lights: list[Light] = []
    for lane in range(cfg.lanes):
        lane_t = 0.5 if cfg.lanes == 1 else lane / (cfg.lanes - 1)
        lane_y = start_y + (lane_t - 0.25) * scene_h + (rng.random() * 30 - 15)
        for i in range(per_lane):
            t = (i + rng.random() * 0.7 + lane * 0.1) / per_lane
            arc_amp = 28 + rng.random() * 32
            arc = math.sin(t * math.pi * 2 + lane * 0.8) * arc_amp
            jitter_y = rng.random() * 30 - 15
            x = cfg.margin + t * usable + (rng.random() - 0.5) * 26
            lights.append(
                Light(
                    base_x=x,
                    base_y=lane_y + arc + jitter_y,
                    target_x=(rng.random() - 0.5) * 8,
                    target_y=(rng.random() - 0.5) * 8,
                    next_move=now + 200 + rng.random() * 800,
                    color=pick_color(rng, cfg.palette),
                    on=rng.random() > 0.35,
                    glow=rng.random(),
                    interval=1200 + rng.random() * 1600,
                    next_switch=now + rng.random() * 1400,
                )
            )
    return lights


def step_light(
    light: Light,
    now: float,
    rng: random.Random,
    cfg: LightStringConfig | None = None,
) -> None:
    cfg = cfg or LightStringConfig()
    if now > light.next_switch:
        light.on = not light.on
        if not light.on and rng.random() < cfg.recolor_chance:
            light.color = pick_color(rng, cfg.palette)
        light.next_switch = now + light.interval * (0.5 + rng.random())

    target_glow = 1.0 if light.on else 0.0
    light.glow += (target_glow - light.glow) * cfg.glow_smoothing

    # only reposition while nobody can see it
    if light.on or light.glow >= cfg.visibility_threshold:
        return
    if now > light.next_move:
        light.target_x = (rng.random() - 0.5) * 16
        light.target_y = (rng.random() - 0.5) * 16
        light.next_move = now + 600 + rng.random() * 1600
    light.offset_x += (light.target_x - light.offset_x) * cfg.drift_smoothing
    light.offset_y += (light.target_y - light.offset_y) * cfg.drift_smoothing


def step_lights(
    lights: list[Light],
    now: float,
    rng: random.Random,
    cfg: LightStringConfig | None = None,
) -> None:
    for light in lights:
        step_light(light, now, rng, cfg)


def is_visible(light: Light, cfg: LightStringConfig | None = None) -> bool:
    cfg = cfg or LightStringConfig()
    return light.glow >= cfg.render_cutoff
