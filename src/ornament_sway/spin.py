"""Spin controller for the charm that rotates instead of swinging."""

from __future__ import annotations

import random
from dataclasses import dataclass

from .config import SpinConfig


@dataclass(slots=True)
class SpinState:
    angle: float = 0.0
    speed: float = 0.0
    target_speed: float = 0.8
    dir: int = 1
    next_switch: float = 0.0

    @classmethod
    def initial(cls, cfg: SpinConfig | None = None) -> "SpinState":
        cfg = cfg or SpinConfig()
        return cls(target_speed=cfg.initial_target_speed)


def step_spin(
    spin: SpinState,
    dt: float,
    now: float,
    rng: random.Random,
    cfg: SpinConfig | None = None,
) -> None:
    """Advance the spin by ``dt`` seconds; reroll speed and direction on schedule.

    Speed eases toward ``target_speed * dir`` and is then dragged slightly,
    which gives slow-fast-slow phases with random direction flips.
    """
    cfg = cfg or SpinConfig()
    if now > spin.next_switch:
        spin.dir = 1 if rng.random() > 0.5 else -1
        spin.target_speed = cfg.min_speed + rng.random() * cfg.speed_spread
        spin.next_switch = now + cfg.min_hold_ms + rng.random() * cfg.hold_spread_ms

    desired = spin.target_speed * spin.dir
    spin.speed += (desired - spin.speed) * cfg.gain * dt
    spin.speed *= cfg.drag
    spin.angle += spin.speed * dt
