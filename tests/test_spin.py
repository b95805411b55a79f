import math
import random

from conftest import FixedRandom
from ornament_sway.config import SpinConfig
from ornament_sway.spin import SpinState, step_spin


def test_initial_state():
    spin = SpinState.initial()
    assert (spin.angle, spin.speed, spin.target_speed, spin.dir, spin.next_switch) == (0.0, 0.0, 0.8, 1, 0.0)


def test_past_switch_rerolls_direction_and_speed():
    rng = random.Random(9)
    for _ in range(50):
        spin = SpinState(next_switch=0.0)
        step_spin(spin, 0.016, now=1000.0, rng=rng)
        assert spin.dir in (-1, 1)
        assert 1.6 <= spin.target_speed <= 3.4
        assert 2200.0 <= spin.next_switch <= 3600.0


def test_no_reroll_before_switch():
    spin = SpinState(target_speed=2.0, dir=-1, next_switch=5000.0)
    step_spin(spin, 0.016, now=1000.0, rng=random.Random(0))
    assert spin.target_speed == 2.0
    assert spin.dir == -1
    assert spin.speed < 0.0


def test_direction_follows_random_draw():
    spin = SpinState()
    step_spin(spin, 0.016, now=1.0, rng=FixedRandom(0.75))
    assert spin.dir == 1
    spin = SpinState()
    step_spin(spin, 0.016, now=1.0, rng=FixedRandom(0.25))
    assert spin.dir == -1


def test_speed_eases_then_angle_accumulates():
    cfg = SpinConfig()
    spin = SpinState(target_speed=2.0, dir=1, next_switch=math.inf)
    angles = []
    for i in range(2000):
        step_spin(spin, 0.016, now=float(i), rng=random.Random(0), cfg=cfg)
        angles.append(spin.angle)
    k = cfg.gain * 0.016
    steady = cfg.drag * 2.0 * k / (1 - cfg.drag * (1 - k))
    assert math.isclose(spin.speed, steady, rel_tol=1e-6)
    assert all(b > a for a, b in zip(angles, angles[1:]))
