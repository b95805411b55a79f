"""Damped, self-driven pendulum model for hanging ornaments.

The model is a stylized approximation tuned for looks, not a rigid-body
simulation. Each hanging ornament is a single arm pivoting at its anchor:

    acc = -(g / L) * sin(angle) + drive + micro - k * angle

integrated with a semi-implicit Euler step and a fixed per-step multiplicative
damping. ``drive`` is a slow sinusoid evaluated on clock time, ``micro`` a
small random nudge that grows when the arm stalls or sits near its cap, and
``k`` a linear spring toward vertical that keeps the random forcing from
parking an ornament off-center.

Resting foliage uses :func:`step_sway` instead: the angle chases a slow
sinusoidal target with its own damping.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from .config import (
    AttachMode,
    ChainStyle,
    CharmSpec,
    LineEdge,
    MotionModel,
    OrnamentKind,
    OrnamentSpec,
    PendulumParams,
    SwayParams,
)


MIN_ARM_LENGTH = 1.0


@dataclass(slots=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(slots=True)
class DriveParams:
    """Self-forcing sinusoid ``sin(now * rate + phase) * amp``."""

    rate: float = 0.0
    phase: float = 0.0
    amp: float = 0.0

    def value(self, now: float) -> float:
        return math.sin(now * self.rate + self.phase) * self.amp


@dataclass(slots=True)
class Ornament:
    """Simulation state of one hanging or resting ornament."""

    name: str
    kind: OrnamentKind
    motion: MotionModel
    image_key: str
    anchor: Point
    offset_x: float
    offset_y: float
    edge: LineEdge = "bottom"
    length: float = 0.0
    segments: int = 0
    angle: float = 0.0
    angular_velocity: float = 0.0
    drive: DriveParams = field(default_factory=DriveParams)
    params: PendulumParams | SwayParams | None = None
    chain: ChainStyle | None = None
    charm: CharmSpec | None = None
    scale: float = 0.8
    attach: AttachMode = "center"
    layer: int = 0
    glow_color: str | None = None

    @property
    def angle_cap(self) -> float:
        return self.params.angle_cap if self.params is not None else 0.0

    def bob(self) -> Point:
        """Return the moving end of the arm; resting items sit on their anchor."""
        if self.motion != "pendulum":
            return Point(self.anchor.x, self.anchor.y)
        return bob_position(self.anchor, self.length, self.angle)


def segment_count(length: float, chain: ChainStyle | None) -> int:
    if chain is None:
        return 0
    # half-up rounding: 360 px at 16 px spacing gives 23 links
    return max(chain.min_segments, math.floor(length / chain.link_spacing + 0.5))


def create_ornament(
    spec: OrnamentSpec,
    reference_width: float,
    rng: random.Random,
) -> Ornament:
    """Build an ornament from its spec with randomized drive and start state.

    The anchor is left at the origin; :func:`ornament_sway.layout.relayout`
    places it.
    """
    params = spec.params
    if params is None:
        params = PendulumParams() if spec.motion == "pendulum" else SwayParams()
    if spec.motion == "pendulum" and not isinstance(params, PendulumParams):
        raise ValueError(f"{spec.name}.params must be PendulumParams for pendulum motion")
    if spec.motion == "sway" and not isinstance(params, SwayParams):
        raise ValueError(f"{spec.name}.params must be SwayParams for sway motion")

    orn = Ornament(
        name=spec.name,
        kind=spec.kind,
        motion=spec.motion,
        image_key=spec.image_key,
        anchor=Point(),
        offset_x=reference_width * spec.width_fraction + spec.offset_px,
        offset_y=spec.offset_y,
        edge=spec.edge,
        length=spec.length,
        segments=segment_count(spec.length, spec.chain),
        params=params if spec.motion != "static" else None,
        chain=spec.chain,
        charm=spec.charm,
        scale=spec.scale,
        attach=spec.attach,
        layer=spec.layer,
        glow_color=spec.glow_color,
    )

    if spec.motion == "pendulum":
        drive = params.drive
        orn.angle = _clamp((rng.random() * 2.0 - 1.0) * params.initial_angle_spread, params.angle_cap)
        if params.initial_velocity_spread:
            orn.angular_velocity = (rng.random() - 0.5) * params.initial_velocity_spread
        orn.drive = DriveParams(
            rate=drive.rate_min + rng.random() * drive.rate_spread,
            phase=rng.random() * math.pi * 2,
            amp=drive.amp_min + rng.random() * drive.amp_spread,
        )
    elif spec.motion == "sway":
        orn.drive = DriveParams(
            rate=params.rate_min + rng.random() * params.rate_spread,
            phase=rng.random() * math.pi * 2,
            amp=params.target_amp,
        )
    return orn


def _clamp(value: float, cap: float) -> float:
    return max(min(value, cap), -cap)


def micro_nudge(orn: Ornament, rng: random.Random) -> float:
    """Random jitter, amplified when the arm stalls or hugs its cap."""
    p = orn.params
    micro = (rng.random() - 0.5) * p.micro_amp
    if abs(orn.angular_velocity) < p.stall_velocity or abs(orn.angle) > p.edge_angle:
        micro += (rng.random() - 0.5) * p.stall_micro_amp
    return micro


def step_pendulum(
    orn: Ornament,
    dt: float,
    now: float,
    rng: random.Random,
    gravity: float = 45.0,
    damping: float = 0.99,
) -> None:
    """Advance a pendulum ornament by ``dt`` seconds at clock time ``now`` (ms)."""
    p = orn.params
    length = max(orn.length, MIN_ARM_LENGTH)

    drive = orn.drive.value(now)
    micro = micro_nudge(orn, rng)
    center_pull = -p.center_pull * orn.angle
    acc = -(gravity / length) * math.sin(orn.angle) + drive + micro + center_pull

    orn.angular_velocity += acc * dt
    orn.angular_velocity *= damping
    orn.angle = _clamp(orn.angle + orn.angular_velocity * dt, p.angle_cap)


def step_sway(orn: Ornament, dt: float, now: float) -> None:
    """Ease a resting ornament toward a slow sinusoidal target angle."""
    p = orn.params
    target = orn.drive.value(now)
    orn.angular_velocity += (target - orn.angle) * p.gain * dt
    orn.angular_velocity *= p.damping
    orn.angle = _clamp(orn.angle + orn.angular_velocity * dt, p.angle_cap)


def step_ornament(
    orn: Ornament,
    dt: float,
    now: float,
    rng: random.Random,
    gravity: float = 45.0,
    damping: float = 0.99,
) -> None:
    if orn.motion == "pendulum":
        step_pendulum(orn, dt, now, rng, gravity=gravity, damping=damping)
    elif orn.motion == "sway":
        step_sway(orn, dt, now)


# ---------- Geometry ----------
def bob_position(anchor: Point, length: float, angle: float) -> Point:
    return Point(
        anchor.x + length * math.sin(angle),
        anchor.y + length * math.cos(angle),
    )


def sag_amount(anchor: Point, bob: Point, angle: float, cap_px: float, ratio: float) -> float:
    """Bulge height of the chain; grows with distance and with the swing angle."""
    dist = math.hypot(bob.x - anchor.x, bob.y - anchor.y)
    return min(cap_px, dist * ratio) * (1 + min(abs(angle), 1))


def sag_point(anchor: Point, bob: Point, sag: float, t: float) -> Point:
    """Point at parameter ``t`` on the anchor-bob segment with a sine bulge."""
    return Point(
        anchor.x + (bob.x - anchor.x) * t,
        anchor.y + (bob.y - anchor.y) * t + sag * math.sin(math.pi * t),
    )


def chain_points(orn: Ornament) -> list[Point]:
    """Sample the sagging chain of a pendulum ornament.

    Bead chains return one point per link (``t = i / segments``); ropes also
    include the anchor so they can be stroked as a polyline.
    """
    if orn.chain is None or orn.segments <= 0:
        return []
    bob = orn.bob()
    sag = sag_amount(orn.anchor, bob, orn.angle, orn.chain.sag_cap_px, orn.chain.sag_ratio)
    points = [sag_point(orn.anchor, bob, sag, i / orn.segments) for i in range(1, orn.segments + 1)]
    if orn.chain.kind == "rope":
        points.insert(0, Point(orn.anchor.x, orn.anchor.y))
    return points


def charm_position(orn: Ornament) -> Point | None:
    """Where a charm rides on the chain, following the sag curve."""
    if orn.charm is None or orn.chain is None:
        return None
    bob = orn.bob()
    sag = sag_amount(orn.anchor, bob, orn.angle, orn.chain.sag_cap_px, orn.chain.sag_ratio)
    return sag_point(orn.anchor, bob, sag, orn.charm.t)
