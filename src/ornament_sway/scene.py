"""Simulation context and the controller that owns it.

`SceneController` is the single owner of all animated entities. It stays inert
until :meth:`SceneController.load` has received every decoded asset, then
advances ornaments, lights and the spin controller once per :meth:`tick`.
Viewport changes only reach the layout components.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from .assets import AssetLoadError, ImageAsset
from .bounds import ImageBounds, compute_bounds
from .config import SceneConfig
from .layout import ReferenceFrame, Viewport, relayout
from .lights import Light, build_lights, step_lights
from .pendulum import Ornament, create_ornament, step_ornament
from .spin import SpinState, step_spin


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SceneContext:
    """All mutable scene state, passed explicitly to update and draw code."""

    config: SceneConfig
    viewport: Viewport
    images: dict[str, ImageAsset] = field(default_factory=dict)
    bounds: dict[str, ImageBounds] = field(default_factory=dict)
    reference: ReferenceFrame | None = None
    ornaments: list[Ornament] = field(default_factory=list)
    lights: list[Light] = field(default_factory=list)
    spin: SpinState = field(default_factory=SpinState)
    ready: bool = False
    last_time: float = 0.0
    frame: int = 0

    def ornament(self, name: str) -> Ornament:
        for orn in self.ornaments:
            if orn.name == name:
                return orn
        raise KeyError(name)


class SceneController:
    """Build a scene from assets and drive it frame by frame.

    Args:
        config: Scene description (ornaments, lights, spin, simulation).
        viewport: Initial viewport size.
        rng: Random source for every randomized parameter; defaults to a
            ``random.Random`` seeded from ``config.sim.seed``.
    """

    def __init__(
        self,
        config: SceneConfig,
        viewport: Viewport,
        rng: random.Random | None = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random(config.sim.seed)
        self.context = SceneContext(
            config=config,
            viewport=viewport,
            spin=SpinState.initial(config.spin),
        )

    @property
    def ready(self) -> bool:
        return self.context.ready

    def load(self, images: dict[str, ImageAsset], now: float) -> SceneContext:
        """Compute bounds, create ornaments and lights, and mark the scene ready.

        Raises:
            AssetLoadError: if an image the scene draws is missing.
        """
        ctx = self.context
        cfg = ctx.config
        missing = [key for key in cfg.required_images() if key not in images]
        if missing:
            raise AssetLoadError(f"Scene is missing assets: {', '.join(missing)}")

        ctx.images = dict(images)
        ctx.bounds = {key: compute_bounds(img) for key, img in images.items()}
        top_line = images[cfg.reference_key]
        ctx.reference = ReferenceFrame(
            width=top_line.width,
            height=top_line.height,
            bounds=ctx.bounds[cfg.reference_key],
            anchor_y=cfg.anchor_y,
        )

        ctx.ornaments = [create_ornament(spec, top_line.width, self.rng) for spec in cfg.ornaments]
        relayout(ctx.ornaments, ctx.viewport.width, ctx.reference)
        ctx.lights = self._build_lights(now)
        ctx.last_time = now
        ctx.ready = True
        logger.info(
            "Scene ready: %d ornaments, %d lights", len(ctx.ornaments), len(ctx.lights)
        )
        return ctx

    def _build_lights(self, now: float) -> list[Light]:
        ctx = self.context
        return build_lights(
            ctx.viewport.width,
            ctx.viewport.height,
            ctx.reference.bounds,
            ctx.reference.anchor_y,
            now,
            self.rng,
            ctx.config.lights,
        )

    def on_viewport_change(self, width: float, height: float, now: float) -> None:
        """Re-anchor ornaments and rebuild the light string for a new viewport."""
        ctx = self.context
        ctx.viewport = Viewport(width, height)
        if not ctx.ready:
            return
        relayout(ctx.ornaments, width, ctx.reference)
        ctx.lights = self._build_lights(now)

    def tick(self, now: float) -> bool:
        """Advance every entity to clock time ``now`` (ms).

        Returns ``False`` without doing anything while the scene is not ready.
        """
        ctx = self.context
        if not ctx.ready:
            return False
        sim = ctx.config.sim
        delta_ms = min(max(now - ctx.last_time, 0.0), sim.max_step_ms)
        dt = delta_ms / 1000.0

        for orn in ctx.ornaments:
            step_ornament(orn, dt, now, self.rng, gravity=sim.gravity, damping=sim.damping)
        step_spin(ctx.spin, dt, now, self.rng, ctx.config.spin)
        step_lights(ctx.lights, now, self.rng, ctx.config.lights)

        ctx.last_time = now
        ctx.frame += 1
        return True
