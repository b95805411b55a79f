"""Frame stepping and sampling interfaces.

`SimulationRunner` is the intended entrypoint for advancing a loaded scene
without a display and recording results in a consistent format. It drives the
scene from a :class:`FrameClock`, which stands in for the display refresh
callback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .config import SimulationConfig
from .render import RenderSink, compose_frame
from .results import OrnamentSample, SimulationResult, SimulationSample
from .scene import SceneController


logger = logging.getLogger(__name__)

# Called with (controller, now_ms, frame_number).
FrameHook = Callable[[SceneController, float, int], None]


@dataclass(slots=True)
class FrameClock:
    """Monotonic millisecond clock advancing by a fixed frame interval."""

    frame_ms: float = 1000.0 / 60.0
    now: float = 0.0

    def advance(self, ms: float | None = None) -> float:
        """Move forward by ``ms`` (default one frame) and return the new time."""
        step = self.frame_ms if ms is None else ms
        self.now += max(step, 0.0)
        return self.now


def sample_scene(controller: SceneController, now: float) -> SimulationSample:
    ctx = controller.context
    ornaments = []
    for orn in ctx.ornaments:
        bob = orn.bob()
        ornaments.append(OrnamentSample(orn.name, orn.angle, orn.angular_velocity, (bob.x, bob.y)))
    lit = sum(1 for light in ctx.lights if light.on)
    return SimulationSample(time=now, ornaments=ornaments, lit_lights=lit, spin_angle=ctx.spin.angle)


@dataclass(slots=True)
class SimulationRunner:
    """Execute a configured scene and collect sampled outputs."""

    config: SimulationConfig

    def run(
        self,
        controller: SceneController,
        clock: FrameClock | None = None,
        sink: RenderSink | None = None,
        before_tick: FrameHook | None = None,
        after_tick: FrameHook | None = None,
    ) -> SimulationResult:
        """Tick a loaded scene for ``config.duration_ms`` and record samples.

        Every frame is composed and handed to ``sink`` when one is given.
        ``before_tick`` runs ahead of each tick (viewport events belong there),
        ``after_tick`` once the frame has been stepped and sampled.

        Raises:
            ValueError: if the scene has not been loaded.
        """
        if not controller.ready:
            raise ValueError("controller must be loaded before running")
        if self.config.frame_ms <= 0.0:
            raise ValueError("config.frame_ms must be > 0")
        every = max(1, int(self.config.sample_every_n_frames))

        clock = clock or FrameClock(self.config.frame_ms, controller.context.last_time)
        end = clock.now + self.config.duration_ms
        result = SimulationResult()

        while clock.now < end:
            now = clock.advance()
            frame = result.frames + 1
            if before_tick is not None:
                before_tick(controller, now, frame)
            controller.tick(now)
            result.frames = frame
            if frame % every == 0:
                result.add_sample(sample_scene(controller, now))
            if sink is not None:
                sink.draw(compose_frame(controller.context))
            if after_tick is not None:
                after_tick(controller, now, frame)

        logger.info("Ran %d frames, %d samples", result.frames, len(result.samples))
        return result
