"""Result containers for recorded simulation data.

These dataclasses are plain Python structures intended for logging, testing,
and post-processing. They intentionally avoid references to live scene
objects, so a recorded sample never changes after it is taken.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class OrnamentSample:
    """Snapshot of one ornament at a single time sample."""

    name: str
    angle: float
    angular_velocity: float
    bob: tuple[float, float]


@dataclass(slots=True)
class SimulationSample:
    """Recorded scene state at one time instant."""

    time: float
    ornaments: list[OrnamentSample]
    lit_lights: int
    spin_angle: float


@dataclass(slots=True)
class SimulationResult:
    """Accumulated samples produced by a simulation runner."""

    samples: list[SimulationSample] = field(default_factory=list)
    frames: int = 0

    def add_sample(self, sample: SimulationSample) -> None:
        """Append one sample to the result sequence."""
        self.samples.append(sample)

    def series(self, name: str) -> list[float]:
        """Return the recorded angle history of ornament ``name``."""
        out = []
        for sample in self.samples:
            for orn in sample.ornaments:
                if orn.name == name:
                    out.append(orn.angle)
        return out
