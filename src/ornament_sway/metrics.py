"""Simple metrics over recorded simulation results."""

from __future__ import annotations

from .results import SimulationResult


def max_abs_angle(result: SimulationResult, name: str) -> float:
    """Return the largest deflection recorded for ornament ``name``."""
    return max((abs(a) for a in result.series(name)), default=0.0)


def swing_range(result: SimulationResult, name: str) -> float:
    """Return the peak-to-peak angle recorded for ornament ``name``."""
    angles = result.series(name)
    if not angles:
        return 0.0
    return max(angles) - min(angles)


def mean_lit_fraction(result: SimulationResult, total_lights: int) -> float:
    if not result.samples or total_lights <= 0:
        return 0.0
    return sum(s.lit_lights for s in result.samples) / (len(result.samples) * total_lights)
