# particle_system.py

import numpy as np
import pygame
import logging
import numba
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union
import constants
from emissions import GasType, lookup
from particle import Particle, ParticleKind

logger = logging.getLogger("ghg_sim")

# --- JIT-Compiled Color Function ---
# Kept outside the ParticleSystem class and operating only on NumPy arrays and
# scalars, as required by Numba's nopython mode.

@numba.jit(nopython=True)
def _interpolate_color_jit(warming_ratio, stop_ratios, stop_colors):
    """
    Piecewise-linear interpolation between background color stops.
    The lower stop is the last stop (excluding the final one) whose ratio is
    <= warming_ratio, so ties resolve to the later stop.
    """
    start = 0
    for i in range(stop_ratios.shape[0] - 1):
        if warming_ratio >= stop_ratios[i]:
            start = i
    end = start + 1

    local_ratio = (warming_ratio - stop_ratios[start]) / (stop_ratios[end] - stop_ratios[start])
    r = stop_colors[start, 0] + (stop_colors[end, 0] - stop_colors[start, 0]) * local_ratio
    g = stop_colors[start, 1] + (stop_colors[end, 1] - stop_colors[start, 1]) * local_ratio
    b = stop_colors[start, 2] + (stop_colors[end, 2] - stop_colors[start, 2]) * local_ratio
    return r, g, b


_STOP_RATIOS = np.array([ratio for ratio, _ in constants.COLOR_STOPS], dtype=float)
_STOP_COLORS = np.array([color for _, color in constants.COLOR_STOPS], dtype=float)


def background_color_for_ratio(warming_ratio: float) -> Tuple[float, float, float]:
    r, g, b = _interpolate_color_jit(float(warming_ratio), _STOP_RATIOS, _STOP_COLORS)
    return (float(r), float(g), float(b))


@dataclass(frozen=True)
class Drawable:
    x: float
    y: float
    radius: float
    color: Tuple[int, int, int, float]
    glow_intensity: int


@dataclass
class FrameReport:
    """Everything a renderer and the HUD need to paint one frame."""
    tick: int
    warming_ratio: float
    background_color: Tuple[float, float, float, float]
    live_counts: Dict[str, int]
    drawables: List[Drawable] = field(default_factory=list)


_COUNT_KEYS = {
    ParticleKind.CO2: "co2",
    ParticleKind.CH4: "ch4",
    ParticleKind.R410A: "r410a",
}


class ParticleSystem:
    """
    Owns every live emission particle and the running total of their warming
    potential.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
        - bounds (tuple): The (width, height) of the canvas.
    - Outputs: advance_frame() returns a FrameReport.
    - Side Effects: Manages the lifecycle of all particles.
    - Invariants: total_warming_potential equals the sum of warming_contribution
      over self.particles. It is maintained incrementally on spawn, decay and
      expiry, never by rescanning.
      CO2-family particles are never removed, so memory grows with every CO2
      emission. This is accepted behavior.
    """
    def __init__(self, config: dict, rng: np.random.Generator, bounds: tuple):
        self.config = config
        self.rng = rng
        self.width, self.height = bounds
        self.max_warming_potential = config.get('max_warming_potential', constants.MAX_WARMING_POTENTIAL)
        self.time_step = constants.TIME_STEP

        self.particles: List[Particle] = []
        self.total_warming_potential = 0.0
        self.tick = 0

        logger.info(f"ParticleSystem created with bounds {self.width}x{self.height}, "
                    f"max warming potential {self.max_warming_potential}.")

    @property
    def num_particles(self) -> int:
        return len(self.particles)

    @property
    def warming_ratio(self) -> float:
        ratio = self.total_warming_potential / self.max_warming_potential
        return min(max(ratio, 0.0), 1.0)

    def spawn(self, gas: Union[GasType, str]) -> Particle:
        """
        Emits one particle of the given gas at a random point on the bottom edge.

        - Raises: ValueError if gas is not a known gas type.
        """
        gas = GasType(gas)
        x = self.rng.random() * self.width
        particle = Particle.from_gas(gas, x, self.height)
        self.particles.append(particle)
        self.total_warming_potential += particle.warming_contribution

        logger.debug(f"Spawned {gas.value} at x={x:.1f}, contribution={particle.warming_contribution:.4f}, "
                     f"total={self.total_warming_potential:.4f}")
        return particle

    def _random_horizontal_velocity(self) -> float:
        return self.rng.uniform(-1.0, 1.0)

    def _decay(self, particle: Particle) -> Particle:
        """Swaps a methane particle for its decayed CO2 form and adjusts the total."""
        co2 = lookup(GasType.CO2)
        ch4 = lookup(GasType.CH4)
        self.total_warming_potential -= (
            ch4.warming_potential_factor * ch4.baseline_quantity
            - co2.warming_potential_factor * ch4.baseline_quantity
        )
        decayed = particle.decayed(self._random_horizontal_velocity())
        logger.debug(f"CH4 decayed to CO2 at age {particle.age:.3f}s, total={self.total_warming_potential:.4f}")
        return decayed

    def _bounce(self, particle: Particle):
        """Reflects CO2-family particles off the canvas edges."""
        if particle.is_moving_off_vertical_edge(self.height):
            particle.velocity[1] *= -1
            particle.velocity[0] = self._random_horizontal_velocity()
        if particle.is_moving_off_horizontal_edge(self.width):
            particle.velocity[0] *= -1

    def advance_frame(self) -> FrameReport:
        """
        Runs one fixed-step update of every particle and reports the result.

        Per particle: integrate, age, decay methane, bounce CO2, expire
        escaped non-CO2 particles, then apply methane jitter and refrigerant
        breathing. Survivors are collected into a new list, so removal never
        skips or repeats a particle.
        """
        # The background reflects the total as it stood before this frame's updates.
        ratio = self.warming_ratio
        r, g, b = background_color_for_ratio(ratio)

        survivors = []
        counts = {key: 0 for key in _COUNT_KEYS.values()}
        drawables = []

        for particle in self.particles:
            particle.update(self.time_step)

            if particle.should_decay():
                particle = self._decay(particle)

            if particle.kind.is_co2_family:
                self._bounce(particle)
            elif particle.has_escaped():
                self.total_warming_potential -= particle.warming_contribution
                logger.debug(f"{particle.kind.value} escaped, total={self.total_warming_potential:.4f}")
                continue

            if particle.kind is ParticleKind.CH4:
                particle.position[0] += self.rng.uniform(-2.0, 2.0)
            if particle.breathes:
                particle.breathe()

            survivors.append(particle)
            counts[_COUNT_KEYS[particle.kind.display_category]] += 1
            drawables.append(Drawable(
                x=float(particle.position[0]),
                y=float(particle.position[1]),
                radius=particle.radius,
                color=particle.color,
                glow_intensity=particle.glow_intensity,
            ))

        self.particles = survivors
        self.tick += 1

        return FrameReport(
            tick=self.tick,
            warming_ratio=ratio,
            background_color=(r, g, b, constants.TRAIL_ALPHA),
            live_counts=counts,
            drawables=drawables,
        )

    def draw(self, screen: pygame.Surface, frame: FrameReport, is_glow_pass: bool):
        """
        Draws the frame's particles.
        The particle pass blits each circle through its own alpha layer so
        particles blend with the trails and with each other. The glow pass
        enlarges each circle by its glow intensity so the bloom blur spreads
        further for the more potent gases.
        """
        for drawable in frame.drawables:
            r, g, b, alpha = drawable.color
            size = max(int(drawable.radius + (drawable.glow_intensity * 0.5 if is_glow_pass else 0)), 1)
            rgba = (r, g, b, int(alpha * 255))
            center = (int(drawable.x), int(drawable.y))

            if is_glow_pass:
                pygame.draw.circle(screen, rgba, center, size)
                continue

            layer = pygame.Surface((size * 2 + 1, size * 2 + 1), pygame.SRCALPHA)
            pygame.draw.circle(layer, rgba, (size, size), size)
            screen.blit(layer, (center[0] - size, center[1] - size))
