# particle.py

import enum
import math
import numpy as np
from emissions import GasType, lookup, radius_for_contribution


class ParticleKind(enum.Enum):
    CO2 = "CO2"
    CH4 = "CH4"
    R410A = "R410a"
    CO2_DECAYED = "CO2_decayed"

    @property
    def is_co2_family(self) -> bool:
        return self in (ParticleKind.CO2, ParticleKind.CO2_DECAYED)

    @property
    def display_category(self) -> "ParticleKind":
        """Decayed methane is counted and drawn as CO2."""
        return ParticleKind.CO2 if self is ParticleKind.CO2_DECAYED else self


class Particle:
    """
    Represents a single emission event in the atmosphere.

    Data Contract:
    - position: np.ndarray [x, y] in canvas pixels.
    - velocity: np.ndarray [horizontal, vertical] in pixels per frame.
    - age: simulated seconds since spawn.
    - warming_contribution: this particle's share of the system's total
      warming potential. Changes only through decayed().
    - breathes: whether the radius oscillates with age, taken from the gas profile.
    """
    def __init__(self, kind: ParticleKind, position: np.ndarray, velocity: np.ndarray,
                 warming_contribution: float, color: tuple, glow_intensity: int, age: float = 0.0,
                 breathes: bool = False):
        self.kind = kind
        self.position = position
        self.velocity = velocity
        self.warming_contribution = warming_contribution
        self.color = color
        self.glow_intensity = glow_intensity
        self.age = age
        self.breathes = breathes
        self.radius = radius_for_contribution(warming_contribution)

    @classmethod
    def from_gas(cls, gas: GasType, x: float, y: float) -> "Particle":
        profile = lookup(gas)
        return cls(
            kind=ParticleKind(gas.value),
            position=np.array([x, y], dtype=float),
            velocity=np.array([0.0, profile.ascent_speed], dtype=float),
            warming_contribution=profile.warming_contribution,
            color=profile.color,
            glow_intensity=profile.glow_radius,
            breathes=profile.breathes,
        )

    @property
    def base_radius(self) -> float:
        return radius_for_contribution(self.warming_contribution)

    def update(self, time_step: float):
        """
        Advances the particle by one fixed step.
        p_new = p_old + v
        """
        self.position += self.velocity
        self.age += time_step

    def should_decay(self) -> bool:
        # Strict inequality: a methane particle aged exactly its lifetime has not decayed yet.
        if self.kind is not ParticleKind.CH4:
            return False
        return self.age > lookup(GasType.CH4).lifetime_seconds

    def decayed(self, horizontal_velocity: float) -> "Particle":
        """
        Returns the CO2 particle this methane particle turns into.

        The decayed particle carries CO2's warming potential factor applied to
        the methane's own baseline quantity. Position, vertical velocity and age
        carry over; the horizontal velocity is replaced.
        """
        co2 = lookup(GasType.CO2)
        ch4 = lookup(GasType.CH4)
        velocity = np.array([horizontal_velocity, self.velocity[1]], dtype=float)
        return Particle(
            kind=ParticleKind.CO2_DECAYED,
            position=self.position.copy(),
            velocity=velocity,
            warming_contribution=co2.warming_potential_factor * ch4.baseline_quantity,
            color=co2.color,
            glow_intensity=co2.glow_radius,
            age=self.age,
        )

    def breathe(self):
        """Recomputes the oscillating radius from age. Never accumulates."""
        self.radius = self.base_radius * (1 + math.sin(self.age * 5) * 0.2)

    def is_moving_off_vertical_edge(self, height: float) -> bool:
        vy = self.velocity[1]
        y = self.position[1]
        return (y < self.radius and vy < 0) or (y > height - self.radius and vy > 0)

    def is_moving_off_horizontal_edge(self, width: float) -> bool:
        vx = self.velocity[0]
        x = self.position[0]
        return (x < self.radius and vx < 0) or (x > width - self.radius and vx > 0)

    def has_escaped(self) -> bool:
        """True once the particle is more than one radius above the top edge."""
        return self.position[1] < -self.radius
