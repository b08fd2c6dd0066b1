# emissions.py

"""
Emission Registry

Static lookup of the greenhouse gases that can be emitted into the atmosphere.
Warming potentials are GWP20 values; baseline quantities are representative
amounts for a single emission event (one flight, one cow, one window AC unit).

Data Contract:
- All profiles are immutable.
- lookup() is pure and total over GasType. Anything else is a wiring bug and
  raises ValueError.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union


class GasType(enum.Enum):
    CO2 = "CO2"
    CH4 = "CH4"
    R410A = "R410a"


@dataclass(frozen=True)
class GasProfile:
    warming_potential_factor: float
    baseline_quantity: float
    lifetime_seconds: Optional[float]
    color: Tuple[int, int, int, float]  # RGBA, alpha in [0, 1]
    glow_radius: int
    ascent_speed: float  # Units per frame, negative is upward.
    breathes: bool = False

    @property
    def warming_contribution(self) -> float:
        return self.warming_potential_factor * self.baseline_quantity

    @property
    def base_radius(self) -> float:
        return radius_for_contribution(self.warming_contribution)


def radius_for_contribution(contribution: float) -> float:
    return 3 + contribution * 1.5


_PROFILES = {
    GasType.CO2: GasProfile(
        warming_potential_factor=1,
        baseline_quantity=1.0,
        lifetime_seconds=None,
        color=(150, 150, 255, 0.7),
        glow_radius=5,
        ascent_speed=-1.0,
    ),
    GasType.CH4: GasProfile(
        warming_potential_factor=84,
        baseline_quantity=0.1,
        lifetime_seconds=12,
        color=(255, 100, 100, 0.7),
        glow_radius=30,
        ascent_speed=-1.5,
    ),
    GasType.R410A: GasProfile(
        warming_potential_factor=4340,
        baseline_quantity=0.000567,
        lifetime_seconds=None,
        color=(148, 0, 211, 0.7),
        glow_radius=20,
        ascent_speed=-1.0,
        breathes=True,
    ),
}


def lookup(gas: Union[GasType, str]) -> GasProfile:
    """
    Returns the profile for a gas type.

    - Inputs: gas (GasType or its string value, e.g. "R410a").
    - Raises: ValueError for anything that is not a known gas type.
    """
    return _PROFILES[GasType(gas)]
