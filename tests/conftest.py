import os

# Headless pygame for every test module.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pytest

from particle_system import ParticleSystem


@pytest.fixture
def make_system():
    """Builds a seeded ParticleSystem for the given canvas bounds."""
    def _make(bounds=(800, 600), seed=1234, **config):
        return ParticleSystem(config=config, rng=np.random.default_rng(seed), bounds=bounds)
    return _make
