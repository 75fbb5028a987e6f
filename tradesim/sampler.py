"""
Outcome Sampler for the Trade Simulator

Draws a single signed R-multiple from a strategy profile using one
uniform draw in [0, 1) from the random source.
"""

import logging
from typing import Optional, Protocol

import numpy as np

from .models.simulation import StrategyProfile


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything exposing random() -> float in [0, 1)"""
    def random(self) -> float: ...


def create_random_source(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the default random source.

    Args:
        seed: Optional seed for a replayable sequence

    Returns:
        numpy Generator (PCG64)
    """
    return np.random.default_rng(seed)


def sample_r_multiple(profile: StrategyProfile, random_source: RandomSource) -> float:
    """
    Draw one trade outcome.

    Returns +reward_r when the draw falls below the clamped win
    probability, else -loss_r. Consumes exactly one draw.
    """
    draw = float(random_source.random())
    if draw < profile.win_probability:
        return float(profile.reward_r)
    return -float(profile.loss_r)


class OutcomeSampler:
    """
    Stateful wrapper binding a random source to the sampling function.
    """
    
    def __init__(self, random_source: Optional[RandomSource] = None, seed: Optional[int] = None):
        self.random_source = random_source if random_source is not None else create_random_source(seed)
    
    def sample(self, profile: StrategyProfile) -> float:
        """Draw one R-multiple for the given profile"""
        return sample_r_multiple(profile, self.random_source)
    
    def reseed(self, seed: Optional[int] = None):
        """Replace the random source with a freshly seeded default source"""
        self.random_source = create_random_source(seed)
        logger.debug(f"Outcome sampler reseeded (seed={seed})")
