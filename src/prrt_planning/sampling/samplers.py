"""
Class for different sampling strategies.
"""
import random

import numpy as np

__all__ = ['UniformSampler']


class UniformSampler():

    """
    Uniformly samples at random each dimension given the provided limits.

    Each instance owns its random number generator, so one instance per planning thread can be used without locking.

    Attributes:
        dimension_limits (list): List of (min, max) tuples, one per dimension.
        rng (random.Random): The private random number generator.
    """

    def __init__(self, dimension_limits, seed=None):
        self.dimension_limits = [tuple(limit) for limit in dimension_limits]
        self.rng = random.Random(seed)

    def sample(self):
        """
        Samples a random state.

        Returns:
            ndarray: Random sample.
        """
        return np.array([self.rng.uniform(limit[0], limit[1]) for limit in self.dimension_limits])

    def uniform01(self):
        """
        Returns:
            float: A random value in [0, 1).
        """
        return self.rng.random()
