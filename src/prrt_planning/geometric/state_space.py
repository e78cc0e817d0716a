import math

import numpy as np

from prrt_planning.local.evaluation import subdivision_evaluate
from prrt_planning.local.interpolation import parametric_lerp
from prrt_planning.sampling.samplers import UniformSampler

__all__ = ['RealVectorStateSpace', 'R2']


class RealVectorStateSpace():
    """
    A bounded euclidean configuration space.

    Motions are checked by discretizing the straight line between two states so that consecutive checked points are at
    most resolution * (longest extent of the space) apart, and evaluating those points by subdivision.

    Args:
        limits (list): List of [name, (min, max)] pairs, one per dimension.
        state_validity_checker (StateValidityChecker, optional): Validity of single states. Without one every
            in-bounds state is valid.
        resolution (float, optional): Motion checking resolution as a fraction of the longest extent. Defaults to .01.
        sampler_cls (class, optional): Sampler class constructed as sampler_cls(bounds, seed=seed). Defaults to
            UniformSampler.
    """

    def __init__(self, limits, state_validity_checker=None, resolution=.01, sampler_cls=None):
        if len(limits) == 0:
            raise ValueError("A state space needs at least one dimension.")
        for name, (lower, upper) in limits:
            if not lower < upper:
                raise ValueError("Limit {} has lower bound {} not below upper bound {}".format(name, lower, upper))
        if resolution <= 0:
            raise ValueError("Motion checking resolution must be positive.")
        self.limits = [[name, (float(lower), float(upper))] for name, (lower, upper) in limits]
        self.svc = state_validity_checker
        self.resolution = resolution
        self.sampler_cls = sampler_cls if sampler_cls is not None else UniformSampler
        self._lower = np.array([limit[1][0] for limit in self.limits])
        self._upper = np.array([limit[1][1] for limit in self.limits])
        self._max_extent = float(np.max(self._upper - self._lower))

    def get_bounds(self):
        return [limit[1] for limit in self.limits]

    def dimension(self):
        return len(self.limits)

    def component_range(self, i):
        return self.limits[i][1]

    def allocate_sampler(self, seed=None):
        return self.sampler_cls(self.get_bounds(), seed=seed)

    def copy_state(self, destination, source):
        destination[:] = source

    def distance(self, s1, s2):
        return float(np.linalg.norm(np.asarray(s1, dtype=float) - np.asarray(s2, dtype=float)))

    def satisfies_bounds(self, state):
        state = np.asarray(state, dtype=float)
        if state.shape != self._lower.shape:
            return False
        return bool(np.all(state >= self._lower) and np.all(state <= self._upper))

    def is_valid(self, state):
        if self.svc is None:
            return True
        return bool(self.svc.validate(state))

    def check_motion(self, s1, s2):
        """
        Checks the straight line motion between two states for bounds and validity.

        Args:
            s1 (array-like): Start of the motion, assumed to be valid already.
            s2 (array-like): End of the motion.

        Returns:
            bool: Whether or not every discretized point of the motion is valid.
        """
        if not self.satisfies_bounds(s2) or not self.is_valid(s2):
            return False
        steps = int(math.ceil(self.distance(s1, s2) / (self.resolution * self._max_extent)))
        if steps <= 1:
            return True
        # Both end points are already known to be valid.
        interior = parametric_lerp(s1, s2, steps + 1)[1:-1]
        return subdivision_evaluate(lambda q: self.satisfies_bounds(q) and self.is_valid(q), interior)


class R2(RealVectorStateSpace):

    def __init__(self, limits=None, state_validity_checker=None, resolution=.01, sampler_cls=None):
        limits = [['x', (0, 10)], ['y', (0, 10)]] if limits is None else limits
        super().__init__(limits, state_validity_checker=state_validity_checker,
                         resolution=resolution, sampler_cls=sampler_cls)
