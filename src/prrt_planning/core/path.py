import numpy as np

from prrt_planning.local.evaluation import incremental_evaluate
from prrt_planning.local.interpolation import cumulative_distance

__all__ = ['Path']


class Path():
    """
    A sequence of states running from a start state towards the goal.

    Attributes:
        states (list): List of ndarray states, in order.
    """

    def __init__(self, states=None):
        self.states = [np.array(state, dtype=float) for state in states] if states is not None else []

    def __len__(self):
        return len(self.states)

    def __iter__(self):
        return iter(self.states)

    def __getitem__(self, idx):
        return self.states[idx]

    def append(self, state):
        self.states.append(np.array(state, dtype=float))

    def length(self):
        return cumulative_distance(self.states)

    def check(self, state_space):
        """
        Checks that every state is in bounds and valid and that every consecutive pair is a valid motion.

        Args:
            state_space (RealVectorStateSpace): The space to check against.

        Returns:
            bool: Whether or not the path is feasible.
        """
        if not incremental_evaluate(lambda q: state_space.satisfies_bounds(q) and state_space.is_valid(q), self.states):
            return False
        for s1, s2 in zip(self.states, self.states[1:]):
            if not state_space.check_motion(s1, s2):
                return False
        return True

    def as_list(self):
        return [[float(val) for val in state] for state in self.states]
