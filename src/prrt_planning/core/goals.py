"""
Goal representations. A goal answers whether a state satisfies it and records the solution path a planner found.

Planners only rely on the Goal interface. GoalSampleableRegion adds direct sampling of goal states, which planners
use for goal biasing when it is available.
"""
from abc import ABC, abstractmethod
import math
import threading

import numpy as np

__all__ = ['Goal', 'GoalRegion', 'GoalSampleableRegion', 'GoalState', 'GoalStates']


class Goal(ABC):

    def __init__(self):
        self.clear_solution_path()

    @abstractmethod
    def is_satisfied(self, state):
        """
        Args:
            state (array-like): State to test.

        Returns:
            (bool, float): Whether the state satisfies the goal and its distance to the goal.
        """
        pass

    def set_difference(self, difference):
        self.difference = difference

    def get_difference(self):
        return self.difference

    def set_solution_path(self, path, approximate=False):
        self.path = path
        self.approximate = approximate

    def get_solution_path(self):
        return self.path

    def is_approximate(self):
        return self.approximate

    def is_achieved(self):
        return self.path is not None and not self.approximate

    def clear_solution_path(self):
        self.path = None
        self.approximate = False
        self.difference = math.inf


class GoalRegion(Goal):
    """
    A goal defined by a distance function and a threshold: every state within threshold of the region satisfies it.
    """

    def __init__(self, threshold=0.0):
        if threshold < 0:
            raise ValueError("Goal threshold must not be negative.")
        super().__init__()
        self.threshold = threshold

    @abstractmethod
    def distance_goal(self, state):
        pass

    def is_satisfied(self, state):
        distance = self.distance_goal(state)
        return distance <= self.threshold, distance


class GoalSampleableRegion(GoalRegion):

    @abstractmethod
    def sample_goal(self):
        """
        Returns:
            ndarray: A state from the goal region.
        """
        pass

    @abstractmethod
    def max_sample_count(self):
        pass


class GoalState(GoalSampleableRegion):
    """
    A single goal state; states within threshold of it satisfy the goal.

    Args:
        state_space (RealVectorStateSpace): Provides the distance function.
        state (array-like): The goal state.
        threshold (float, optional): Satisfaction radius. Defaults to 0.
    """

    def __init__(self, state_space, state, threshold=0.0):
        super().__init__(threshold=threshold)
        self.state_space = state_space
        self.state = np.array(state, dtype=float)

    def distance_goal(self, state):
        return self.state_space.distance(state, self.state)

    def sample_goal(self):
        return np.array(self.state)

    def max_sample_count(self):
        return 1


class GoalStates(GoalSampleableRegion):
    """
    A set of goal states. The distance to the goal is the distance to the closest one, and sampling cycles through
    them in order.
    """

    def __init__(self, state_space, states=None, threshold=0.0):
        super().__init__(threshold=threshold)
        self.state_space = state_space
        self.states = [np.array(state, dtype=float) for state in states] if states is not None else []
        self._sample_position = 0
        self._lock = threading.Lock()

    def add_state(self, state):
        self.states.append(np.array(state, dtype=float))

    def distance_goal(self, state):
        if len(self.states) == 0:
            return math.inf
        return min(self.state_space.distance(state, goal) for goal in self.states)

    def sample_goal(self):
        if len(self.states) == 0:
            raise ValueError("There are no goal states to sample from.")
        with self._lock:
            state = self.states[self._sample_position % len(self.states)]
            self._sample_position += 1
        return np.array(state)

    def max_sample_count(self):
        return len(self.states)
