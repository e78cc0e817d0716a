import numpy as np

from prrt_planning.core.goals import GoalState

__all__ = ['ProblemDefinition']


class ProblemDefinition():
    """
    The start states and the goal of a planning query.

    Args:
        state_space (RealVectorStateSpace): The space the query is posed in.
    """

    def __init__(self, state_space):
        self.state_space = state_space
        self.start_states = []
        self.goal = None

    def add_start_state(self, state):
        self.start_states.append(np.array(state, dtype=float))

    def clear_start_states(self):
        self.start_states = []

    def get_start_state(self, idx):
        return self.start_states[idx]

    def get_start_state_count(self):
        return len(self.start_states)

    def set_goal(self, goal):
        self.goal = goal

    def get_goal(self):
        return self.goal

    def set_start_and_goal_states(self, start, goal, threshold=0.0):
        self.clear_start_states()
        self.add_start_state(start)
        self.set_goal(GoalState(self.state_space, goal, threshold=threshold))
