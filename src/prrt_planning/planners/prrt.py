import threading
import time

import numpy as np
import igraph as ig

from prrt_planning.core.goals import GoalSampleableRegion
from prrt_planning.core.log import Logger
from prrt_planning.core.motion import Motion
from prrt_planning.core.path import Path
from prrt_planning.local.neighbors import SharedNearestNeighbors
from prrt_planning.planners.solution import SolutionInfo
from prrt_planning.planners import utils

__all__ = ['PRRT']


class PRRT():
    """
    Parallel Rapidly-exploring Random Tree.

    Several threads grow one shared tree from the start states. Each thread repeatedly samples a state (the goal, with
    probability goal_bias, when the goal can be sampled), finds the closest tree node, steps from it towards the sample,
    and adds the new node if the motion is valid. Planning stops once any thread reaches the goal or the time budget is
    spent; in the latter case the node closest to the goal is reported as an approximate solution.

    Args:
        state_space (RealVectorStateSpace): Space to plan in. Provides bounds, validity and motion checking, samplers.
        problem_definition (ProblemDefinition): Start states and goal.
        params (dict, optional): 'goal_bias' (default .05), 'rho' (default .5), 'thread_count' (default 2), 'seed'
            (default None), 'log_level' (default 'info').
        nearest_neighbors (object, optional): Nearest neighbor index to store the tree in. Defaults to a KDTree index.
        logger (Logger, optional): Defaults to a 'logging' Logger named PRRT.
    """

    def __init__(self, state_space, problem_definition, params=None, nearest_neighbors=None, logger=None):
        params = params if params is not None else {}
        self.state_space = state_space
        self.pdef = problem_definition
        self.nn = SharedNearestNeighbors(nearest_neighbors)
        self.seed = params.get('seed', None)
        self.log = logger if logger is not None else Logger(name="PRRT", handlers=['logging'], level=params.get('log_level', 'info'))
        self.set_goal_bias(params.get('goal_bias', .05))
        self.set_range(params.get('rho', .5))
        self.samplers = []
        self.set_thread_count(params.get('thread_count', 2))
        self.added_start_states = 0
        self.solution_info = None
        self.log.debug("goal_bias: {}, rho: {}, thread_count: {}".format(self.goal_bias, self.rho, self.thread_count))

    def get_goal_bias(self):
        return self.goal_bias

    def set_goal_bias(self, goal_bias):
        if not 0.0 <= goal_bias <= 1.0:
            raise ValueError("Goal bias must be a probability in [0, 1], got {}".format(goal_bias))
        self.goal_bias = goal_bias

    def get_range(self):
        return self.rho

    def set_range(self, rho):
        if not rho > 0:
            raise ValueError("rho must be positive, got {}".format(rho))
        self.rho = rho

    def get_thread_count(self):
        return self.thread_count

    def set_thread_count(self, thread_count):
        """
        Sets the number of planning threads and resizes the sampler pool to match. Must be called before solve().

        Args:
            thread_count (int): Positive number of threads.
        """
        if isinstance(thread_count, bool) or not isinstance(thread_count, int) or thread_count < 1:
            raise ValueError("Thread count must be a positive integer, got {}".format(thread_count))
        self.thread_count = thread_count
        del self.samplers[thread_count:]

    def clear(self):
        """
        Discards the tree and any solution held by the goal so that the next solve() starts from the start states again.
        """
        self.nn.clear()
        self.samplers = []
        self.added_start_states = 0
        self.solution_info = None
        goal = self.pdef.get_goal()
        if goal is not None:
            goal.clear_solution_path()

    def solve(self, solve_time):
        """
        Grows the tree until a goal state is reached or solve_time seconds have passed.

        A solution path, exact or approximate, is handed to the goal with set_solution_path().

        Args:
            solve_time (float): Time budget in seconds.

        Returns:
            bool: Whether or not the goal was achieved, i.e. an exact solution was found.
        """
        goal = self.pdef.get_goal()
        if goal is None:
            self.log.err("Goal undefined")
            return False
        goal_s = goal if isinstance(goal, GoalSampleableRegion) and goal.max_sample_count() > 0 else None

        dim = self.state_space.dimension()
        while self.added_start_states < self.pdef.get_start_state_count():
            st = self.pdef.get_start_state(self.added_start_states)
            self.added_start_states += 1
            if self.state_space.satisfies_bounds(st) and self.state_space.is_valid(st):
                motion = Motion(dim)
                self.state_space.copy_state(motion.state, st)
                self.nn.add(motion)
            else:
                self.log.err("Initial state {} is invalid!".format([float(val) for val in st]))

        if self.nn.size() == 0:
            self.log.err("There are no valid initial states!")
            return False

        self.log.info("Starting with {} states".format(self.nn.size()))

        end_time = time.perf_counter() + solve_time
        sol = SolutionInfo()
        self.solution_info = sol
        self._allocate_samplers()

        errors = []
        threads = [threading.Thread(target=self._run_thread, args=(tid, end_time, sol, goal, goal_s, errors),
                                    name="PRRT-{}".format(tid))
                   for tid in range(self.thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        if errors:
            raise errors[0]

        approximate = False
        solution = sol.solution
        if solution is None:
            solution = sol.approx_solution
            approximate = True

        if solution is not None:
            goal.set_difference(sol.approx_difference)
            goal.set_solution_path(self._reconstruct_path(solution), approximate)
            if approximate:
                self.log.warn("Found approximate solution")

        self.log.info("Created {} states".format(self.nn.size()))
        return goal.is_achieved()

    def get_states(self):
        """
        Returns:
            list: The states of every Motion in the tree.
        """
        return [np.array(motion.state) for motion in self.nn.list()]

    def get_planner_graph(self):
        """
        Builds a directed igraph Graph of the tree with parent to child edges weighted by their length.

        Returns:
            igraph.Graph: Vertex i is the Motion at arena index i with attributes 'name' and 'value'.
        """
        motions = sorted(self.nn.list(), key=lambda motion: motion.index)
        graph = ig.Graph(directed=True)
        graph.add_vertices(len(motions))
        if len(motions) == 0:
            return graph
        graph.vs['name'] = [utils.val2str(motion.state) for motion in motions]
        graph.vs['value'] = [[float(val) for val in motion.state] for motion in motions]
        edges = [(motion.parent, motion.index) for motion in motions if motion.parent is not None]
        graph.add_edges(edges)
        graph.es['weight'] = [self.state_space.distance(motions[p].state, motions[c].state) for p, c in edges]
        return graph

    def _allocate_samplers(self):
        while len(self.samplers) < self.thread_count:
            tid = len(self.samplers)
            seed = self.seed + tid if self.seed is not None else None
            self.samplers.append(self.state_space.allocate_sampler(seed=seed))

    def _run_thread(self, tid, end_time, sol, goal, goal_s, errors):
        try:
            self._thread_solve(tid, end_time, sol, goal, goal_s)
        except Exception as e:
            self.log.err("Planning thread {} failed: {}".format(tid, e))
            errors.append(e)

    def _thread_solve(self, tid, end_time, sol, goal, goal_s):
        sampler = self.samplers[tid]
        dim = self.state_space.dimension()
        bounds = [self.state_space.component_range(i) for i in range(dim)]
        ranges = np.array([self.rho * (upper - lower) for lower, upper in bounds])

        rmotion = Motion(dim)
        rstate = rmotion.state
        xstate = np.empty(dim)

        while not sol.has_exact() and time.perf_counter() < end_time:
            # sample random state (with goal biasing)
            if goal_s is not None and sampler.uniform01() < self.goal_bias:
                self.state_space.copy_state(rstate, goal_s.sample_goal())
            else:
                self.state_space.copy_state(rstate, sampler.sample())

            nmotion = self.nn.nearest(rstate)

            self._steer(nmotion.state, rstate, ranges, xstate)

            if not self.state_space.check_motion(nmotion.state, xstate):
                continue

            motion = Motion(dim)
            self.state_space.copy_state(motion.state, xstate)
            motion.parent = nmotion.index
            self.nn.add(motion)

            solved, dist = goal.is_satisfied(motion.state)
            if solved:
                sol.try_improve_exact(motion, dist)
                break
            sol.try_improve_approx(motion, dist)

    @staticmethod
    def _steer(from_state, to_state, ranges, out):
        """
        Moves from from_state towards to_state, each coordinate by at most its range, writing the result into out.
        """
        diff = to_state - from_state
        np.copyto(out, np.where(np.abs(diff) < ranges, to_state, from_state + np.sign(diff) * ranges))
        return out

    def _reconstruct_path(self, motion):
        mpath = []
        while motion is not None:
            mpath.append(motion)
            motion = self.nn.motion_at(motion.parent) if motion.parent is not None else None
        return Path([m.state for m in reversed(mpath)])
