import math
import unittest

import numpy as np

from prrt_planning.core.goals import GoalState, GoalStates
from prrt_planning.core.path import Path
from prrt_planning.core.problem_definition import ProblemDefinition
from prrt_planning.geometric.state_space import R2, RealVectorStateSpace
from prrt_planning.sampling.samplers import UniformSampler
from prrt_planning.sampling.state_validity import StateValidityChecker


def box_collision(sample, coordinates=[[4, 0], [6, 8]]):
    x_valid = coordinates[0][0] <= sample[0] <= coordinates[1][0]
    y_valid = coordinates[0][1] <= sample[1] <= coordinates[1][1]
    return not (x_valid and y_valid)


class TestStateValidityChecker(unittest.TestCase):
    def test_requires_a_function(self):
        with self.assertRaises(ValueError):
            StateValidityChecker()

    def test_validate(self):
        svc = StateValidityChecker(col_func=box_collision, validity_funcs=[lambda q: q[0] >= 0])
        self.assertTrue(svc.validate([1, 1]))
        self.assertFalse(svc.validate([5, 5]))
        self.assertFalse(svc.validate([-1, 9]))


class TestUniformSampler(unittest.TestCase):
    def test_samples_within_limits(self):
        sampler = UniformSampler([(0, 1), (-2, 2)], seed=1)
        for _ in range(200):
            sample = sampler.sample()
            self.assertTrue(0 <= sample[0] <= 1)
            self.assertTrue(-2 <= sample[1] <= 2)
            self.assertTrue(0 <= sampler.uniform01() < 1)

    def test_seeded_samplers_are_reproducible(self):
        a = UniformSampler([(0, 1), (0, 1)], seed=7)
        b = UniformSampler([(0, 1), (0, 1)], seed=7)
        np.testing.assert_array_equal(a.sample(), b.sample())


class TestRealVectorStateSpace(unittest.TestCase):
    def setUp(self):
        self.space = R2(state_validity_checker=StateValidityChecker(col_func=box_collision))

    def test_invalid_limits(self):
        with self.assertRaises(ValueError):
            RealVectorStateSpace([])
        with self.assertRaises(ValueError):
            RealVectorStateSpace([['x', (1, 1)]])
        with self.assertRaises(ValueError):
            RealVectorStateSpace([['x', (0, 1)]], resolution=0)

    def test_bounds(self):
        self.assertEqual(self.space.dimension(), 2)
        self.assertEqual(self.space.component_range(1), (0.0, 10.0))
        self.assertTrue(self.space.satisfies_bounds([0, 10]))
        self.assertFalse(self.space.satisfies_bounds([-0.1, 5]))
        self.assertFalse(self.space.satisfies_bounds([1, 1, 1]))

    def test_copy_state(self):
        dst = np.zeros(2)
        self.space.copy_state(dst, np.array([3.0, 4.0]))
        np.testing.assert_array_equal(dst, [3.0, 4.0])

    def test_check_motion(self):
        self.assertTrue(self.space.check_motion(np.array([1, 1]), np.array([3, 9])))
        # Both end points are free but the line passes through the box.
        self.assertFalse(self.space.check_motion(np.array([2, 4]), np.array([8, 4])))
        # The line passes above the box.
        self.assertTrue(self.space.check_motion(np.array([2, 9]), np.array([8, 9])))
        self.assertFalse(self.space.check_motion(np.array([9, 9]), np.array([11, 9])))

    def test_allocate_sampler(self):
        sampler = self.space.allocate_sampler(seed=3)
        self.assertEqual(sampler.dimension_limits, [(0.0, 10.0), (0.0, 10.0)])


class TestGoals(unittest.TestCase):
    def setUp(self):
        self.space = R2()

    def test_goal_state(self):
        goal = GoalState(self.space, [1, 1], threshold=.1)
        satisfied, distance = goal.is_satisfied(np.array([1.05, 1.0]))
        self.assertTrue(satisfied)
        self.assertAlmostEqual(distance, .05)
        satisfied, distance = goal.is_satisfied(np.array([2.0, 1.0]))
        self.assertFalse(satisfied)
        self.assertAlmostEqual(distance, 1.0)
        np.testing.assert_array_equal(goal.sample_goal(), [1, 1])
        self.assertEqual(goal.max_sample_count(), 1)

    def test_negative_threshold(self):
        with self.assertRaises(ValueError):
            GoalState(self.space, [1, 1], threshold=-1)

    def test_goal_states(self):
        goal = GoalStates(self.space, [[1, 1], [5, 5]], threshold=.5)
        self.assertAlmostEqual(goal.distance_goal([5, 6]), 1.0)
        np.testing.assert_array_equal(goal.sample_goal(), [1, 1])
        np.testing.assert_array_equal(goal.sample_goal(), [5, 5])
        np.testing.assert_array_equal(goal.sample_goal(), [1, 1])
        empty = GoalStates(self.space)
        self.assertEqual(empty.distance_goal([0, 0]), math.inf)
        self.assertEqual(empty.max_sample_count(), 0)
        with self.assertRaises(ValueError):
            empty.sample_goal()

    def test_solution_bookkeeping(self):
        goal = GoalState(self.space, [1, 1])
        self.assertFalse(goal.is_achieved())
        self.assertEqual(goal.get_difference(), math.inf)
        goal.set_solution_path(Path([[0, 0], [1, 1]]), approximate=True)
        goal.set_difference(.3)
        self.assertFalse(goal.is_achieved())
        self.assertTrue(goal.is_approximate())
        goal.set_solution_path(Path([[0, 0], [1, 1]]), approximate=False)
        self.assertTrue(goal.is_achieved())
        goal.clear_solution_path()
        self.assertIsNone(goal.get_solution_path())


class TestPathAndProblem(unittest.TestCase):
    def test_path(self):
        space = R2(state_validity_checker=StateValidityChecker(col_func=box_collision))
        path = Path([[0, 0], [3, 4]])
        path.append([3, 9])
        self.assertEqual(len(path), 3)
        self.assertAlmostEqual(path.length(), 10.0)
        self.assertTrue(path.check(space))
        self.assertEqual(path.as_list(), [[0.0, 0.0], [3.0, 4.0], [3.0, 9.0]])
        self.assertFalse(Path([[2, 4], [8, 4]]).check(space))

    def test_problem_definition(self):
        space = R2()
        pdef = ProblemDefinition(space)
        pdef.set_start_and_goal_states([0, 0], [1, 1], threshold=.1)
        self.assertEqual(pdef.get_start_state_count(), 1)
        np.testing.assert_array_equal(pdef.get_start_state(0), [0, 0])
        self.assertIsInstance(pdef.get_goal(), GoalState)
        pdef.add_start_state([2, 2])
        self.assertEqual(pdef.get_start_state_count(), 2)


if __name__ == "__main__":
    unittest.main()
