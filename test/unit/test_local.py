import threading
import unittest

import numpy as np

from prrt_planning.core.motion import Motion
from prrt_planning.local.evaluation import SubdivisionPathIterator, incremental_evaluate, subdivision_evaluate
from prrt_planning.local.interpolation import cumulative_distance, parametric_lerp
from prrt_planning.local.neighbors import LinearNearestNeighbors, NearestNeighbors, SharedNearestNeighbors


def make_motion(state):
    motion = Motion(len(state))
    motion.state[:] = state
    return motion


class ListIndex():
    """
    Nearest neighbor index with only add, nearest, size and list.
    """

    def __init__(self):
        self.motions = []

    def add(self, motion):
        self.motions.append(motion)

    def nearest(self, query):
        return min(self.motions, key=lambda motion: np.linalg.norm(motion.state - query))

    def size(self):
        return len(self.motions)

    def list(self):
        return list(self.motions)


class FullIndex(ListIndex):

    def add(self, motion):
        if len(self.motions) >= 1:
            raise RuntimeError("index is full")
        super().add(motion)


class TestInterpolation(unittest.TestCase):
    def test_parametric_lerp_end_points(self):
        path = parametric_lerp(np.array([0, 0]), np.array([10, 10]), 11)
        self.assertEqual(path.shape, (11, 2))
        np.testing.assert_array_almost_equal(path[0], [0, 0])
        np.testing.assert_array_almost_equal(path[5], [5, 5])
        np.testing.assert_array_almost_equal(path[-1], [10, 10])

    def test_parametric_lerp_requires_two_steps(self):
        with self.assertRaises(ValueError):
            parametric_lerp(np.array([0, 0]), np.array([1, 1]), 1)

    def test_cumulative_distance(self):
        test = np.array([[0, 1], [1, 2], [3, 3], [6, 5]])
        expected = np.sqrt(2) + np.sqrt(5) + np.sqrt(13)
        self.assertAlmostEqual(cumulative_distance(test), expected)
        self.assertEqual(cumulative_distance([[1, 1]]), 0.0)


class TestEvaluation(unittest.TestCase):
    def test_subdivision_order(self):
        order = list(SubdivisionPathIterator(list("abcdefghijk")))
        self.assertEqual(order, list("fcibehkadgj"))

    def test_subdivision_visits_every_point_once(self):
        points = list(range(37))
        self.assertEqual(sorted(SubdivisionPathIterator(points)), points)

    def test_evaluate(self):
        path = [1, 2, 3, 4, 5]
        self.assertTrue(subdivision_evaluate(lambda p: p > 0, path))
        self.assertFalse(subdivision_evaluate(lambda p: p != 5, path))
        self.assertTrue(incremental_evaluate(lambda p: p > 0, path))
        self.assertFalse(incremental_evaluate(lambda p: p != 1, path))
        self.assertTrue(subdivision_evaluate(lambda p: False, []))


class TestNearestNeighbors(unittest.TestCase):
    def setUp(self):
        rng = np.random.RandomState(0)
        self.states = rng.uniform(-5, 5, size=(300, 3))
        self.queries = rng.uniform(-5, 5, size=(50, 3))

    def _brute_force(self, query):
        return int(np.argmin(np.linalg.norm(self.states - query, axis=1)))

    def test_kdtree_matches_brute_force(self):
        for model_type in ["KDTree", "BallTree"]:
            nn = NearestNeighbors(model_type=model_type, rebuild_size=16)
            motions = [make_motion(state) for state in self.states]
            for motion in motions:
                nn.add(motion)
            self.assertEqual(nn.size(), len(self.states))
            self.assertGreater(nn._fitted_count, 0)
            for query in self.queries:
                self.assertIs(nn.nearest(query), motions[self._brute_force(query)])

    def test_linear_matches_brute_force(self):
        nn = LinearNearestNeighbors()
        motions = [make_motion(state) for state in self.states]
        for motion in motions:
            nn.add(motion)
        for query in self.queries:
            self.assertIs(nn.nearest(query), motions[self._brute_force(query)])

    def test_query_returns_sorted_neighbors(self):
        nn = NearestNeighbors(rebuild_size=8)
        for state in self.states[:20]:
            nn.add(make_motion(state))
        distances, indices = nn.query(self.queries[0], k=5)
        self.assertEqual(len(indices), 5)
        self.assertTrue(np.all(np.diff(distances) >= 0))
        expected = np.argsort(np.linalg.norm(self.states[:20] - self.queries[0], axis=1))[:5]
        self.assertEqual(list(indices), list(expected))

    def test_list_and_clear(self):
        nn = NearestNeighbors()
        motions = [make_motion(state) for state in self.states[:5]]
        for motion in motions:
            nn.add(motion)
        self.assertEqual(nn.list(), motions)
        nn.clear()
        self.assertEqual(nn.size(), 0)
        with self.assertRaises(ValueError):
            nn.nearest(self.queries[0])

    def test_pending_block_is_bounded(self):
        nn = NearestNeighbors(rebuild_size=10)
        for state in self.states[:95]:
            nn.add(make_motion(state))
            self.assertLess(nn.size() - nn._fitted_count, 10)
        self.assertEqual(nn._fitted_count, 90)
        for query in self.queries:
            nearest = nn.nearest(query)
            expected = np.argmin(np.linalg.norm(self.states[:95] - query, axis=1))
            np.testing.assert_array_almost_equal(nearest.state, self.states[expected])

    def test_invalid_model_type(self):
        with self.assertRaises(ValueError):
            NearestNeighbors(model_type="Octree")


class TestSharedNearestNeighbors(unittest.TestCase):
    def test_add_assigns_arena_indices(self):
        shared = SharedNearestNeighbors(LinearNearestNeighbors())
        first = make_motion([0.0, 0.0])
        second = make_motion([1.0, 1.0])
        self.assertEqual(shared.add(first), 0)
        self.assertEqual(shared.add(second), 1)
        self.assertIs(shared.motion_at(1), second)
        self.assertIs(shared.nearest(np.array([0.9, 0.9])), second)
        self.assertEqual(shared.size(), 2)
        shared.clear()
        self.assertEqual(shared.size(), 0)

    def test_concurrent_adds_are_not_lost(self):
        shared = SharedNearestNeighbors(NearestNeighbors(rebuild_size=4))
        shared.add(make_motion([0.0, 0.0]))
        per_thread = 200

        def worker(offset):
            rng = np.random.RandomState(offset)
            for _ in range(per_thread):
                shared.nearest(rng.uniform(0, 1, 2))
                shared.add(make_motion(rng.uniform(0, 1, 2)))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(shared.size(), 1 + 8 * per_thread)
        indices = sorted(motion.index for motion in shared.list())
        self.assertEqual(indices, list(range(1 + 8 * per_thread)))

    def test_clear_index_without_clear_method(self):
        shared = SharedNearestNeighbors(ListIndex())
        first_index = shared.index
        shared.add(make_motion([0.0, 0.0]))
        shared.clear()
        self.assertIsInstance(shared.index, ListIndex)
        self.assertIsNot(shared.index, first_index)
        self.assertEqual(shared.size(), 0)
        self.assertEqual(shared.add(make_motion([1.0, 1.0])), 0)

    def test_failed_add_leaves_arena_unchanged(self):
        shared = SharedNearestNeighbors(FullIndex())
        shared.add(make_motion([0.0, 0.0]))
        rejected = make_motion([1.0, 1.0])
        with self.assertRaises(RuntimeError):
            shared.add(rejected)
        self.assertIsNone(rejected.index)
        self.assertEqual(shared.size(), 1)
        with self.assertRaises(IndexError):
            shared.motion_at(1)


if __name__ == "__main__":
    unittest.main()
