import threading

import numpy as np
from sklearn.neighbors import BallTree, KDTree

__all__ = ['LinearNearestNeighbors', 'NearestNeighbors', 'SharedNearestNeighbors']


def _euclidean(s1, s2):
    return float(np.linalg.norm(np.asarray(s1) - np.asarray(s2)))


class LinearNearestNeighbors():
    """
    Brute force nearest neighbor index over Motions. Every query scans all stored Motions.

    Args:
        distance_fn (func, optional): Distance between two states. Defaults to euclidean distance.
    """

    def __init__(self, distance_fn=None):
        self.distance_fn = distance_fn
        self._motions = []
        self._states = []

    def add(self, motion):
        self._motions.append(motion)
        self._states.append(np.array(motion.state, dtype=float))

    def nearest(self, query):
        if len(self._motions) == 0:
            raise ValueError("Cannot query an empty nearest neighbor index.")
        if self.distance_fn is not None:
            distances = [self.distance_fn(state, query) for state in self._states]
        else:
            distances = np.linalg.norm(np.array(self._states) - np.asarray(query), axis=1)
        return self._motions[int(np.argmin(distances))]

    def size(self):
        return len(self._motions)

    def list(self):
        return list(self._motions)

    def clear(self):
        self._motions = []
        self._states = []


class NearestNeighbors():
    """
    Wrapper class to interface into the scikit-learn tree based nearest neighbor models, extended to support
    incremental insertion of Motions.

    scikit-learn trees are static, so states are stored in a preallocated array and the ones added since the last fit
    form a pending block that is scanned linearly. Once max(rebuild_size, sqrt(number of fitted states)) states are
    pending the model is refit over all states, so a query scans at most that many pending states.

    Args:
        model_type (str, optional): Determines the choice of model. One of "KDTree" or "BallTree". Defaults to "KDTree".
        rebuild_size (int, optional): Minimum number of pending states that triggers a refit. Defaults to 32.
        model_args (list, optional): Args to pass to the chosen model. Defaults to None.
        model_kwargs (dict, optional): Keyword args to pass to the chosen model. Defaults to None.

    Raises:
        ValueError: Error if model type not available for use
    """

    def __init__(self, model_type="KDTree", rebuild_size=32, model_args=None, model_kwargs=None):
        self.available_models = {'KDTree': KDTree, 'BallTree': BallTree}
        if model_type not in self.available_models:
            raise ValueError(
                "{} is not a valid value for model_type. Must be one of {}".format(model_type, list(self.available_models.keys())))
        self.model_type = model_type
        self.rebuild_size = max(1, int(rebuild_size))
        self.model_args = model_args if model_args is not None else []
        self.model_kwargs = model_kwargs if model_kwargs is not None else {}
        self.clear()

    def clear(self):
        self.model = None
        self._motions = []
        self._states = None
        self._fitted_count = 0

    def fit(self):
        """
        Fits the chosen model on every state added so far.
        """
        count = len(self._motions)
        if count == 0:
            self.model = None
            self._fitted_count = 0
            return
        X = self._states[:count].copy()
        self.model = self.available_models[self.model_type](X, *self.model_args, **self.model_kwargs)
        self._fitted_count = count

    def add(self, motion):
        state = np.asarray(motion.state, dtype=float)
        count = len(self._motions)
        if self._states is None:
            self._states = np.empty((self.rebuild_size, state.shape[0]))
        elif count == self._states.shape[0]:
            # double the capacity
            self._states = np.concatenate([self._states, np.empty_like(self._states)])
        self._states[count] = state
        self._motions.append(motion)
        if count + 1 - self._fitted_count >= max(self.rebuild_size, int(np.sqrt(self._fitted_count))):
            self.fit()

    def query(self, x_test, k=1):
        """
        Queries the index for the k-nearest stored states.

        Args:
            x_test (array-like): 1xD vector test query.
            k (int): The number of neighbors.

        Returns:
            [ndarray], [list]: The distances to each neighbor and the indices of the neighbors in insertion order.
        """
        count = len(self._motions)
        if count == 0:
            raise ValueError("Cannot query an empty nearest neighbor index.")
        x_test = np.asarray(x_test, dtype=float)
        distances = []
        indices = []
        if self.model is not None:
            fitted_k = min(k, self._fitted_count)
            fitted_distances, fitted_indices = self.model.query([x_test], k=fitted_k)
            distances.extend(fitted_distances[0])
            indices.extend(int(idx) for idx in fitted_indices[0])
        if count > self._fitted_count:
            pending = self._states[self._fitted_count:count]
            distances.extend(np.linalg.norm(pending - x_test, axis=1))
            indices.extend(range(self._fitted_count, count))
        order = np.argsort(distances, kind='stable')[:k]
        return np.array(distances)[order], [indices[i] for i in order]

    def nearest(self, query):
        _, indices = self.query(query, k=1)
        return self._motions[indices[0]]

    def size(self):
        return len(self._motions)

    def list(self):
        return list(self._motions)


class SharedNearestNeighbors():
    """
    Serializes every operation on a nearest neighbor index through one lock and owns the arena of accepted Motions.

    The wrapped index only needs nearest(query), add(motion), size() and list(). Arbitrary indices are not safe to
    query while another thread inserts, so reads take the lock as well as writes. The lock is held for the index
    operation only.

    Args:
        index (object): The nearest neighbor index to guard. Defaults to a NearestNeighbors KDTree index.
    """

    def __init__(self, index=None):
        self.index = index if index is not None else NearestNeighbors()
        self.lock = threading.Lock()
        self._arena = []

    def add(self, motion):
        """
        Inserts a Motion into the index and appends it to the arena, assigning its arena index.

        Args:
            motion (Motion): A Motion whose parent, if any, is already in the arena.

        Returns:
            int: The arena index of the Motion.
        """
        with self.lock:
            self.index.add(motion)
            motion.index = len(self._arena)
            self._arena.append(motion)
            return motion.index

    def nearest(self, query):
        with self.lock:
            return self.index.nearest(query)

    def size(self):
        with self.lock:
            return self.index.size()

    def list(self):
        with self.lock:
            return list(self.index.list())

    def motion_at(self, index):
        with self.lock:
            return self._arena[index]

    def clear(self):
        """
        Empties the arena and the index. An index without a clear() method is replaced by a new instance of its
        class built with no arguments.
        """
        with self.lock:
            self._arena = []
            if callable(getattr(self.index, 'clear', None)):
                self.index.clear()
            else:
                self.index = type(self.index)()
