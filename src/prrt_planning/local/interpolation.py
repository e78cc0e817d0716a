import numpy as np


def cumulative_distance(local_path):
    """
    Calculates the cumulative euclidean distnace sum of a sequence of vectors.
    The distance between each consecutive point is calculated and summed.

    Args:
        local_path (ndarray): Numpy array of vectors representing a local path.

    Returns:
        float: The cumulative euclidean distance.
    """
    if len(local_path) < 2:
        return 0.0
    return float(np.sum(np.sqrt(np.sum(np.diff(np.asarray(local_path, dtype=float), axis=0)**2, 1))))


def parametric_lerp(q0, q1, steps):
    """
    This function directly interpolates between the start q0 and q1, element-wise parametrically
    via the discretized interval determined by the number of steps.

    Args:
        q0 (ndarray): Numpy vector representing the starting point.
        q1 (ndarray): Numpy vector representing the ending point.
        steps (int): Number of discrete steps to take, including both end points. At least 2.

    Returns:
        [ndarray]: Numpy array of the interpolation between q0 and q1.
    """
    if steps < 2:
        raise ValueError("Interpolation requires at least 2 steps, got {}".format(steps))
    q0 = np.asarray(q0, dtype=float)
    q1 = np.asarray(q1, dtype=float)
    times = np.linspace(0.0, 1.0, steps)
    return q0 + np.outer(times, q1 - q0)
