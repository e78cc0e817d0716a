import math
import threading

__all__ = ['SolutionInfo']


class SolutionInfo():
    """
    Best solution found so far across every planning thread of one solve call.

    Attributes:
        solution (Motion): A Motion satisfying the goal, None until one is found.
        approx_solution (Motion): The Motion closest to the goal seen so far.
        approx_difference (float): Goal distance of the recorded solution. Never increases over a solve.
        lock (threading.Lock): Guards every write.
    """

    def __init__(self):
        self.solution = None
        self.approx_solution = None
        self.approx_difference = math.inf
        self.lock = threading.Lock()

    def has_exact(self):
        return self.solution is not None

    def try_improve_exact(self, motion, distance):
        # Any exact solution is acceptable so the last writer wins.
        with self.lock:
            self.approx_difference = distance
            self.solution = motion

    def try_improve_approx(self, motion, distance):
        """
        Records motion as the approximate solution when it is strictly closer to the goal than the current one.

        The unlocked comparison rejects the common non-improving case without taking the lock. It is repeated under
        the lock so a concurrent improvement is never overwritten by a worse one.

        Returns:
            bool: Whether or not the approximate solution was replaced.
        """
        if not distance < self.approx_difference:
            return False
        with self.lock:
            if distance < self.approx_difference:
                self.approx_difference = distance
                self.approx_solution = motion
                return True
        return False
