import numpy as np

__all__ = ['Motion']


class Motion():
    """
    A node of the search tree.

    The parent is stored as the arena index of the parent Motion within the tree that owns it, never as an owning
    reference, so following parents always terminates at a root.

    Attributes:
        state (ndarray): Configuration of this node.
        parent (int): Arena index of the parent Motion, None for a root (start state).
        index (int): Arena index of this Motion, None until the tree accepts it.
    """

    __slots__ = ('state', 'parent', 'index')

    def __init__(self, dim):
        self.state = np.zeros(dim)
        self.parent = None
        self.index = None

    def __repr__(self):
        return "Motion(index={}, parent={}, state={})".format(self.index, self.parent, [float(val) for val in self.state])
