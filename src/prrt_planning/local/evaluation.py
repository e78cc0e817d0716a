class SubdivisionPathIterator():
    """
    An iterator that produces the subdivision selection of elements.

    a b c d e f g h i j k -> f c i b e h k a d g j
    """

    def __init__(self, local_path):
        self.segment_queue = [local_path]

    def __iter__(self):
        return self

    def __next__(self):
        while self.segment_queue:
            segment = self.segment_queue.pop(0)
            if len(segment) == 0:
                continue
            m_idx = int(len(segment) / 2)
            s1 = segment[:m_idx]
            s2 = segment[m_idx + 1:]
            if len(s1) > 0:
                self.segment_queue.append(s1)
            if len(s2) > 0:
                self.segment_queue.append(s2)
            return segment[m_idx]
        raise StopIteration


def incremental_evaluate(eval_fn, local_path):
    """
    Incrementally evaluates a discrete local path i.e. 1-2-3-4-5-6-7-8

    Args:
        eval_fn (func): Evaluating function returning a bool per point.
        local_path (array-like): Sequence of points.

    Returns:
        bool: True if every point passes.
    """
    for point in local_path:
        if not eval_fn(point):
            return False
    return True


def subdivision_evaluate(eval_fn, local_path):
    """
    Evaluates subdivisions of a descrete local path i.e. 5-3-7-2-4-6-8-1

    Points near the middle of the path are checked first, which tends to find
    invalid segments earlier than checking in order.

    Args:
        eval_fn (func): Evaluating function returning a bool per point.
        local_path (array-like): Sequence of points.

    Returns:
        bool: True if every point passes.
    """
    for point in SubdivisionPathIterator(local_path):
        if not eval_fn(point):
            return False
    return True
