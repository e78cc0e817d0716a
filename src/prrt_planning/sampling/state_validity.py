"""
Interfaces for state validity checking.
"""

__all__ = ['StateValidityChecker']


class StateValidityChecker():

    """
    This StateValidityChecker class expects a collision checking function, a self collision checking function,
    and list of other validity functions (constraints etc,.). It is up to the developer to inject these functions
    as deemed appropriate. Every injected function must be safe to call from several planning threads at once.

    Attributes:
        col_func (func): External collisions between the moving body and the environment. True means collision free.
        self_col_func (func): Self-collision checking function. True means collision free.
        validity_funcs (list): List of other state validating functions.
    """

    def __init__(self, self_col_func=None, col_func=None, validity_funcs=None):
        if self_col_func is None and col_func is None and not validity_funcs:
            raise ValueError("State Validity Checking cannot be performed if not validity functions of any kind are given.")
        self.self_col_func = self_col_func
        self.col_func = col_func
        self.validity_funcs = list(validity_funcs) if validity_funcs is not None else []

    def validate(self, sample):
        """
        Validates a given sample.

        Args:
            sample (array-like): The sample to validate.

        Returns:
            bool: Whether or not the sample is valid.
        """
        for func in self.validity_funcs:
            if not func(sample):
                return False
        if self.self_col_func is not None and not self.self_col_func(sample):
            return False
        if self.col_func is not None and not self.col_func(sample):
            return False
        return True
