from .state_space import *
