from .samplers import *
from .state_validity import *
