from .goals import *
from .log import *
from .motion import *
from .path import *
from .problem_definition import *
