from .prrt import *
from .solution import *
