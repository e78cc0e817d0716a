from .neighbors import *
