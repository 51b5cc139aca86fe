from .types import Direction, RegisterDescriptor, SlaveDescriptor
from .regfile_solver import RegisterFileSolver
