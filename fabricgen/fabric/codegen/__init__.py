from .gen_fabric import FabricGenerator, FabricSpec, SlavePort, generate_fabric
from .gen_graph import FabricGraphGenerator
from .gen_md import FabricMdGenerator
