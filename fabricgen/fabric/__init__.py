from .structure.types import BusWidths, FabricTopology
from .structure.fabric_planner import FabricTopologyPlanner, plan

from .codegen.gen_fabric import FabricGenerator, FabricSpec, generate_fabric
from .codegen.gen_graph import FabricGraphGenerator
from .codegen.gen_md import FabricMdGenerator
