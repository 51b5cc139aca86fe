from .types import BusWidths, FabricTopology
from .fabric_planner import FabricTopologyPlanner, plan
