from .errors import FabricError, InvalidBusWidths, DuplicateSlaveId, AddressSpaceExhausted, DuplicateRegisterOffset, \
    RegisterAddressOverflow, DuplicateRegisterName, InvalidRegister, MissingTokenError
from .registers import Direction, RegisterDescriptor, SlaveDescriptor, RegisterFileGenerator, RegisterFileSpec, \
    RegisterFileMdGenerator, generate_register_file
from .fabric import BusWidths, FabricTopology, FabricTopologyPlanner, plan, FabricGenerator, FabricSpec, \
    FabricGraphGenerator, FabricMdGenerator, generate_fabric
from .lib.template import TemplateRenderer
from .build import FabricBuilder
from .model import RegisterFileModel, FabricModel
