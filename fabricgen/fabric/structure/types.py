from ...errors import InvalidBusWidths

import dataclasses
import typing



@dataclasses.dataclass(frozen=True)
class BusWidths:

    """
    Global parameters of the shared bus

    address_width:          Width of the master's address bus, in bits
    data_width:             Width of the data bus, in bits
    core_address_width:     Upper address bits, which select a slave (core)
    register_address_width: Lower address bits, which select a register inside of a slave

    Example: the default 16-bit address is split into an 8-bit core address [15:8] and an
    8-bit register address [7:0], so there can be up to 256 slaves with up to 256 registers each.
    """

    address_width: int = 16
    data_width: int = 8
    core_address_width: int = 8
    register_address_width: int = 8


    def __post_init__(self):
        for name in ['address_width', 'data_width', 'core_address_width', 'register_address_width']:
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise InvalidBusWidths(f'{name} must be a positive integer (got {value!r})')
        if self.address_width != self.core_address_width + self.register_address_width:
            raise InvalidBusWidths(f'address width ({self.address_width}) must be the sum of the core address width '
                f'({self.core_address_width}) and the register address width ({self.register_address_width})')


    @staticmethod
    def split(address_width: int, core_address_width: int, data_width: int = 8) -> "BusWidths":
        """ Derives the register address width from the address and core address widths """
        return BusWidths(address_width, data_width, core_address_width, address_width - core_address_width)


    def max_slaves(self) -> int:
        return 1 << self.core_address_width


    def max_registers(self) -> int:
        return 1 << self.register_address_width


    def core_address_bits(self) -> "tuple[int,int]":
        """ (hi, lo) bit indices of the core address field """
        return self.address_width - 1, self.register_address_width


    def register_address_bits(self) -> "tuple[int,int]":
        """ (hi, lo) bit indices of the register address field """
        return self.register_address_width - 1, 0



@dataclasses.dataclass(frozen=True)
class FabricTopology:

    """
    The planned fabric: every slave with its core address and its interrupt priority

    Created by the FabricTopologyPlanner; do not construct this yourself.
    """

    widths: BusWidths

    ordered_slaves: "tuple[SlaveDescriptor, ...]"

    """ slave id -> core address """
    base_address_of: "typing.Mapping[str, int]"

    """ slave id -> priority rank (0 is the highest priority) """
    priority_of: "typing.Mapping[str, int]"


    def slave(self, slave_id: str) -> "SlaveDescriptor":
        for slave in self.ordered_slaves:
            if slave.id == slave_id:
                return slave
        raise KeyError(slave_id)


    def slaves_by_priority(self) -> "list[SlaveDescriptor]":
        return sorted(self.ordered_slaves, key=lambda s: self.priority_of[s.id])


    def interrupt_slaves(self) -> "list[SlaveDescriptor]":
        """ Interrupt-capable slaves, highest priority first """
        return [s for s in self.slaves_by_priority() if s.has_interrupt]


    def absolute_address(self, slave_id: str, register_name: str) -> int:
        """ The address a host has to put on the master bus to access this register """
        for reg in self.slave(slave_id).registers:
            if reg.name == register_name:
                return (self.base_address_of[slave_id] << self.widths.register_address_width) | reg.offset
        raise KeyError(f'{slave_id}.{register_name}')


    def irq_vector_width(self) -> int:
        return max(1, len(self.ordered_slaves).bit_length())


    def irq_none(self) -> int:
        """ Value of the interrupt vector while no slave asserts an interrupt; never a valid priority rank """
        return (1 << self.irq_vector_width()) - 1
