from ...errors import DuplicateSlaveId, AddressSpaceExhausted
from ...registers.structure.regfile_solver import RegisterFileSolver
from ...tools import signal_name
from .types import BusWidths, FabricTopology

import types
import warnings



class FabricTopologyPlanner:

    """
    Assigns every slave a core address and an interrupt priority

    Slaves get sequential core addresses in input order, starting at 0; the input order
    also defines the interrupt priority (first slave = rank 0 = highest priority).
    The planner never re-orders slaves.
    """

    def __init__(self, slaves: "list[SlaveDescriptor]", widths: "BusWidths"):
        self.slaves, self.widths = tuple(slaves), widths
        self.check()
        self.topology = self.assign_addresses()


    def check(self):

        if len(self.slaves) < 1:
            raise ValueError('Need at least one slave')

        ids, names = set(), set()
        for slave in self.slaves:
            # ids that map to the same VHDL entity name collide as well
            if slave.id in ids or signal_name(slave.id) in names:
                raise DuplicateSlaveId(slave.id)
            ids.add(slave.id)
            names.add(signal_name(slave.id))

        if len(self.slaves) > self.widths.max_slaves():
            raise AddressSpaceExhausted(len(self.slaves), self.widths.core_address_width)

        for slave in self.slaves:
            RegisterFileSolver(slave, self.widths)

        if not any([s.has_interrupt for s in self.slaves]):
            warnings.warn('None of the slaves is interrupt-capable; the interrupt vector will be constant', UserWarning)


    def assign_addresses(self) -> "FabricTopology":

        base_address_of = {}
        priority_of = {}
        next_free_address = 0

        for rank, slave in enumerate(self.slaves):
            assert next_free_address < self.widths.max_slaves()
            base_address_of[slave.id] = next_free_address
            priority_of[slave.id] = rank
            next_free_address += 1

        return FabricTopology(
            self.widths,
            self.slaves,
            types.MappingProxyType(base_address_of),
            types.MappingProxyType(priority_of))



def plan(slaves: "list[SlaveDescriptor]", widths: "BusWidths") -> "FabricTopology":
    return FabricTopologyPlanner(slaves, widths).topology
