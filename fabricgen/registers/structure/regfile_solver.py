from ...errors import DuplicateRegisterName, DuplicateRegisterOffset, RegisterAddressOverflow, InvalidRegister
from ...tools import signal_name, is_reserved_word
from .types import SlaveDescriptor

import warnings



class RegisterFileSolver:

    """
    Validates a slave descriptor against the bus widths

    Checks that register names and offsets are unique, that every offset fits into
    the register address field, and that every register fits into the data bus.
    """

    def __init__(self, slave: "SlaveDescriptor", widths: "BusWidths"):
        self.slave, self.widths = slave, widths
        self.check_offsets()
        self.check_names()
        self.check_shapes()
        if len(slave.registers) < 1:
            warnings.warn(f'Slave {slave.id} has no registers; it will only acknowledge bus cycles', UserWarning)


    def check_names(self):

        if not isinstance(self.slave.id, str) or signal_name(self.slave.id) == '':
            raise ValueError(f'Slave id <{self.slave.id!r}> must be a non-empty string')

        regnames = set()
        signames = set()
        for reg in self.slave.registers:
            if not isinstance(reg.name, str) or signal_name(reg.name) == '':
                raise InvalidRegister(self.slave.id, repr(reg.name), 'name must be a non-empty string')
            if is_reserved_word(signal_name(reg.name)):
                raise InvalidRegister(self.slave.id, reg.name, f'"{signal_name(reg.name)}" is a reserved word in VHDL')
            # two names that map to the same VHDL identifier collide as well
            if reg.name in regnames or signal_name(reg.name) in signames:
                raise DuplicateRegisterName(self.slave.id, reg.name)
            regnames.add(reg.name)
            signames.add(signal_name(reg.name))


    def check_offsets(self):

        highest_offset = (1 << self.widths.register_address_width) - 1
        names_by_offset = {}
        for reg in self.slave.registers:
            if not isinstance(reg.offset, int) or reg.offset < 0:
                raise InvalidRegister(self.slave.id, reg.name, f'offset <{reg.offset!r}> must be a non-negative integer')
            if reg.offset in names_by_offset:
                raise DuplicateRegisterOffset(self.slave.id, reg.offset, (names_by_offset[reg.offset], reg.name))
            if reg.offset > highest_offset:
                raise RegisterAddressOverflow(self.slave.id, reg.name, reg.offset, self.widths.register_address_width)
            names_by_offset[reg.offset] = reg.name


    def check_shapes(self):

        for reg in self.slave.registers:
            if reg.width_bits < 1 or reg.width_bits > self.widths.data_width:
                raise InvalidRegister(self.slave.id, reg.name, f'width of {reg.width_bits} bit is out of range 1..{self.widths.data_width}')
            if reg.reset_value < 0 or reg.reset_value > reg.mask():
                raise InvalidRegister(self.slave.id, reg.name, f'reset value 0x{reg.reset_value:X} does not fit into {reg.width_bits} bit')
