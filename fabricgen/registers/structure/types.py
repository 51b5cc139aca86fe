import dataclasses
import enum



class Direction(enum.Enum):
    """ register is written by the host, and drives an output of the peripheral """
    HostWrite = enum.auto()
    """ register is read by the host; its value is loaded by the peripheral """
    HostRead = enum.auto()
    """ register is written by the host, and can be read back """
    Both = enum.auto()

    def is_writable(self) -> bool:
        return self in (Direction.HostWrite, Direction.Both)

    def is_readable(self) -> bool:
        return self in (Direction.HostRead, Direction.Both)



@dataclasses.dataclass(frozen=True)
class RegisterDescriptor:

    name: str

    """ 0-based register address inside of the slave """
    offset: int

    width_bits: int

    direction: Direction

    """ value after reset, as an unsigned bit-vector of <width_bits> bits """
    reset_value: int = dataclasses.field(default=0)

    description: str = dataclasses.field(default='')


    def mask(self) -> int:
        return (1 << self.width_bits) - 1



@dataclasses.dataclass(frozen=True)
class SlaveDescriptor:

    id: str

    registers: "tuple[RegisterDescriptor, ...]"

    has_interrupt: bool = dataclasses.field(default=False)

    description: str = dataclasses.field(default='')


    def __post_init__(self):
        # accept any sequence, but store an immutable one
        object.__setattr__(self, 'registers', tuple(self.registers))


    @staticmethod
    def with_register_count(id: str, register_count: int, width_bits: int = 8, direction: Direction = Direction.Both,
        has_interrupt: bool = False) -> "SlaveDescriptor":
        """
        Creates a generic slave with <register_count> equally shaped registers, named reg0, reg1, ...
        and located at offsets 0, 1, ...
        """
        if register_count < 1:
            raise ValueError(f'Need at least one register (got {register_count})')
        registers = [RegisterDescriptor(f'reg{i}', i, width_bits, direction) for i in range(register_count)]
        return SlaveDescriptor(id, registers, has_interrupt)


    def max_offset(self) -> int:
        if len(self.registers) == 0:
            return 0
        return max([r.offset for r in self.registers])


    def registers_by_offset(self) -> "list[RegisterDescriptor]":
        return sorted(self.registers, key=lambda r: r.offset)


    def writable_registers(self) -> "list[RegisterDescriptor]":
        return [r for r in self.registers_by_offset() if r.direction.is_writable()]


    def readable_registers(self) -> "list[RegisterDescriptor]":
        return [r for r in self.registers_by_offset() if r.direction.is_readable()]
