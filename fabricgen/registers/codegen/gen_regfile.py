from ...errors import InvalidRegister
from ...tools import signal_name, constant_name, vhdl_literal
from ...lib.vhdl_code_gen import VhdlCodeFormatter
from ..structure.types import Direction, RegisterDescriptor, SlaveDescriptor
from ..structure.regfile_solver import RegisterFileSolver

import enum
import logging
import types
import typing
from dataclasses import dataclass


logger = logging.getLogger(__name__)



class StoreSource(enum.Enum):
    """ register captures the bus write data """
    Bus = enum.auto()
    """ register captures the peripheral's input """
    Core = enum.auto()



@dataclass(frozen=True)
class AddressComparator:
    register: str
    offset: int
    constant: str
    signal: str



@dataclass(frozen=True)
class RegisterEnable:
    register: str
    signal: str
    """ all of these must be '1' for the register to store; AND-ed """
    terms: "tuple[str, ...]"



@dataclass(frozen=True)
class RegisterInput:
    register: str
    source: StoreSource
    expression: str



@dataclass(frozen=True)
class ReadChoice:
    register: str
    offset: int
    constant: str
    width_bits: int



@dataclass(frozen=True)
class RegisterOutput:
    register: str
    port: str



@dataclass(frozen=True)
class ResetAssignment:
    register: str
    value: int
    width_bits: int



@dataclass(frozen=True)
class StoreCondition:
    register: str
    source: StoreSource
    """ the enable signal; for core-loaded registers, the load port """
    enable: str



@dataclass(frozen=True)
class RegisterFileSpec:

    """
    Structural description of one slave's register bank

    The tuples hold the decisions (what is compared, enabled, selected, reset, stored), in address order;
    <tokens> holds the same decisions as VHDL fragments, keyed by template placeholder.
    """

    slave: SlaveDescriptor
    widths: "BusWidths"
    package_name: str
    component_name: str
    register_type_name: str
    use_write_intent: bool
    comparators: "tuple[AddressComparator, ...]"
    enables: "tuple[RegisterEnable, ...]"
    inputs: "tuple[RegisterInput, ...]"
    read_mux: "tuple[ReadChoice, ...]"
    outputs: "tuple[RegisterOutput, ...]"
    resets: "tuple[ResetAssignment, ...]"
    stores: "tuple[StoreCondition, ...]"
    read_default: int
    tokens: "typing.Mapping[str, str]"


    def selected_registers(self, register_address: int) -> "list[str]":
        """ Names of the registers whose comparator matches the given register address """
        return [c.register for c in self.comparators if c.offset == register_address]



class RegisterFileGenerator:

    @dataclass
    class Format:
        """ entity name = prefix + slave id """
        component_prefix: str = 'wbs_'
        package_suffix: str = '_pkg'
        register_type_suffix: str = '_reg_t'
        output_suffix: str = '_out'
        input_suffix: str = '_in'
        load_suffix: str = '_ld'
        """ if False, every strobe is treated as a write (protocol without a write-enable line) """
        use_write_intent: bool = True
        indent: str = '   '


    def __init__(self, slave: SlaveDescriptor, widths: "BusWidths", format: Format = None):
        self.slave, self.widths = slave, widths
        self.fmt = format if format is not None else RegisterFileGenerator.Format()

        gen = RegisterFileGeneratorHelper(slave, widths, self.fmt)
        self.spec = gen.spec


    def get_spec(self) -> RegisterFileSpec:
        return self.spec


    def get_tokens(self) -> "typing.Mapping[str, str]":
        return self.spec.tokens



def generate_register_file(slave: SlaveDescriptor, widths: "BusWidths", format: "RegisterFileGenerator.Format" = None) -> RegisterFileSpec:
    return RegisterFileGenerator(slave, widths, format).get_spec()



class RegisterFileGeneratorHelper:


    def __init__(self, slave: SlaveDescriptor, widths: "BusWidths", format: "RegisterFileGenerator.Format"):
        self.slave, self.widths, self.fmt = slave, widths, format

        RegisterFileSolver(slave, widths)
        self.generate()


    def reg_field(self, reg: RegisterDescriptor) -> str:
        return signal_name(reg.name)

    def adr_constant(self, reg: RegisterDescriptor) -> str:
        return f'{constant_name(reg.name)}_ADR'

    def match_signal(self, reg: RegisterDescriptor) -> str:
        return f'{signal_name(reg.name)}_adr_match_s'

    def enable_signal(self, reg: RegisterDescriptor) -> str:
        return f'{signal_name(reg.name)}_we_s'

    def output_port(self, reg: RegisterDescriptor) -> str:
        return f'{signal_name(reg.name)}{self.fmt.output_suffix}'

    def input_port(self, reg: RegisterDescriptor) -> str:
        return f'{signal_name(reg.name)}{self.fmt.input_suffix}'

    def load_port(self, reg: RegisterDescriptor) -> str:
        return f'{signal_name(reg.name)}{self.fmt.load_suffix}'

    def reg_type(self, reg: RegisterDescriptor) -> str:
        return f'std_logic_vector({reg.width_bits-1} downto 0)'


    def check_identifiers(self, registers: "list[RegisterDescriptor]", unit_names: "list[str]"):
        """ Every name declared in the entity and its architecture must be unique; VHDL ignores case """

        declared = {name.lower(): None for name in ['wbs_in', 'wbs_out', 'reg_in_s', 'reg_out_s'] + unit_names}
        if self.slave.has_interrupt:
            declared['irq_in'] = None

        for reg in registers:
            names = [self.adr_constant(reg), self.match_signal(reg)]
            if reg.direction.is_writable():
                names += [self.enable_signal(reg), self.output_port(reg)]
            else:
                names += [self.input_port(reg), self.load_port(reg)]
            for name in names:
                key = name.lower()
                if key in declared:
                    owner = declared[key]
                    other = f'register {owner}' if owner is not None else 'a name of the bus interface'
                    raise InvalidRegister(self.slave.id, reg.name, f'VHDL name {name} collides with {other}')
                declared[key] = reg.name


    def generate(self):

        registers = self.slave.registers_by_offset()
        name = signal_name(self.slave.id)
        component_name = f'{self.fmt.component_prefix}{name}'
        package_name = f'{component_name}{self.fmt.package_suffix}'
        register_type_name = f'{component_name}{self.fmt.register_type_suffix}'
        self.check_identifiers(registers, [component_name, register_type_name])

        comparators, enables, inputs, read_mux, outputs, resets, stores = [], [], [], [], [], [], []

        for reg in registers:

            comparators.append(AddressComparator(reg.name, reg.offset, self.adr_constant(reg), self.match_signal(reg)))
            resets.append(ResetAssignment(reg.name, reg.reset_value, reg.width_bits))

            if reg.direction.is_writable():
                terms = ['wbs_in.stb']
                if self.fmt.use_write_intent:
                    terms.append('wbs_in.we')
                terms.append(self.match_signal(reg))
                enables.append(RegisterEnable(reg.name, self.enable_signal(reg), tuple(terms)))
                inputs.append(RegisterInput(reg.name, StoreSource.Bus, f'wbs_in.dat({reg.width_bits-1} downto 0)'))
                outputs.append(RegisterOutput(reg.name, self.output_port(reg)))
                stores.append(StoreCondition(reg.name, StoreSource.Bus, self.enable_signal(reg)))
            else:
                inputs.append(RegisterInput(reg.name, StoreSource.Core, self.input_port(reg)))
                stores.append(StoreCondition(reg.name, StoreSource.Core, self.load_port(reg)))

            if reg.direction.is_readable():
                read_mux.append(ReadChoice(reg.name, reg.offset, self.adr_constant(reg), reg.width_bits))

        self.package_name, self.component_name, self.register_type_name = package_name, component_name, register_type_name
        self.comparators, self.enables, self.inputs, self.read_mux = comparators, enables, inputs, read_mux
        self.outputs, self.resets, self.stores = outputs, resets, stores

        tokens = {
            'package_name': package_name,
            'component_name': component_name,
            'register_type': register_type_name,
            'register_typedef': self.gen_register_typedef(registers),
            'register_port_definitions': self.gen_register_port_definitions(registers),
            'register_address_constants': self.gen_register_address_constants(registers),
            'signal_definitions': self.gen_signal_definitions(registers),
            'address_comparators': self.gen_address_comparators(),
            'register_enables': self.gen_register_enables(),
            'register_inputs': self.gen_register_inputs(),
            'register_output_demultiplexer': self.gen_register_output_demultiplexer(),
            'register_outputs': self.gen_register_outputs(),
            'reset_assignments': self.gen_reset_assignments(),
            'store_conditions': self.gen_store_conditions(),
            'interrupt_connection': self.gen_interrupt_connection(),
        }
        logger.debug(f'Generated register file {component_name} ({len(registers)} registers)')

        self.spec = RegisterFileSpec(
            slave=self.slave,
            widths=self.widths,
            package_name=package_name,
            component_name=component_name,
            register_type_name=register_type_name,
            use_write_intent=self.fmt.use_write_intent,
            comparators=tuple(comparators),
            enables=tuple(enables),
            inputs=tuple(inputs),
            read_mux=tuple(read_mux),
            outputs=tuple(outputs),
            resets=tuple(resets),
            stores=tuple(stores),
            read_default=0,
            tokens=types.MappingProxyType(tokens))


    def _code(self, code: VhdlCodeFormatter) -> str:
        return code.generate(indent=self.fmt.indent, break_last_line=False)


    def gen_register_typedef(self, registers: "list[RegisterDescriptor]") -> str:
        code = VhdlCodeFormatter()
        for reg in registers:
            code.add(f'{self.reg_field(reg)} : {self.reg_type(reg)};')
        if len(registers) == 0:
            # a record needs at least one element
            code.add('unused : std_logic;')
        return self._code(code)


    def gen_register_port_definitions(self, registers: "list[RegisterDescriptor]") -> str:
        # every port ends with ';', as the bus ports follow
        code = VhdlCodeFormatter()
        for reg in registers:
            if reg.direction.is_writable():
                code.add(f'{self.output_port(reg)} : out {self.reg_type(reg)};')
            else:
                code.add(f'{self.input_port(reg)} : in {self.reg_type(reg)};')
                code.add(f'{self.load_port(reg)} : in std_logic;')
        if self.slave.has_interrupt:
            code.add('irq_in : in std_logic;')
        return self._code(code)


    def gen_register_address_constants(self, registers: "list[RegisterDescriptor]") -> str:
        code = VhdlCodeFormatter()
        for reg in registers:
            code.constant(self.adr_constant(reg), 'std_logic_vector(WB_REG_AW-1 downto 0)', vhdl_literal(reg.offset, self.widths.register_address_width))
        return self._code(code)


    def gen_signal_definitions(self, registers: "list[RegisterDescriptor]") -> str:
        code = VhdlCodeFormatter()
        if len(self.comparators) > 0:
            code.signal([c.signal for c in self.comparators], 'std_logic')
        if len(self.enables) > 0:
            code.signal([e.signal for e in self.enables], 'std_logic')
        return self._code(code)


    def gen_address_comparators(self) -> str:
        code = VhdlCodeFormatter()
        for c in self.comparators:
            code.assign(c.signal, f"'1' when wbs_in.adr = {c.constant} else '0'")
        return self._code(code)


    def gen_register_enables(self) -> str:
        code = VhdlCodeFormatter()
        for e in self.enables:
            code.assign(e.signal, ' AND '.join(e.terms))
        return self._code(code)


    def gen_register_inputs(self) -> str:
        code = VhdlCodeFormatter()
        for i in self.inputs:
            code.assign(f'reg_in_s.{signal_name(i.register)}', i.expression)
        return self._code(code)


    def gen_register_output_demultiplexer(self) -> str:
        code = VhdlCodeFormatter()
        if len(self.read_mux) == 0:
            code.assign('wbs_out.dat', "(others => '0')", 'no readable registers')
            return self._code(code)
        sel = code.select('wbs_in.adr', 'wbs_out.dat', "(others => '0')")
        for choice in self.read_mux:
            value = f'reg_out_s.{signal_name(choice.register)}'
            pad = self.widths.data_width - choice.width_bits
            if pad > 0:
                value = f'"{"0"*pad}" & {value}'
            sel.when(value, choice.constant)
        return self._code(code)


    def gen_register_outputs(self) -> str:
        code = VhdlCodeFormatter()
        for o in self.outputs:
            code.assign(o.port, f'reg_out_s.{signal_name(o.register)}')
        return self._code(code)


    def gen_reset_assignments(self) -> str:
        code = VhdlCodeFormatter()
        for r in self.resets:
            code.assign(f'reg_out_s.{signal_name(r.register)}', vhdl_literal(r.value, r.width_bits))
        return self._code(code)


    def gen_store_conditions(self) -> str:
        code = VhdlCodeFormatter()
        for s in self.stores:
            field = signal_name(s.register)
            code.comment(f'store {field}')
            blk = code.ifblock()
            blk.ifthen(f"{s.enable} = '1'")
            blk.assign(f'reg_out_s.{field}', f'reg_in_s.{field}')
        if len(self.stores) == 0:
            code.add('null;')
        return self._code(code)


    def gen_interrupt_connection(self) -> str:
        code = VhdlCodeFormatter()
        if self.slave.has_interrupt:
            code.assign('wbs_out.irq', 'irq_in')
        else:
            code.assign('wbs_out.irq', "'0'")
        return self._code(code)
