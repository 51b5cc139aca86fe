from ...tools import vhdl_literal, comment_text
from ...lib.vhdl_code_gen import VhdlCodeFormatter
from ..structure.types import FabricTopology

import logging
import types
import typing
from dataclasses import dataclass


logger = logging.getLogger(__name__)



@dataclass(frozen=True)
class SlavePort:

    """ How one slave is hooked up to the intercon """

    slave_id: str
    index: int
    base_address: int
    priority: int
    has_interrupt: bool
    """ VHDL names """
    in_port: str
    out_port: str
    address_constant: str
    match_signal: str
    irq_constant: "str|None"



@dataclass(frozen=True)
class FabricSpec:

    """
    Structural description of the interconnection between the master and all slaves

    <slaves> is in topology order; <interrupt_priority> lists the interrupt-capable slave ids,
    highest priority first. <tokens> holds the VHDL fragments, keyed by template placeholder.
    """

    topology: FabricTopology
    entity_name: str
    slaves: "tuple[SlavePort, ...]"
    interrupt_priority: "tuple[str, ...]"
    irq_vector_width: int
    irq_none: int
    read_default: int
    """ if True, a slave is only strobed while the master asserts cyc """
    gate_with_cycle: bool
    tokens: "typing.Mapping[str, str]"


    def selected_slaves(self, core_address: int) -> "list[str]":
        """ Ids of the slaves whose comparator matches the given core address """
        return [s.slave_id for s in self.slaves if s.base_address == core_address]


    def package_tokens(self) -> "dict[str, str]":
        """ Placeholders of the shared bus package """
        widths = self.topology.widths
        return {
            'address_width': str(widths.address_width),
            'data_width': str(widths.data_width),
            'core_address_width': str(widths.core_address_width),
            'register_address_width': str(widths.register_address_width),
            'irq_vector_width': str(self.irq_vector_width),
        }



class FabricGenerator:

    @dataclass
    class Format:
        entity_name: str = 'intercon'
        """ if True, slave strobes are also gated with the master's cycle signal """
        gate_with_cycle: bool = True
        indent: str = '   '


    def __init__(self, topology: FabricTopology, format: Format = None):
        self.topology = topology
        self.fmt = format if format is not None else FabricGenerator.Format()

        gen = FabricGeneratorHelper(topology, self.fmt)
        self.spec = gen.spec


    def get_spec(self) -> FabricSpec:
        return self.spec


    def get_tokens(self) -> "typing.Mapping[str, str]":
        return self.spec.tokens



def generate_fabric(topology: FabricTopology, widths: "BusWidths" = None, format: "FabricGenerator.Format" = None) -> FabricSpec:
    if widths is not None and widths != topology.widths:
        raise ValueError('Bus widths differ from the ones the topology was planned with')
    return FabricGenerator(topology, format).get_spec()



class FabricGeneratorHelper:


    def __init__(self, topology: FabricTopology, format: "FabricGenerator.Format"):
        self.topology, self.fmt = topology, format

        self.generate()


    def generate(self):

        ports = []
        for index, slave in enumerate(self.topology.ordered_slaves):
            base = self.topology.base_address_of[slave.id]
            ports.append(SlavePort(
                slave_id=slave.id,
                index=index,
                base_address=base,
                priority=self.topology.priority_of[slave.id],
                has_interrupt=slave.has_interrupt,
                in_port=f'wbs{index}_in',
                out_port=f'wbs{index}_out',
                address_constant=f'WBS{index}_ADR',
                match_signal=f'adr_match_{index}_s',
                irq_constant=f'WBS{index}_IRQ' if slave.has_interrupt else None))
        self.ports = ports
        self.irq_ports = sorted([p for p in ports if p.has_interrupt], key=lambda p: p.priority)

        tokens = {
            'entity_name': self.fmt.entity_name,
            'wishbone_slave_ports': self.gen_wishbone_slave_ports(),
            'slave_address_constants': self.gen_slave_address_constants(),
            'irq_vector_constants': self.gen_irq_vector_constants(),
            'slave_signal_declarations': self.gen_slave_signal_declarations(),
            'common_signal_connections': self.gen_common_signal_connections(),
            'address_comparator': self.gen_address_comparator(),
            'strobe_and_gates': self.gen_strobe_and_gates(),
            'acknowledge_or_gate': self.gen_acknowledge_or_gate(),
            'read_data_multiplexer': self.gen_read_data_multiplexer(),
            'interrupt_or_gate': self.gen_interrupt_or_gate(),
            'interrupt_priority_decoder': self.gen_interrupt_priority_decoder(),
        }
        logger.debug(f'Generated {self.fmt.entity_name} for {len(ports)} slaves')

        self.spec = FabricSpec(
            topology=self.topology,
            entity_name=self.fmt.entity_name,
            slaves=tuple(ports),
            interrupt_priority=tuple([p.slave_id for p in self.irq_ports]),
            irq_vector_width=self.topology.irq_vector_width(),
            irq_none=self.topology.irq_none(),
            read_default=0,
            gate_with_cycle=self.fmt.gate_with_cycle,
            tokens=types.MappingProxyType(tokens))


    def _code(self, code: VhdlCodeFormatter) -> str:
        return code.generate(indent=self.fmt.indent, break_last_line=False)


    def gen_wishbone_slave_ports(self) -> str:
        # these are the last ports of the entity, so the very last one has no ';'
        code = VhdlCodeFormatter()
        for i, p in enumerate(self.ports):
            last = i == len(self.ports) - 1
            code.add(f'{p.out_port} : in wbs_out_type; -- {comment_text(p.slave_id)}')
            code.add(f'{p.in_port} : out wbs_in_type' + ('' if last else ';'))
        return self._code(code)


    def gen_slave_address_constants(self) -> str:
        code = VhdlCodeFormatter()
        width = self.topology.widths.core_address_width
        for p in self.ports:
            code.add(f'constant {p.address_constant} : std_logic_vector(WB_CORE_AW-1 downto 0) := {vhdl_literal(p.base_address, width)}; -- {comment_text(p.slave_id)}')
        return self._code(code)


    def gen_irq_vector_constants(self) -> str:
        code = VhdlCodeFormatter()
        width = self.topology.irq_vector_width()
        code.constant('IRQ_NONE', 'std_logic_vector(WB_IRQ_VW-1 downto 0)', vhdl_literal(self.topology.irq_none(), width))
        for p in self.irq_ports:
            code.constant(p.irq_constant, 'std_logic_vector(WB_IRQ_VW-1 downto 0)', vhdl_literal(p.priority, width))
        return self._code(code)


    def gen_slave_signal_declarations(self) -> str:
        code = VhdlCodeFormatter()
        for p in self.ports:
            code.signal(p.match_signal, 'std_logic')
        return self._code(code)


    def gen_common_signal_connections(self) -> str:
        code = VhdlCodeFormatter()
        for title, field, source in [
                ('dat', 'dat', 'wbm_out.dat'),
                ('adr', 'adr', 'reg_adr_s'),
                ('we', 'we ', 'wbm_out.we'),
                ('cyc', 'cyc', 'wbm_out.cyc'),
                ('clk (wbm as well)', 'clk', 'clk_in'),
                ('rst', 'rst', 'rst_in')]:
            code.comment(title)
            for p in self.ports:
                code.assign(f'{p.in_port}.{field}', source)
            if field == 'clk':
                code.assign('wbm_in.clk', 'clk_in')
            code.blank()
        return self._code(code)


    def gen_address_comparator(self) -> str:
        code = VhdlCodeFormatter()
        for p in self.ports:
            code.assign(p.match_signal, f"'1' when core_adr_s = {p.address_constant} else '0'")
        return self._code(code)


    def gen_strobe_and_gates(self) -> str:
        code = VhdlCodeFormatter()
        for p in self.ports:
            terms = ['wbm_out.stb', p.match_signal]
            if self.fmt.gate_with_cycle:
                terms.insert(0, 'wbm_out.cyc')
            code.assign(f'{p.in_port}.stb', ' AND '.join(terms))
        return self._code(code)


    def gen_acknowledge_or_gate(self) -> str:
        code = VhdlCodeFormatter()
        code.gate('wbm_in.ack', 'OR', [f'{p.out_port}.ack' for p in self.ports])
        return self._code(code)


    def gen_read_data_multiplexer(self) -> str:
        code = VhdlCodeFormatter()
        sel = code.select('core_adr_s', 'wbm_in.dat', "(others => '0')")
        for p in self.ports:
            sel.when(f'{p.out_port}.dat', p.address_constant, p.slave_id)
        return self._code(code)


    def gen_interrupt_or_gate(self) -> str:
        code = VhdlCodeFormatter()
        code.gate('wbm_in.girq', 'OR', [f'{p.out_port}.irq' for p in self.irq_ports])
        return self._code(code)


    def gen_interrupt_priority_decoder(self) -> str:
        code = VhdlCodeFormatter()
        if len(self.irq_ports) == 0:
            code.assign('wbm_in.int_adr', 'IRQ_NONE', 'no interrupt-capable slaves')
            return self._code(code)
        with code.process('IRQ_DEC', [f'{p.out_port}.irq' for p in self.irq_ports]):
            blk = code.ifblock()
            for p in self.irq_ports:
                blk.ifthen(f"{p.out_port}.irq = '1'", p.slave_id)
                blk.assign('wbm_in.int_adr', p.irq_constant)
            blk.elsethen()
            blk.assign('wbm_in.int_adr', 'IRQ_NONE')
        return self._code(code)
