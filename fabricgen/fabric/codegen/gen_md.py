from ...tools import md_table, binary_si
from ..structure.types import FabricTopology



class FabricMdGenerator:

    def __init__(self, topology: FabricTopology, name: str = 'Fabric', graph_filename: "str|None" = None):
        self.topology = topology

        gen = FabricMdGeneratorHelper(topology, name, graph_filename)
        self.md = gen.md


    def get_md(self) -> str:
        return self.md


    def save(self, filename: str):
        with open(filename, 'w') as fp:
            fp.write(self.get_md())



class FabricMdGeneratorHelper:

    def __init__(self, topology: FabricTopology, name: str, graph_filename: "str|None"):
        self.topology, self.name = topology, name
        self.graph_filename = graph_filename

        self.generate()


    def generate(self):

        widths = self.topology.widths
        core_hi, core_lo = widths.core_address_bits()
        reg_hi, reg_lo = widths.register_address_bits()

        md = []

        md.append(self.name)
        md.append('==========')
        md.append('')
        md.append('')

        if self.graph_filename is not None:
            md.append('## Overview')
            md.append('')
            md.append(f'<img src="{self.graph_filename}" />')
            md.append('')
            md.append('')

        md.append('## Bus')
        md.append('')
        md.append(f'- Topology: shared bus, single master')
        md.append(f'- Data width: {widths.data_width}')
        md.append(f'- Address: `adr[{widths.address_width-1}:0]`, split into core address `adr[{core_hi}:{core_lo}]` '
            f'and register address `adr[{reg_hi}:{reg_lo}]`')
        md.append(f'- Capacity: {binary_si(widths.max_slaves())} slaves, {binary_si(widths.max_registers())} registers each')
        md.append(f'- Interrupt vector: {self.topology.irq_vector_width()} bit, 0x{self.topology.irq_none():X} means no interrupt')

        md.append('')
        md.append('')
        md.append('## Slaves')
        md.append('')

        core_digits = (widths.core_address_width + 3) // 4
        abs_digits = (widths.address_width + 3) // 4

        table = [['Core Address', 'Base Address', 'Name', 'Registers', 'Interrupt', 'Priority']]
        for slave in self.topology.ordered_slaves:
            base = self.topology.base_address_of[slave.id]
            irq = 'yes' if slave.has_interrupt else 'no'
            prio = self.topology.priority_of[slave.id] if slave.has_interrupt else ''
            table.append([f'0x{base:0{core_digits}X}', f'0x{base<<widths.register_address_width:0{abs_digits}X}',
                slave.id, len(slave.registers), irq, prio])
        md.extend(md_table(table))
        md.append('')
        md.append('Priority 0 is the highest; the interrupt vector holds the priority of the highest-priority pending slave.')
        md.append('')

        self.md = '\n'.join(md)
