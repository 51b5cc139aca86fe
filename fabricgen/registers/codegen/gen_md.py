from ...tools import md_table, signal_name
from ..structure.types import Direction



class RegisterFileMdGenerator:

    def __init__(self, spec: "RegisterFileSpec", topology: "FabricTopology|None" = None):
        """
        spec:     the generated register file to document
        topology: if given, absolute (host) addresses are listed as well
        """
        self.spec = spec

        gen = RegisterFileMdGeneratorHelper(spec, topology)
        self.md = gen.md


    def get_md(self) -> str:
        return self.md


    def save(self, filename: str):
        with open(filename, 'w') as fp:
            fp.write(self.get_md())



class RegisterFileMdGeneratorHelper:


    def __init__(self, spec: "RegisterFileSpec", topology: "FabricTopology|None"):
        self.spec, self.topology = spec, topology

        self.generate()


    def generate(self):

        slave, widths = self.spec.slave, self.spec.widths
        adr_digits = (widths.register_address_width + 3) // 4
        abs_digits = (widths.address_width + 3) // 4

        md = []

        md.append(slave.id)
        md.append('==========')
        md.append('')
        if slave.description:
            md.append(slave.description)
            md.append('')
        md.append(f'Entity `{self.spec.component_name}`, {len(slave.registers)} registers, data bus is {widths.data_width} bit wide.')
        if self.topology is not None:
            base = self.topology.base_address_of[slave.id]
            md.append('')
            md.append(f'Core address is 0x{base:X}, interrupt priority is {self.topology.priority_of[slave.id]}.')
        if slave.has_interrupt:
            md.append('')
            md.append('This slave can raise an interrupt (`irq_in`).')

        md.append('')
        md.append('')
        md.append('## Registers')
        md.append('')

        header = ['Offset', 'Name', 'Width', 'Access', 'Hardware', 'Reset', 'Description']
        if self.topology is not None:
            header.insert(1, 'Address')
        table = [header]
        for reg in slave.registers_by_offset():
            sig = signal_name(reg.name)

            if reg.direction == Direction.HostWrite:
                access, hw = 'Write-Only', f'Out (`{sig}_out`)'
            elif reg.direction == Direction.HostRead:
                access, hw = 'Read-Only', f'In (`{sig}_in`, `{sig}_ld`)'
            elif reg.direction == Direction.Both:
                access, hw = 'Write/Read', f'Out (`{sig}_out`)'
            else:
                raise ValueError()

            row = [f'0x{reg.offset:0{adr_digits}X}', reg.name, reg.width_bits, access, hw, f'0x{reg.reset_value:X}', reg.description]
            if self.topology is not None:
                row.insert(1, f'0x{self.topology.absolute_address(slave.id, reg.name):0{abs_digits}X}')
            table.append(row)

        md.extend(md_table(table))
        md.append('')
        md.append('Unmapped offsets are acknowledged, ignore writes, and read as zero.')
        md.append('')

        self.md = '\n'.join(md)
