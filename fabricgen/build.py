from .fabric.structure import BusWidths, FabricTopology, plan
from .fabric.codegen import FabricGenerator, FabricSpec, FabricMdGenerator, FabricGraphGenerator
from .registers.structure import SlaveDescriptor
from .registers.codegen import RegisterFileGenerator, RegisterFileSpec, RegisterFileMdGenerator
from .lib.template import TemplateRenderer
from .errors import DuplicateSlaveId

import logging
import os
from dataclasses import dataclass, field


logger = logging.getLogger(__name__)


PACKAGE_TEMPLATE = 'wishbone_pkg.vhd'
INTERCON_TEMPLATE = 'intercon_template.vhd'
SLAVE_TEMPLATE = 'wishbone_slave_template.vhd'



class FabricBuilder:

    """
    Generates the VHDL sources of a complete fabric: the shared bus package, the intercon,
    and one register file per slave

    All slaves are validated before anything is generated; if one of them is invalid, an
    exception is raised and no file is written.
    """

    @dataclass
    class Format:
        regfile: RegisterFileGenerator.Format = field(default_factory=RegisterFileGenerator.Format)
        fabric: FabricGenerator.Format = field(default_factory=FabricGenerator.Format)


    def __init__(self, slaves: "list[SlaveDescriptor]", widths: BusWidths = None, format: Format = None):
        self.widths = widths if widths is not None else BusWidths()
        self.fmt = format if format is not None else FabricBuilder.Format()

        self.topology = plan(slaves, self.widths)
        logger.info(f'Planned fabric with {len(self.topology.ordered_slaves)} slaves '
            f'({self.widths.address_width}-bit address, {self.widths.data_width}-bit data)')
        for slave in self.topology.ordered_slaves:
            logger.debug(f'{slave.id}: core address 0x{self.topology.base_address_of[slave.id]:X}, '
                f'priority {self.topology.priority_of[slave.id]}')

        self.register_files = [RegisterFileGenerator(slave, self.widths, self.fmt.regfile).get_spec()
            for slave in self.topology.ordered_slaves]
        self.fabric = FabricGenerator(self.topology, self.fmt.fabric).get_spec()
        self.check_unit_names()


    def check_unit_names(self):
        """ All packages and entities end up in the same library, so their names must be unique (VHDL ignores case) """

        owners = {PACKAGE_TEMPLATE[:-len('.vhd')]: None, self.fabric.entity_name.lower(): None}
        for spec in self.register_files:
            for unit in [spec.package_name, spec.component_name]:
                key = unit.lower()
                if key in owners:
                    other = f'slave "{owners[key]}"' if owners[key] is not None else 'the bus package or the intercon'
                    raise DuplicateSlaveId(spec.slave.id, f'design unit {unit} collides with {other}')
                owners[key] = spec.slave.id


    def get_topology(self) -> FabricTopology:
        return self.topology


    def get_register_files(self) -> "list[RegisterFileSpec]":
        """ One spec per slave, in topology order """
        return list(self.register_files)


    def get_fabric(self) -> FabricSpec:
        return self.fabric


    def get_files(self) -> "dict[str, str]":
        """ Returns the generated VHDL sources (filename -> code); the package comes first, then the intercon, then the slaves """

        files = {}
        files[PACKAGE_TEMPLATE] = TemplateRenderer.from_package(PACKAGE_TEMPLATE).render(self.fabric.package_tokens())
        files[f'{self.fabric.entity_name}.vhd'] = TemplateRenderer.from_package(INTERCON_TEMPLATE).render(self.fabric.tokens)

        slave_template = TemplateRenderer.from_package(SLAVE_TEMPLATE)
        for spec in self.register_files:
            files[f'{spec.component_name}.vhd'] = slave_template.render(spec.tokens)

        return files


    def save(self, folder: str, markdown: bool = True, graph_format: "str|None" = None) -> "list[str]":
        """
        Writes all generated files into <folder>, and returns their paths.
        markdown:      If True, a Markdown documentation of the fabric and of every slave is written as well.
        graph_format:  If given, a graphviz graph of the topology is written, e.g. "png" or "pdf";
            "gv" writes the raw dot-file (does not need the graphviz executables).
        """

        os.makedirs(folder, exist_ok=True)
        written = []

        def write(filename: str, text: str):
            path = os.path.join(folder, filename)
            with open(path, 'w') as fp:
                fp.write(text)
            logger.info(f'Wrote {path}')
            written.append(path)

        for filename, code in self.get_files().items():
            write(filename, code)

        graph_filename = None
        if graph_format is not None:
            graph_filename = f'{self.fabric.entity_name}.{graph_format}'
            path = os.path.join(folder, graph_filename)
            FabricGraphGenerator(self.topology, path).save(path, render=graph_format != 'gv')
            logger.info(f'Wrote {path}')
            written.append(path)

        if markdown:
            write(f'{self.fabric.entity_name}.md', FabricMdGenerator(self.topology, self.fabric.entity_name, graph_filename).get_md())
            for spec in self.register_files:
                write(f'{spec.component_name}.md', RegisterFileMdGenerator(spec, self.topology).get_md())

        return written
