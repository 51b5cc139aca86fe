from ..structure.types import FabricTopology

from graphviz import Digraph
import os



NODE_STYLES = {
    'master': dict(shape='rect', style='rounded,filled,bold', fillcolor='HotPink', margin='0.4,0.2'),
    'intercon': dict(shape='rect', style='filled', fillcolor='OldLace', margin='0.1'),
    'slave': dict(shape='rect', style='rounded,filled,bold', fillcolor='Chartreuse', margin='0.4,0.2'),
}



class FabricGraphGenerator:

    def __init__(self, topology: FabricTopology, filename: str = 'fabric.gv'):
        self.topology = topology
        self.filename = filename

        gen = FabricGraphGeneratorHelper(topology, filename)
        self.graph = gen.graph


    def get_graph(self) -> Digraph:
        return self.graph


    def save(self, filename: str = None, render: bool = True):
        """
        filename:  Target file; defaults to the filename given to the constructor
        render:    If True, the graphviz executables draw the graph, in the format given by the
            extension of <filename> (".png", ".svg", ...). Otherwise only the dot-source is written.
        """

        filename = filename if filename is not None else self.filename
        if not render:
            self.graph.save(filename)
            return
        stem, ext = os.path.splitext(filename)
        self.graph.render(stem, cleanup=True, format=ext.lstrip('.'))



class FabricGraphGeneratorHelper:


    def __init__(self, topology: FabricTopology, filename: str):
        self.topology = topology
        self.filename = filename

        self.build()


    def node_id(self, slave) -> str:
        return f'slave_{self.topology.base_address_of[slave.id]}'


    def node_label(self, slave) -> str:
        n = len(slave.registers)
        label = f'{slave.id}\n{n} reg{"s" if n != 1 else ""}'
        if slave.has_interrupt:
            label += '\nIRQ'
        return label


    def build(self):

        widths = self.topology.widths
        core_hi, core_lo = widths.core_address_bits()

        g = Digraph('G', filename=self.filename)
        g.attr('graph', rankdir='LR', splines='ortho')

        g.attr('node', **NODE_STYLES['master'])
        g.node('master', label=f'Master\n{widths.address_width} bit address\n{widths.data_width} bit data')

        g.attr('node', **NODE_STYLES['intercon'])
        g.node('intercon', label=f'Intercon\nadr[{core_hi}:{core_lo}]')

        g.attr('node', **NODE_STYLES['slave'])
        with g.subgraph(name='slaves') as sg:
            # all slaves in one column
            sg.attr('graph', rank='same')
            for slave in self.topology.ordered_slaves:
                sg.node(self.node_id(slave), label=self.node_label(slave))

        g.attr('edge', minlen='2', labeldistance='3')
        g.edge('master', 'intercon')
        for slave in self.topology.ordered_slaves:
            g.edge('intercon', self.node_id(slave), headlabel=f'0x{self.topology.base_address_of[slave.id]:X}')

        irq_slaves = self.topology.interrupt_slaves()
        if len(irq_slaves) > 0:
            g.attr('edge', style='dashed', minlen='1', labeldistance='1')
            for slave in irq_slaves:
                g.edge(self.node_id(slave), 'intercon', label=f'irq {self.topology.priority_of[slave.id]}', constraint='false')

        self.graph = g
