from context import fabricgen, demo_output_folder, prepare_output_folder

from fabricgen import FabricBuilder, BusWidths, SlaveDescriptor, RegisterDescriptor, Direction



if __name__ == '__main__':

    FOLDER = demo_output_folder() + '/02-01_fabric'
    prepare_output_folder()


    # 4-bit core address (up to 16 slaves) and 12-bit register address
    widths = BusWidths.split(address_width=16, core_address_width=4, data_width=8)

    # The order matters: the first slave gets core address 0 and the highest interrupt priority
    slaves = [
        SlaveDescriptor('Uart', [
            RegisterDescriptor('tx data', 0x000, 8, Direction.HostWrite),
            RegisterDescriptor('rx data', 0x001, 8, Direction.HostRead),
            RegisterDescriptor('baud divider', 0x002, 8, Direction.Both, reset_value=0x1A),
        ], has_interrupt=True),
        SlaveDescriptor.with_register_count('Gpio', 4, has_interrupt=True),
        SlaveDescriptor.with_register_count('Leds', 1, direction=Direction.HostWrite),
    ]

    builder = FabricBuilder(slaves, widths)

    topology = builder.get_topology()
    for slave in topology.ordered_slaves:
        for reg in slave.registers:
            print(f'{slave.id}.{reg.name}: 0x{topology.absolute_address(slave.id, reg.name):04X}')

    # Writes the VHDL sources, the documentation, and a topology graph (needs the graphviz executables;
    #   use "gv" to only write the dot-file)
    builder.save(FOLDER, markdown=True, graph_format='png')
