from context import fabricgen, demo_output_folder, prepare_output_folder

from fabricgen import FabricBuilder, FabricModel, BusWidths, SlaveDescriptor, RegisterDescriptor, Direction



if __name__ == '__main__':

    prepare_output_folder()

    slaves = [
        SlaveDescriptor('timer', [
            RegisterDescriptor('reload', 0, 8, Direction.Both, reset_value=0x10),
            RegisterDescriptor('count', 1, 8, Direction.HostRead),
        ], has_interrupt=True),
        SlaveDescriptor.with_register_count('scratch', 2, has_interrupt=True),
    ]
    builder = FabricBuilder(slaves, BusWidths())
    topology = builder.get_topology()

    # The model executes the generated specs cycle by cycle, without a VHDL simulator
    fabric = FabricModel(builder.get_fabric(), builder.get_register_files())

    reload = topology.absolute_address('timer', 'reload')
    print(f'reload after reset: 0x{fabric.read(reload):02X}')
    fabric.write(reload, 0x42)
    print(f'reload after write: 0x{fabric.read(reload):02X}')

    # the peripheral loads its counter value, the host reads it
    fabric.bus_cycle(0, loads={'timer': {'count': 0x07}})
    print(f'count: 0x{fabric.read(topology.absolute_address("timer", "count")):02X}')

    girq, vector = fabric.irq(['scratch', 'timer'])
    print(f'irq={girq}, vector={vector} (timer has the higher priority)')
