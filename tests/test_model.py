import pytest

from fabricgen import FabricBuilder, SlaveDescriptor, RegisterFileGenerator, RegisterFileModel, FabricModel, generate_register_file

import utils_test


@pytest.fixture
def regfile():
    return RegisterFileModel(generate_register_file(utils_test.sensor_slave(), utils_test.small_widths()))


def test_reset_values(regfile):
    assert regfile.value('control') == 0x01
    assert regfile.value('status') == 0x00
    assert regfile.value('threshold') == 0x80
    assert regfile.outputs() == {'control_out': 0x01, 'threshold_out': 0x80}


def test_write_and_read_back(regfile):
    regfile.tick(stb=True, we=True, adr=2, dat=0x12)
    assert regfile.read_data(2) == 0x12
    regfile.tick(stb=True, we=True, adr=0, dat=0xAB)
    assert regfile.outputs()['control_out'] == 0xAB
    # write-only registers read as zero
    assert regfile.read_data(0) == 0


def test_read_does_not_write(regfile):
    regfile.tick(stb=True, we=False, adr=2, dat=0x12)
    assert regfile.value('threshold') == 0x80


def test_reset_dominates_write(regfile):
    regfile.tick(stb=True, we=True, adr=0, dat=0xAB)
    regfile.tick(stb=True, we=True, adr=0, dat=0xCD, rst=True)
    assert regfile.value('control') == 0x01
    regfile.tick(stb=False, we=False, adr=0, dat=0, rst=True, loads={'status': 0x5})
    assert regfile.value('status') == 0x0


def test_host_read_register_ignores_bus_writes(regfile):
    regfile.tick(stb=False, we=False, adr=0, dat=0, rst=True)
    for i in range(10):
        regfile.tick(stb=True, we=True, adr=1, dat=0xFF)
        regfile.tick(stb=True, we=True, adr=i, dat=i)
        assert regfile.read_data(1) == 0x00


def test_host_read_register_is_loaded_by_core(regfile):
    regfile.tick(stb=False, we=False, adr=0, dat=0, loads={'status': 0x1F})
    assert regfile.read_data(1) == 0xF


def test_unmapped_address(regfile):
    assert regfile.ack(True)
    assert not regfile.ack(False)
    assert regfile.read_data(5) == 0
    before = dict(regfile.values)
    regfile.tick(stb=True, we=True, adr=5, dat=0xFF)
    assert regfile.values == before


def test_every_strobe_writes_without_write_intent():
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths(), RegisterFileGenerator.Format(use_write_intent=False))
    model = RegisterFileModel(spec)
    model.tick(stb=True, we=False, adr=2, dat=0x33)
    assert model.value('threshold') == 0x33


def make_fabric(slaves):
    builder = FabricBuilder(slaves, utils_test.small_widths())
    return FabricModel(builder.get_fabric(), builder.get_register_files()), builder.get_topology()


def test_fabric_bus_cycles():
    fabric, topology = make_fabric([
        SlaveDescriptor.with_register_count('X', 2, has_interrupt=True),
        utils_test.sensor_slave(),
    ])
    threshold = topology.absolute_address('sensor', 'threshold')
    assert threshold == 0x1002

    fabric.write(threshold, 0x42)
    assert fabric.read(threshold) == 0x42
    assert fabric.slaves['X'].value('reg0') == 0

    fabric.write(topology.absolute_address('X', 'reg1'), 0x07)
    assert fabric.read(0x0001) == 0x07

    ack, dat = fabric.bus_cycle(0x3000)
    assert not ack
    assert dat == 0

    ack, dat = fabric.bus_cycle(0x1005)
    assert ack
    assert dat == 0


def test_fabric_needs_cycle():
    fabric, topology = make_fabric([utils_test.sensor_slave()])
    adr = topology.absolute_address('sensor', 'threshold')
    ack, _ = fabric.bus_cycle(adr, 0x11, we=True, cyc=False)
    assert not ack
    assert fabric.read(adr) == 0x80


def test_fabric_loads_and_reset():
    fabric, topology = make_fabric([utils_test.sensor_slave()])
    fabric.bus_cycle(0, loads={'sensor': {'status': 0x3}})
    assert fabric.read(topology.absolute_address('sensor', 'status')) == 0x3
    fabric.bus_cycle(0, rst=True)
    assert fabric.read(topology.absolute_address('sensor', 'status')) == 0x0


def test_interrupt_priority():
    fabric, _ = make_fabric([
        SlaveDescriptor.with_register_count('X', 1, has_interrupt=True),
        SlaveDescriptor.with_register_count('Y', 1, has_interrupt=True),
    ])
    assert fabric.irq(['X', 'Y']) == (True, 0)
    assert fabric.irq(['Y']) == (True, 1)
    assert fabric.irq([]) == (False, 3)


def test_interrupt_ignores_incapable_slaves():
    fabric, _ = make_fabric([
        SlaveDescriptor.with_register_count('quiet', 1),
        SlaveDescriptor.with_register_count('loud', 1, has_interrupt=True),
    ])
    assert fabric.irq(['quiet']) == (False, fabric.spec.irq_none)
    assert fabric.irq(['quiet', 'loud']) == (True, 1)
