from fabricgen import FabricMdGenerator, FabricGraphGenerator, RegisterFileMdGenerator, generate_register_file, plan

import utils_test


def topology():
    return plan([utils_test.sensor_slave(), utils_test.sensor_slave('other', has_interrupt=False)], utils_test.small_widths())


def test_fabric_md():
    md = FabricMdGenerator(topology(), 'My Fabric').get_md()
    assert md.startswith('My Fabric\n')
    assert 'split into core address `adr[15:12]` and register address `adr[11:0]`' in md
    assert '| 0x1 ' in md
    assert 'other' in md
    assert '0x3 means no interrupt' in md


def test_register_file_md():
    topo = topology()
    spec = generate_register_file(topo.slave('other'), topo.widths)
    md = RegisterFileMdGenerator(spec, topo).get_md()
    assert 'Entity `wbs_other`' in md
    assert '0x1002' in md
    assert '`status_in`, `status_ld`' in md
    assert 'Write-Only' in md


def test_graph():
    source = FabricGraphGenerator(topology()).get_graph().source
    assert 'master' in source
    assert 'intercon' in source
    assert 'slave_1' in source
    assert 'dashed' in source
