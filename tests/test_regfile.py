import pytest

from fabricgen import BusWidths, SlaveDescriptor, RegisterDescriptor, Direction, RegisterFileGenerator, generate_register_file
from fabricgen import DuplicateRegisterOffset, RegisterAddressOverflow, DuplicateRegisterName, InvalidRegister
from fabricgen.registers import StoreSource

import utils_test


REGISTER_FILE_TOKENS = ['register_address_constants', 'signal_definitions', 'address_comparators', 'register_enables',
    'register_inputs', 'register_output_demultiplexer', 'register_outputs', 'reset_assignments', 'store_conditions']


def test_tokens_present():
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    for token in REGISTER_FILE_TOKENS:
        assert token in spec.tokens
    assert spec.component_name == 'wbs_sensor'
    assert spec.package_name == 'wbs_sensor_pkg'
    assert spec.register_type_name == 'wbs_sensor_reg_t'


def test_comparators_mutually_exclusive():
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    for adr in range(64):
        assert len(spec.selected_registers(adr)) <= 1
    assert spec.selected_registers(2) == ['threshold']
    assert spec.selected_registers(3) == []


def test_write_enables():
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    enables = {e.register: e.terms for e in spec.enables}
    assert enables == {
        'control': ('wbs_in.stb', 'wbs_in.we', 'control_adr_match_s'),
        'threshold': ('wbs_in.stb', 'wbs_in.we', 'threshold_adr_match_s'),
    }
    assert spec.tokens['register_enables'] == '\n'.join([
        'control_we_s <= wbs_in.stb AND wbs_in.we AND control_adr_match_s;',
        'threshold_we_s <= wbs_in.stb AND wbs_in.we AND threshold_adr_match_s;',
    ])


def test_write_enables_without_write_intent():
    fmt = RegisterFileGenerator.Format(use_write_intent=False)
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths(), fmt)
    assert not spec.use_write_intent
    assert spec.enables[0].terms == ('wbs_in.stb', 'control_adr_match_s')


def test_host_read_register_is_loaded_by_core():
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    inputs = {i.register: i for i in spec.inputs}
    assert inputs['status'].source == StoreSource.Core
    assert inputs['status'].expression == 'status_in'
    assert inputs['control'].source == StoreSource.Bus
    assert inputs['control'].expression == 'wbs_in.dat(7 downto 0)'
    assert [s.enable for s in spec.stores] == ['control_we_s', 'status_ld', 'threshold_we_s']
    assert [o.port for o in spec.outputs] == ['control_out', 'threshold_out']
    assert "if status_ld = '1' then" in spec.tokens['store_conditions']


def test_read_mux_skips_write_only_and_pads():
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    assert [c.register for c in spec.read_mux] == ['status', 'threshold']
    assert spec.read_default == 0
    assert spec.tokens['register_output_demultiplexer'] == '\n'.join([
        'with wbs_in.adr select wbs_out.dat <=',
        '   "0000" & reg_out_s.status when STATUS_ADR,',
        '   reg_out_s.threshold when THRESHOLD_ADR,',
        "   (others => '0') when others;",
    ])


def test_fragments():
    spec = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    assert spec.tokens['register_address_constants'].splitlines()[0] == \
        'constant CONTROL_ADR : std_logic_vector(WB_REG_AW-1 downto 0) := x"000";'
    assert spec.tokens['reset_assignments'] == '\n'.join([
        'reg_out_s.control <= x"01";',
        'reg_out_s.status <= x"0";',
        'reg_out_s.threshold <= x"80";',
    ])
    assert spec.tokens['store_conditions'].splitlines()[:4] == [
        '-- store control',
        "if control_we_s = '1' then",
        '   reg_out_s.control <= reg_in_s.control;',
        'end if;',
    ]
    assert spec.tokens['register_port_definitions'] == '\n'.join([
        'control_out : out std_logic_vector(7 downto 0);',
        'status_in : in std_logic_vector(3 downto 0);',
        'status_ld : in std_logic;',
        'threshold_out : out std_logic_vector(7 downto 0);',
        'irq_in : in std_logic;',
    ])
    assert spec.tokens['interrupt_connection'] == 'wbs_out.irq <= irq_in;'


def test_slave_without_interrupt_ties_irq_low():
    spec = generate_register_file(utils_test.sensor_slave(has_interrupt=False), utils_test.small_widths())
    assert spec.tokens['interrupt_connection'] == "wbs_out.irq <= '0';"
    assert 'irq_in' not in spec.tokens['register_port_definitions']


def test_slave_without_registers():
    with pytest.warns(UserWarning, match='no registers'):
        spec = generate_register_file(SlaveDescriptor('empty', []), utils_test.small_widths())
    assert spec.tokens['store_conditions'] == 'null;'
    assert spec.tokens['register_output_demultiplexer'] == "wbs_out.dat <= (others => '0'); -- no readable registers"
    assert spec.tokens['register_typedef'] == 'unused : std_logic;'
    assert spec.tokens['signal_definitions'] == ''


def test_duplicate_offset():
    slave = SlaveDescriptor('dup', [
        RegisterDescriptor('a', 0, 8, Direction.Both),
        RegisterDescriptor('b', 0, 8, Direction.Both),
    ])
    with pytest.raises(DuplicateRegisterOffset) as e:
        generate_register_file(slave, utils_test.small_widths())
    assert e.value.offset == 0
    assert e.value.names == ('a', 'b')


def test_offset_overflow():
    widths = BusWidths.split(16, 12)
    slave = SlaveDescriptor('big', [RegisterDescriptor('far', 16, 8, Direction.Both)])
    with pytest.raises(RegisterAddressOverflow, match='far') as e:
        generate_register_file(slave, widths)
    assert e.value.register_address_width == 4


def test_duplicate_name():
    slave = SlaveDescriptor('names', [
        RegisterDescriptor('Ctrl Reg', 0, 8, Direction.Both),
        RegisterDescriptor('ctrl_reg', 1, 8, Direction.Both),
    ])
    with pytest.raises(DuplicateRegisterName):
        generate_register_file(slave, utils_test.small_widths())


def test_invalid_shapes():
    too_wide = SlaveDescriptor('s', [RegisterDescriptor('r', 0, 9, Direction.Both)])
    with pytest.raises(InvalidRegister, match='width'):
        generate_register_file(too_wide, utils_test.small_widths())
    bad_reset = SlaveDescriptor('s', [RegisterDescriptor('r', 0, 4, Direction.Both, reset_value=0x10)])
    with pytest.raises(InvalidRegister, match='reset value'):
        generate_register_file(bad_reset, utils_test.small_widths())


def test_generation_is_idempotent():
    a = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    b = generate_register_file(utils_test.sensor_slave(), utils_test.small_widths())
    assert dict(a.tokens) == dict(b.tokens)
    assert a.comparators == b.comparators
    assert a.stores == b.stores


def test_reserved_word_as_register_name():
    for name in ['select', 'Signal', 'out']:
        slave = SlaveDescriptor('kw', [RegisterDescriptor(name, 0, 8, Direction.Both)])
        with pytest.raises(InvalidRegister, match='reserved word'):
            generate_register_file(slave, utils_test.small_widths())


def test_port_collides_with_interrupt_input():
    slave = SlaveDescriptor('irq slave', [RegisterDescriptor('irq', 0, 8, Direction.HostRead)], has_interrupt=True)
    with pytest.raises(InvalidRegister, match='irq_in'):
        generate_register_file(slave, utils_test.small_widths())

    # without an interrupt input, the name is free
    slave = SlaveDescriptor('irq slave', [RegisterDescriptor('irq', 0, 8, Direction.HostRead)], has_interrupt=False)
    spec = generate_register_file(slave, utils_test.small_widths())
    ports = [line.split(' : ')[0] for line in spec.tokens['register_port_definitions'].splitlines()]
    assert ports == ['irq_in', 'irq_ld']


def test_port_collides_with_bus_port():
    slave = SlaveDescriptor('s', [RegisterDescriptor('wbs', 0, 8, Direction.HostRead)])
    with pytest.raises(InvalidRegister, match='wbs_in'):
        generate_register_file(slave, utils_test.small_widths())


def test_declared_names_collide_with_custom_suffixes():
    fmt = RegisterFileGenerator.Format(load_suffix='_in')
    slave = SlaveDescriptor('s', [RegisterDescriptor('a', 0, 8, Direction.HostRead)])
    with pytest.raises(InvalidRegister, match='a_in collides with register a'):
        generate_register_file(slave, utils_test.small_widths(), fmt)
