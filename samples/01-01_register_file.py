from context import fabricgen, demo_output_folder, prepare_output_folder

from fabricgen.registers import SlaveDescriptor, RegisterDescriptor, Direction, RegisterFileGenerator, RegisterFileMdGenerator
from fabricgen.fabric import BusWidths
from fabricgen.lib.template import TemplateRenderer



if __name__ == '__main__':

    NAME = demo_output_folder() + '/01-01_register_file'
    prepare_output_folder()


    # A slave is a set of registers; every register has a unique offset inside of the slave
    slave = SlaveDescriptor('pwm', [

        # written by the host, drives the output port <period_out>
        RegisterDescriptor('period', 0x00, 8, Direction.HostWrite, reset_value=0xFF, description='PWM period'),

        # written by the host, and can be read back
        RegisterDescriptor('duty', 0x01, 8, Direction.Both, reset_value=0x80, description='Duty cycle'),

        # loaded by the peripheral through <state_in> and <state_ld>, the host can only read it
        RegisterDescriptor('state', 0x02, 2, Direction.HostRead, description='Counter state'),
    ])


    # The default bus has a 16-bit address (8-bit core address, 8-bit register address) and 8-bit data
    widths = BusWidths()

    gen = RegisterFileGenerator(slave, widths)
    spec = gen.get_spec()

    # The tokens are plain VHDL fragments...
    print(spec.tokens['register_enables'])

    # ...which are filled into the bundled template
    code = TemplateRenderer.from_package('wishbone_slave_template.vhd').render(spec.tokens)
    with open(f'{NAME}.vhd', 'w') as fp:
        fp.write(code)

    RegisterFileMdGenerator(spec).save(f'{NAME}.md')
