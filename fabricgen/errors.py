class FabricError(RuntimeError):
    """ Base class of all structural errors detected while generating a fabric """
    pass



class InvalidBusWidths(FabricError):

    def __init__(self, message: str):
        super().__init__(f'Invalid bus widths: {message}')



class DuplicateSlaveId(FabricError):

    def __init__(self, slave_id: str, detail: str = None):
        self.slave_id, self.detail = slave_id, detail
        super().__init__(f'Slave id "{slave_id}" is not unique' + (f' ({detail})' if detail else ''))



class AddressSpaceExhausted(FabricError):

    def __init__(self, slave_count: int, core_address_width: int):
        self.slave_count, self.core_address_width = slave_count, core_address_width
        super().__init__(f'{slave_count} slaves do not fit into a {core_address_width}-bit core address '
            f'(at most {1<<core_address_width} slaves)')



class DuplicateRegisterOffset(FabricError):

    def __init__(self, slave_id: str, offset: int, names: "tuple[str,str]"):
        self.slave_id, self.offset, self.names = slave_id, offset, names
        super().__init__(f'Registers {slave_id}.{names[0]} and {slave_id}.{names[1]} share offset 0x{offset:X}')



class RegisterAddressOverflow(FabricError):

    def __init__(self, slave_id: str, register: str, offset: int, register_address_width: int):
        self.slave_id, self.register, self.offset, self.register_address_width = slave_id, register, offset, register_address_width
        super().__init__(f'Register {slave_id}.{register} offset 0x{offset:X} exceeds the {register_address_width}-bit '
            f'register address (highest offset is 0x{(1<<register_address_width)-1:X})')



class DuplicateRegisterName(FabricError):

    def __init__(self, slave_id: str, name: str):
        self.slave_id, self.name = slave_id, name
        super().__init__(f'Register name "{name}" in slave {slave_id} is not unique')



class InvalidRegister(FabricError):

    def __init__(self, slave_id: str, register: str, message: str):
        self.slave_id, self.register = slave_id, register
        super().__init__(f'Register {slave_id}.{register}: {message}')



class MissingTokenError(FabricError):

    def __init__(self, token: str, template: str = None):
        self.token, self.template = token, template
        where = f' in template {template}' if template else ''
        super().__init__(f'No fragment for placeholder %{token}{where}')
