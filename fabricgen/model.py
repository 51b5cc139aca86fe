"""
Cycle-based behavioral models of the generated logic

The models are driven by the generated specs only (comparators, enables, store conditions,
read multiplexers, priority order), so they show what the generated VHDL does without a simulator.
One call to tick() / bus_cycle() corresponds to one rising clock edge.

Usage:
    fabric = FabricModel(builder.get_fabric(), builder.get_register_files())
    fabric.bus_cycle(adr=0x0102, dat=0x55, we=True)
    ack, dat = fabric.bus_cycle(adr=0x0102)
"""

from .registers.codegen.gen_regfile import RegisterFileSpec, StoreSource
from .fabric.codegen.gen_fabric import FabricSpec

import typing



class RegisterFileModel:

    """ One slave's register bank """

    def __init__(self, spec: RegisterFileSpec):
        self.spec = spec
        self.masks = {r.name: r.mask() for r in spec.slave.registers}
        self.values: "dict[str, int]" = {}
        self.reset()


    def reset(self):
        """ Puts every register into its reset state, like an asserted reset at a clock edge """
        for r in self.spec.resets:
            self.values[r.register] = r.value


    def _signals(self, stb: bool, we: bool, adr: int) -> "dict[str, bool]":
        signals = {'wbs_in.stb': bool(stb), 'wbs_in.we': bool(we)}
        for c in self.spec.comparators:
            signals[c.signal] = c.offset == adr
        return signals


    def enabled_registers(self, stb: bool, we: bool, adr: int) -> "list[str]":
        """ Registers whose write enable is asserted for the given bus inputs """
        signals = self._signals(stb, we, adr)
        return [e.register for e in self.spec.enables if all([signals[t] for t in e.terms])]


    def tick(self, stb: bool, we: bool, adr: int, dat: int, rst: bool = False, loads: "dict[str, int]|None" = None):
        """
        Rising clock edge
        loads:  values presented by the peripheral to its HostRead registers (register name -> value);
            a register listed here has its load strobe asserted during this cycle
        """
        if rst:
            # reset overrides every enable
            self.reset()
            return

        loads = loads if loads is not None else {}
        enabled = self.enabled_registers(stb, we, adr)
        for s in self.spec.stores:
            if s.source == StoreSource.Bus:
                if s.register in enabled:
                    self.values[s.register] = dat & self.masks[s.register]
            elif s.source == StoreSource.Core:
                if s.register in loads:
                    self.values[s.register] = loads[s.register] & self.masks[s.register]
            else:
                raise ValueError(f'Unknown store source {s.source}')


    def read_data(self, adr: int) -> int:
        """ Combinational read data for the given register address """
        for choice in self.spec.read_mux:
            if choice.offset == adr:
                return self.values[choice.register]
        return self.spec.read_default


    def ack(self, stb: bool) -> bool:
        return bool(stb)


    def value(self, register: str) -> int:
        return self.values[register]


    def outputs(self) -> "dict[str, int]":
        """ Values of the output ports (port name -> value) """
        return {o.port: self.values[o.register] for o in self.spec.outputs}



class FabricModel:

    """ The intercon together with all register files """

    def __init__(self, fabric_spec: FabricSpec, register_file_specs: "typing.Iterable[RegisterFileSpec]"):
        self.spec = fabric_spec
        self.widths = fabric_spec.topology.widths
        self.slaves: "dict[str, RegisterFileModel]" = {s.slave.id: RegisterFileModel(s) for s in register_file_specs}
        for port in fabric_spec.slaves:
            if port.slave_id not in self.slaves:
                raise KeyError(f'No register file for slave "{port.slave_id}"')


    def reset(self):
        for model in self.slaves.values():
            model.reset()


    def split(self, adr: int) -> "tuple[int,int]":
        """ (core address, register address) """
        reg_aw = self.widths.register_address_width
        core = (adr >> reg_aw) & ((1 << self.widths.core_address_width) - 1)
        return core, adr & ((1 << reg_aw) - 1)


    def strobes(self, adr: int, stb: bool = True, cyc: bool = True) -> "dict[str, bool]":
        """ Strobe of every slave (slave id -> strobe) """
        core, _ = self.split(adr)
        active = bool(stb) and (bool(cyc) or not self.spec.gate_with_cycle)
        return {p.slave_id: active and p.base_address == core for p in self.spec.slaves}


    def bus_cycle(self, adr: int, dat: int = 0, we: bool = False, stb: bool = True, cyc: bool = True, rst: bool = False,
        loads: "dict[str, dict[str, int]]|None" = None) -> "tuple[bool, int]":
        """
        One clock cycle of the master bus; returns (ack, read data) as seen by the master before the clock edge
        loads:  per slave id, the values the peripherals load into their HostRead registers during this cycle
        """
        core, reg = self.split(adr)
        strobes = self.strobes(adr, stb, cyc)

        ack = any([self.slaves[p.slave_id].ack(strobes[p.slave_id]) for p in self.spec.slaves])
        read_data = self.spec.read_default
        for p in self.spec.slaves:
            if p.base_address == core:
                read_data = self.slaves[p.slave_id].read_data(reg)
                break

        loads = loads if loads is not None else {}
        for p in self.spec.slaves:
            self.slaves[p.slave_id].tick(strobes[p.slave_id], we, reg, dat, rst, loads.get(p.slave_id))

        return ack, read_data


    def write(self, adr: int, dat: int):
        self.bus_cycle(adr, dat, we=True)


    def read(self, adr: int) -> int:
        _, dat = self.bus_cycle(adr)
        return dat


    def irq(self, asserting: "typing.Iterable[str]") -> "tuple[bool, int]":
        """
        Interrupt outputs towards the master, while the given slaves assert irq_in
        Returns (global interrupt, interrupt vector); slaves that are not interrupt-capable are ignored.
        """
        asserting = set(asserting)
        for slave_id in self.spec.interrupt_priority:
            if slave_id in asserting:
                port = [p for p in self.spec.slaves if p.slave_id == slave_id][0]
                return True, port.priority
        return False, self.spec.irq_none
