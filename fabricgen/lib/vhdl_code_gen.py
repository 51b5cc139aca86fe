from ..tools import comment_text
from .code_gen import CodeFormatter, SeparatedList


class VhdlCodeFormatter(CodeFormatter):

    def comment(self, text: str):
        self.add(f'-- {comment_text(text)}')

    def constant(self, name: str, vhdl_type: str, value: str):
        self.add(f'constant {name} : {vhdl_type} := {value};')

    def signal(self, names: "str|list[str]", vhdl_type: str):
        if isinstance(names, str):
            names = [names]
        self.add(f'signal {", ".join(names)} : {vhdl_type};')

    def assign(self, target: str, expression: str, comment: str = None):
        line = f'{target} <= {expression};'
        if comment:
            line += f' -- {comment_text(comment)}'
        self.add(line)

    def gate(self, target: str, operator: str, operands: "list[str]", empty: str = "'0'"):
        """ <target> <= a OR b OR ...; one operand per line """
        if len(operands) < 1:
            self.assign(target, empty)
            return
        if len(operands) == 1:
            self.assign(target, operands[0])
            return
        self.add(f'{target} <= {operands[0]} {operator}')
        self.add(indent_before=True)
        for operand in operands[1:-1]:
            self.add(f'{operand} {operator}')
        self.add(f'{operands[-1]};', detent_after=True)

    def select(self, selector: str, target: str, default: str) -> "VhdlSelect":
        sel = VhdlSelect(selector, target, default)
        self.add(sel)
        return sel

    def ifblock(self) -> "VhdlIfBlock":
        blk = VhdlIfBlock()
        self.add(blk)
        return blk

    def process(self, label: str, sensitivity: "list[str]") -> "CodeFormatter.ContextManager":
        self.add(f'{label} : process ({", ".join(sensitivity)})')
        self.add('begin')
        return self.block(footer_content=f'end process {label};')



class VhdlSelect(CodeFormatter):

    """ Selected signal assignment: with <selector> select <target> <= <value> when <choice>, ... """

    def __init__(self, selector: str, target: str, default: str):
        super().__init__()
        self.selector, self.target, self.default = selector, target, default
        self.choices = SeparatedList(separator=',', terminator=';')

    def when(self, value: str, choice: str, comment: str = None):
        self.choices.item(f'{value} when {choice}', comment_text(comment) if comment else None)

    def _finish(self):
        self.choices.item(f'{self.default} when others')
        self.add(f'with {self.selector} select {self.target} <=')
        self.add(self.choices, indent_before=True, detent_after=True)



class VhdlIfBlock(VhdlCodeFormatter):

    def __init__(self):
        super().__init__()
        self._first = True

    def _finish(self):
        if not self._first:
            self.add('end if;', detent_before=True)

    def ifthen(self, condition: str, comment: str = None) -> "VhdlIfBlock":
        suffix = f' -- {comment_text(comment)}' if comment else ''
        if self._first:
            self.add(f'if {condition} then{suffix}', indent_after=True)
        else:
            self.add(f'elsif {condition} then{suffix}', detent_before=True, indent_after=True)
        self._first = False
        return self

    def elsethen(self) -> "VhdlIfBlock":
        if self._first:
            raise RuntimeError('Else without if')
        self.add('else', detent_before=True, indent_after=True)
        return self
