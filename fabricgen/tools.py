import re
import enum


def vhdl_literal(value: int, width: int) -> str:
    """
    Formats a constant as a VHDL bit-string literal of the given width

    Widths that are a multiple of 4 use hex notation (x"0F"), everything else binary ("0101").
    """
    assert value >= 0
    assert value < (1 << width)
    if width % 4 == 0:
        return f'x"{value:0{width//4}X}"'
    else:
        return f'"{value:0{width}b}"'


def md_table(rows: "list[list[any]]") -> "list[str]":
    """ Markdown table; the first row is the header """

    cells = [[f' {cell} ' for cell in row] for row in rows]
    widths = [max([len(c) for c in col]) for col in zip(*cells)]

    def join(parts):
        return '|' + '|'.join(parts) + '|'

    md = [join([c.ljust(w) for c, w in zip(row, widths)]) for row in cells]
    if len(md) > 0:
        md.insert(1, join(['-'*w for w in widths]))
    return md


def binary_si(n: int, unit: str = '') -> str:
    """ e.g. 4096 -> "4 ki" """
    assert isinstance(n, int) and n >= 0
    prefix, factor = '', 1
    for e, p in enumerate(['ki', 'Mi', 'Gi', 'Ti'], start=1):
        if n >= 1 << (10*e):
            prefix, factor = p, 1 << (10*e)
    suffix = prefix + unit
    return f'{n//factor} {suffix}' if suffix else str(n//factor)


class NamingConvention(enum.Enum):
    snake_case = enum.auto()
    CONSTANT_CASE = enum.auto()


def split_words(name: str) -> "list[str]":
    """ "Motor Driver", "motor-driver" and "MotorDriver" all give ["motor", "driver"] """
    if re.search(r'[ _-]', name) is None and re.search(r'[a-z]', name) and re.search(r'[A-Z]', name):
        # CamelCase; a run of capitals starts a new word
        words = re.findall(r'[A-Z]+[^A-Z]*|[^A-Z]+', name)
    else:
        words = re.split(r'[ _-]+', name)
    words = [re.sub(r'[^a-zA-Z0-9]', '', w).lower() for w in words]
    return [w for w in words if w]


def make_sourcecode_name(name: str, convention: NamingConvention = NamingConvention.snake_case) -> str:

    words = split_words(name)
    if convention is NamingConvention.CONSTANT_CASE:
        words = [w.upper() for w in words]
    code = '_'.join(words)

    # VHDL identifiers must start with a letter
    if re.match(r'^[0-9]', code):
        code = 'n' + code

    return code


def signal_name(name: str) -> str:
    return make_sourcecode_name(name, NamingConvention.snake_case)


def constant_name(name: str) -> str:
    return make_sourcecode_name(name, NamingConvention.CONSTANT_CASE)


VHDL_RESERVED_WORDS = frozenset('''
    abs access after alias all and architecture array assert assume assume_guarantee attribute begin block body buffer
    bus case component configuration constant context cover default disconnect downto else elsif end entity exit
    fairness file for force function generate generic group guarded if impure in inertial inout is label library
    linkage literal loop map mod nand new next nor not null of on open or others out package parameter port postponed
    procedure process property protected pure range record register reject release rem report restrict
    restrict_guarantee return rol ror select sequence severity shared signal sla sll sra srl strong subtype then to
    transport type unaffected units until use variable vmode vprop vunit wait when while with xnor xor
'''.split())


def is_reserved_word(name: str) -> bool:
    """ VHDL is case-insensitive, so "Select" is reserved as well """
    return name.lower() in VHDL_RESERVED_WORDS


def comment_text(text: str) -> str:
    """ Makes arbitrary text safe for a single-line VHDL comment """
    return re.sub(r'[\x00-\x1f\x7f]+', ' ', str(text)).strip()
