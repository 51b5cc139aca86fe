import warnings
from dataclasses import dataclass, field


@dataclass
class LineElement:
    content: "str|None" = field(default=None)
    indent: int = field(default=0)
    blank: int = field(default=0)


class CodeFormatter:

    """
    Collects lines of code, with indentation markers and blank lines, and joins them into text

    Formatters can be nested (see sub()); a nested formatter is unrolled when the code is generated,
    so it can still be filled after it was inserted.
    """

    def __init__(self):
        self._lines: "list[LineElement|CodeFormatter]" = []
        self._finished = False

    class ContextManager:

        def __init__(self, parent: "CodeFormatter", footer: "CodeFormatter"):
            self.parent, self.footer = parent, footer

        def __enter__(self):
            return self.parent

        def __exit__(self, exc_type, exc_val, exc_tb):
            self.parent.add(self.footer)

    def _finish(self):
        """ Called before code is generated; may be overridden in derived class,
            e.g. to add additional lines at the end, or to post-process lines """
        pass

    def sub(self) -> "CodeFormatter":
        """ Inserts and returns another formatter object """
        new = CodeFormatter()
        self.add(new)
        return new

    def add(self, content: "CodeFormatter|str|list[str]" = None, indent_before: bool = False, detent_before: bool = False,
        indent_after: bool = False, detent_after: bool = False):
        """
        Add one or more lines

        content:   a line, or a list of lines, or another CodeFormatter object
        """
        if indent_before:
            self._lines.append(LineElement(indent=+1))
        if detent_before:
            self._lines.append(LineElement(indent=-1))
        if content is None:
            pass
        elif isinstance(content, str):
            self._add_line(content)
        elif isinstance(content, list):
            for line in content:
                self._add_line(line)
        elif isinstance(content, CodeFormatter):
            self._lines.append(content)
        else:
            raise ValueError(f'Unknown line type: <{type(content)}> ({content})')
        if indent_after:
            self._lines.append(LineElement(indent=+1))
        if detent_after:
            self._lines.append(LineElement(indent=-1))

    def _add_line(self, line: str):
        if line == '':
            self._lines.append(LineElement(blank=1))
        else:
            self._lines.append(LineElement(line))

    def block(self, header_content: "str|list[str]" = None, footer_content: "str|list[str]" = None) -> "CodeFormatter.ContextManager":
        """ Same as add(), but can be used in a <with>-statement; all lines added within the <with> will be indented """
        if header_content is not None:
            self.add(header_content)
        self.add(indent_before=True)
        footer = CodeFormatter()
        footer.add(footer_content, detent_before=True)
        return CodeFormatter.ContextManager(self, footer)

    def blank(self, n = 1):
        """ Insert a number of blank lines (multiple blanks are combined into the longest of them) """
        self._lines.append(LineElement(blank=n))

    def _unroll(self) -> "list[LineElement]":
        if not self._finished:
            self._finish()
            self._finished = True
        lines = []
        for line in self._lines:
            if isinstance(line, CodeFormatter):
                lines.extend(line._unroll())
            else:
                lines.append(line)
        return lines

    def generate(self, indent: str = '   ', line_end: str = '\n', initial_indent: int = 0, break_last_line: bool = True) -> str:
        """ Generate formatted code; leading and trailing blank lines are dropped """

        lines = self._unroll()

        out = []
        pending_blanks = 0
        level = initial_indent
        for line in lines:
            if line.indent != 0:
                level += line.indent
                if level < 0:
                    warnings.warn('Negative indent level')
                continue
            if line.blank > 0:
                # if multiple blanks touch, only use the longest of them
                if len(out) > 0:
                    pending_blanks = max(pending_blanks, line.blank)
                continue
            out.extend([''] * pending_blanks)
            pending_blanks = 0
            out.append(indent*level + line.content)

        if level != initial_indent:
            warnings.warn(f'Indentation ends at level {level-initial_indent:+d}')

        text = line_end.join(out)
        if break_last_line and len(out) > 0:
            text += line_end
        return text



class SeparatedList(CodeFormatter):

    """
    A list of items, where every item but the last one is followed by <separator>,
    and the last one by <terminator>; e.g. the ports of an entity, or the choices of a selected assignment
    """

    def __init__(self, separator: str = ',', terminator: str = '', comment_prefix: str = '--'):
        super().__init__()
        self.separator, self.terminator, self.comment_prefix = separator, terminator, comment_prefix
        self._items: "list[tuple[str,str|None]]" = []

    def item(self, code: str, comment: str = None):
        self._items.append((code, comment))

    def __len__(self):
        return len(self._items)

    def _finish(self):
        self._lines = []
        for i, (code, comment) in enumerate(self._items):
            line = code + (self.terminator if i == len(self._items)-1 else self.separator)
            if comment:
                line += f' {self.comment_prefix} {comment}'
            self._add_line(line)
