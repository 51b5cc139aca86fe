from ..errors import MissingTokenError

from jinja2 import Environment, PackageLoader, StrictUndefined, UndefinedError, meta


ENVIRONMENT = Environment(
    loader=PackageLoader('fabricgen', 'templates'),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False)


class TemplateRenderer:

    """
    Fills {{ token }} placeholders of a jinja2 template with generated fragments

    Multi-line fragments are indented inside the template with the indent filter, e.g.
    `{{ register_typedef | indent(6) }}` for a placeholder in column 6. Trailing whitespace is
    stripped from every rendered line, so an empty fragment leaves an empty line.
    """

    def __init__(self, template: str, name: str = None):
        self.template, self.name = template, name
        self.compiled = ENVIRONMENT.from_string(template)


    @staticmethod
    def from_package(filename: str) -> "TemplateRenderer":
        """ Loads one of the templates bundled with this package """
        source, _, _ = ENVIRONMENT.loader.get_source(ENVIRONMENT, filename)
        return TemplateRenderer(source, filename)


    def placeholders(self) -> "set[str]":
        return set(meta.find_undeclared_variables(ENVIRONMENT.parse(self.template)))


    def render(self, tokens: "dict[str, str]") -> str:

        missing = sorted(self.placeholders() - set(tokens))
        if len(missing) > 0:
            raise MissingTokenError(missing[0], self.name)

        try:
            text = self.compiled.render(dict(tokens))
        except UndefinedError as e:
            raise MissingTokenError(str(e), self.name) from e

        return '\n'.join([line.rstrip() for line in text.splitlines()]) + '\n'
