import pytest

from fabricgen import TemplateRenderer, MissingTokenError, FabricBuilder

import utils_test


def test_multiline_fragment_is_indented():
    r = TemplateRenderer('a\n   {{ frag | indent(3) }}\nb {{ name }} c\n')
    assert r.placeholders() == {'frag', 'name'}
    assert r.render({'frag': 'x\n\ny', 'name': 'N'}) == 'a\n   x\n\n   y\nb N c\n'


def test_empty_fragment_leaves_empty_line():
    r = TemplateRenderer('a\n  {{ empty }}\nb')
    assert r.render({'empty': ''}) == 'a\n\nb\n'


def test_vhdl_text_is_not_escaped():
    r = TemplateRenderer('{{ code }}')
    assert r.render({'code': "y <= '1' when a = \"01\" else '0'; -- <&>"}) == "y <= '1' when a = \"01\" else '0'; -- <&>\n"


def test_missing_token():
    r = TemplateRenderer('entity {{ name }} is', 'my_template.vhd')
    with pytest.raises(MissingTokenError, match='name') as e:
        r.render({'other': 'x'})
    assert e.value.token == 'name'
    assert e.value.template == 'my_template.vhd'


def test_bundled_templates_match_tokens():
    builder = FabricBuilder([utils_test.sensor_slave()], utils_test.small_widths())
    fabric = builder.get_fabric()
    regfile = builder.get_register_files()[0]

    assert TemplateRenderer.from_package('wishbone_pkg.vhd').placeholders() == set(fabric.package_tokens())
    assert TemplateRenderer.from_package('intercon_template.vhd').placeholders() == set(fabric.tokens)
    assert TemplateRenderer.from_package('wishbone_slave_template.vhd').placeholders() == set(regfile.tokens)


def test_bundled_template_misses_token():
    regfile = FabricBuilder([utils_test.sensor_slave()], utils_test.small_widths()).get_register_files()[0]
    tokens = dict(regfile.tokens)
    del tokens['store_conditions']
    with pytest.raises(MissingTokenError, match='store_conditions'):
        TemplateRenderer.from_package('wishbone_slave_template.vhd').render(tokens)
