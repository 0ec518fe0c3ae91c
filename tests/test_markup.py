"""Tests for Markdown rendering and code highlighting."""

import os
from types import MappingProxyType

import pytest

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from brochure_pkg.markup import (LANGUAGE_ALIASES, create_attr_list_parser, create_markdown_parser,
                                 highlight)


class TestHighlight:
    """Test cases for fenced code highlighting."""

    def test_known_language(self):
        result = highlight('print(1)\n', 'python')

        assert result.startswith('<pre class="highlight tab tab-python"><code>')
        assert '<span class="nb">print</span>' in result
        assert result.endswith('</code></pre>\n')

    def test_tab_suffix(self):
        """Text after '--' names the tab but not the lexer."""
        result = highlight('puts 1\n', 'ruby--sinatra')
        assert result.startswith('<pre class="highlight tab tab-ruby--sinatra"><code>')
        assert '<span' in result

    def test_unknown_language_is_escaped(self):
        result = highlight('<b>bold</b>', 'no-such-language')
        assert result == '<pre class="highlight"><code>&lt;b&gt;bold&lt;/b&gt;</code></pre>\n'

    def test_no_language(self):
        assert highlight('a < b', '') == '<pre class="highlight"><code>a &lt; b</code></pre>\n'

    def test_shell_alias(self):
        result = highlight('echo hi\n', 'shell')
        assert result.startswith('<pre class="highlight tab tab-shell"><code>')
        assert '<span class="nb">echo</span>' in result

    def test_custom_alias_table(self):
        aliases = MappingProxyType({'py': 'python'})
        assert highlight('x = 1\n', 'py', aliases).startswith('<pre class="highlight tab tab-py">')

    def test_alias_table_is_read_only(self):
        with pytest.raises(TypeError):
            LANGUAGE_ALIASES['js'] = 'javascript'


class TestMarkdownParser:
    """Test cases for the configured Markdown parser."""

    def test_fenced_code_is_highlighted(self, ctx):
        html = create_markdown_parser(ctx)('```python\nprint(1)\n```\n')
        assert 'class="highlight tab tab-python"' in html

    def test_tables(self, ctx):
        html = create_markdown_parser(ctx)('| a | b |\n|---|---|\n| 1 | 2 |\n')
        assert '<table>' in html
        assert '<td>1</td>' in html

    def test_strikethrough(self, ctx):
        assert '<del>gone</del>' in create_markdown_parser(ctx)('~~gone~~')

    def test_bare_urls_linked(self, ctx):
        html = create_markdown_parser(ctx)('Visit https://example.com today')
        assert '<a href="https://example.com">https://example.com</a>' in html

    def test_no_links_option(self, make_ctx):
        html = create_markdown_parser(make_ctx(**{'no-links': True}))('Visit https://example.com today')
        assert '<a ' not in html

    def test_inline_html_passes_through(self, ctx):
        assert '<aside class="notice">' in create_markdown_parser(ctx)('<aside class="notice">Hi</aside>\n')

    def test_attributes_off_by_default(self, ctx):
        assert '{#custom}' in create_markdown_parser(ctx)('# Title {#custom}\n')


class TestAttrListParser:
    """Test cases for the attribute-list converter used with the attr option."""

    def test_selected_by_attr_option(self, make_ctx):
        html = create_markdown_parser(make_ctx(attr=True))('# Title {#custom .big}\n')
        assert '<h1 id="custom" class="big">Title</h1>' in html

    def test_paragraph_attributes(self):
        html = create_attr_list_parser()('Lead text\n{: .lead }\n')
        assert '<p class="lead">Lead text</p>' in html

    def test_key_value_attributes(self):
        html = create_attr_list_parser()('## Usage {: #usage data-level="2" }\n')
        assert 'id="usage"' in html
        assert 'data-level="2"' in html
        assert '{:' not in html

    def test_inline_element_attributes(self):
        html = create_attr_list_parser()('![logo](diagram.png){: .wide }\n')
        assert 'src="diagram.png"' in html
        assert 'class="wide"' in html

    def test_fenced_code_is_highlighted(self):
        html = create_attr_list_parser()('Intro\n\n```ruby--sinatra\nputs 1\n```\n\nAfter\n')

        assert '<pre class="highlight tab tab-ruby--sinatra"><code>' in html
        assert '<p>After</p>' in html
        assert '<p><pre' not in html

    def test_unknown_fence_language_is_escaped(self):
        html = create_attr_list_parser()('~~~\n<b>x</b>\n~~~\n')
        assert '<pre class="highlight"><code>&lt;b&gt;x&lt;/b&gt;\n</code></pre>' in html

    def test_tables_and_raw_html(self):
        html = create_attr_list_parser()('<aside class="notice">Hi</aside>\n\n| a | b |\n|---|---|\n| 1 | 2 |\n')
        assert '<aside class="notice">Hi</aside>' in html
        assert '<td>1</td>' in html

    def test_converter_is_reusable(self):
        """Footnotes and stash state do not leak between documents."""
        convert = create_attr_list_parser()
        first = convert('Text[^1]\n\n[^1]: Note one\n')
        second = convert('Plain\n')

        assert 'Note one' in first
        assert second == '<p>Plain</p>'
