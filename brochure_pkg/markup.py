"""
Markdown to HTML, with Pygments highlighting for fenced code.

Pages render with mistune. With the ``attr`` option they render with
Python-Markdown instead, whose ``attr_list`` extension reads
``{: #id .class key=value}`` blocks on headings, paragraphs and inline
elements.
"""

import html
import re
from types import MappingProxyType

import markdown
import mistune
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

# Fence tags that Pygments should treat as another language
LANGUAGE_ALIASES = MappingProxyType({
    'shell': 'bash',
    'sh': 'bash',
})

BASE_PLUGINS = ['table', 'strikethrough', 'task_lists', 'footnotes']

ATTR_LIST_EXTENSIONS = ['attr_list', 'tables', 'footnotes', 'sane_lists']

FENCED_CODE_RE = re.compile(
    r'^(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[^\s`]*)[^\n]*\n(?P<code>.*?)(?<=\n)(?P=fence)[ \t]*$',
    re.MULTILINE | re.DOTALL)


def highlight(code, lang, aliases=LANGUAGE_ALIASES):
    """
    Render a fenced code block.

    ``lang`` may carry a ``--suffix`` so that several tabs can show the same
    language; only the part before it selects the lexer.
    """
    slang = lang.split('--')[0] if lang else ''
    if slang:
        try:
            lexer = get_lexer_by_name(aliases.get(slang, slang))
        except ClassNotFound:
            lexer = None
        if lexer is not None:
            body = pygments_highlight(code, lexer, HtmlFormatter(nowrap=True))
            return f'<pre class="highlight tab tab-{html.escape(lang)}"><code>{body}</code></pre>\n'
    return f'<pre class="highlight"><code>{html.escape(code)}</code></pre>\n'


class PageRenderer(mistune.HTMLRenderer):
    """HTML renderer that highlights fenced code."""

    def __init__(self, aliases=LANGUAGE_ALIASES):
        super().__init__(escape=False)
        self.aliases = aliases

    def block_code(self, code, info=None):
        lang = info.split()[0] if info else ''
        return highlight(code, lang, self.aliases)


class HighlightedFencePreprocessor(Preprocessor):
    """Swap fenced code for stashed, highlighted HTML before blocks are parsed."""

    def __init__(self, md, aliases):
        super().__init__(md)
        self.aliases = aliases

    def run(self, lines):
        def _stash(match):
            block = highlight(match.group('code'), match.group('lang'), self.aliases)
            return f"\n\n{self.md.htmlStash.store(block)}\n\n"

        return FENCED_CODE_RE.sub(_stash, '\n'.join(lines)).split('\n')


class HighlightedFenceExtension(Extension):
    def __init__(self, aliases=LANGUAGE_ALIASES, **kwargs):
        self.aliases = aliases
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # Same slot as the stock fenced_code extension: after whitespace
        # normalisation, before raw HTML blocks are stashed
        md.preprocessors.register(HighlightedFencePreprocessor(md, self.aliases), 'highlighted_fence', 25)


def create_attr_list_parser(aliases=LANGUAGE_ALIASES):
    """Create a Python-Markdown converter with attribute lists enabled."""
    md = markdown.Markdown(
        extensions=ATTR_LIST_EXTENSIONS + [HighlightedFenceExtension(aliases)],
        output_format='html',
    )

    def convert(text):
        return md.reset().convert(text)

    return convert


def create_markdown_parser(ctx):
    """Create the Markdown converter configured for one render."""
    if ctx.attr:
        return create_attr_list_parser()
    plugins = list(BASE_PLUGINS)
    if not ctx.no_links:
        plugins.append('url')
    return mistune.create_markdown(
        renderer=PageRenderer(),
        plugins=plugins,
    )
