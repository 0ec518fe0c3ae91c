"""
Allow-list HTML filtering for authored Markdown.

The filter runs on the Markdown source, before it is rendered, so a few
Markdown constructs that look like markup have to be shielded from it.
"""

import html
import logging
import re

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

logger = logging.getLogger('Brochure.sanitizer')

DEFAULT_ALLOWED_TAGS = [
    'h3', 'h4', 'h5', 'h6', 'blockquote', 'p', 'a', 'ul', 'ol', 'nl', 'li',
    'b', 'i', 'strong', 'em', 'strike', 'abbr', 'code', 'hr', 'br', 'div',
    'table', 'thead', 'caption', 'tbody', 'tr', 'th', 'td', 'pre', 'iframe',
]

ALLOWED_TAGS = frozenset(DEFAULT_ALLOWED_TAGS + [
    'h1', 'h2', 'img', 'aside', 'article', 'details', 'summary', 'abbr', 'meta', 'link',
])

ALLOWED_ATTRIBUTES = {
    'a': ('href', 'id', 'name', 'target', 'class'),
    'img': ('src', 'alt', 'class'),
    'aside': ('class',),
    'abbr': ('title', 'class'),
    'details': ('open', 'class'),
    'div': ('class',),
    'meta': ('name', 'content'),
    'link': ('rel', 'href', 'type', 'sizes'),
    'h1': ('id',), 'h2': ('id',), 'h3': ('id',),
    'h4': ('id',), 'h5': ('id',), 'h6': ('id',),
}

ALLOWED_SCHEMES = frozenset(['http', 'https', 'ftp', 'mailto'])
URL_ATTRIBUTES = frozenset(['href', 'src'])

# Removed together with everything inside them
NON_TEXT_TAGS = ['script', 'style', 'textarea', 'option', 'noscript']

SCHEME_RE = re.compile(r'^([a-zA-Z][a-zA-Z0-9+.-]*):')
CONTROL_RE = re.compile(r'[\x00-\x20]+')

# A complete fenced code block: an opening fence at the start of a line and a
# matching closing fence. Backtick fences carry no backticks in the info string.
FENCED_BLOCK_RE = re.compile(
    r'^ {0,3}(?P<fence>`{3,}(?=[^`\n]*\n)|~{3,})[^\n]*\n.*?^ {0,3}(?P=fence)[ \t]*$',
    re.MULTILINE | re.DOTALL)

AMP_TOKEN = '$4$'

# Markdown that an HTML filter would eat, and the tokens that stand in for it.
# Ampersands are shielded so entities written by the author stay entities.
SHIELDS = (
    ('\n>', '\n$1$'),
    ('>=', '$2$'),
    ('<=', '$3$'),
    ('&', AMP_TOKEN),
)

# An escaped "<" that a browser could not read as the start of a tag
BARE_LT_RE = re.compile(r'&lt;(?![A-Za-z/!?])')


def _url_allowed(value):
    # Entities in the value are still shielded at this point
    value = html.unescape(value.replace(AMP_TOKEN, '&'))
    match = SCHEME_RE.match(CONTROL_RE.sub('', value))
    if not match:
        # Relative and protocol-relative URLs
        return True
    return match.group(1).lower() in ALLOWED_SCHEMES


def filter_html(fragment):
    """Strip everything not on the allow-list from an HTML fragment."""
    if not fragment:
        return ''
    soup = BeautifulSoup(fragment, 'html.parser')

    for node in soup.find_all(string=lambda s: isinstance(s, (Comment, Declaration, Doctype, ProcessingInstruction))):
        node.extract()

    for tag in soup.find_all(NON_TEXT_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        allowed = ALLOWED_ATTRIBUTES.get(tag.name, ())
        for attr in list(tag.attrs):
            value = tag.attrs[attr]
            if attr not in allowed:
                del tag.attrs[attr]
            elif attr in URL_ATTRIBUTES and isinstance(value, str) and not _url_allowed(value):
                logger.debug(f"Dropped {attr}={value!r} from <{tag.name}>")
                del tag.attrs[attr]

    return str(soup)


def clean(s, ctx):
    """
    Sanitize authored content unless the render is marked unsafe.

    Complete fenced code blocks are left alone; everything around them is
    filtered. Blockquote markers, the ``>=`` / ``<=`` operators and entities
    written by the author survive unchanged.
    """
    if not s:
        return ''
    if ctx.unsafe:
        return s

    for original, token in SHIELDS:
        s = s.replace(original, token)

    pieces = []
    last = 0
    for match in FENCED_BLOCK_RE.finditer(s):
        pieces.append(filter_html(s[last:match.start()]))
        pieces.append(match.group(0))
        last = match.end()
    pieces.append(filter_html(s[last:]))
    s = ''.join(pieces)

    # Undo the escaping the filter added to bare comparison signs in text
    s = s.replace('&gt;', '>')
    s = BARE_LT_RE.sub('<', s)
    for original, token in SHIELDS:
        s = s.replace(token, original)
    return s
