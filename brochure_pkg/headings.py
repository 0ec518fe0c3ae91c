"""
Heading ids and the table of contents.
"""

import html
import re

from bs4 import BeautifulSoup

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']

BARE_HEADING_RE = re.compile(r'<(h[123456])>(.*?)</\1>')
ID_HEADING_RE = re.compile(r'<(h[123456])([^>]*?) id="([^"]*)"')
TAG_RE = re.compile(r'<[^>]+>')
NON_WORD_RE = re.compile(r'\W')


def clean_id(text):
    """GitHub-style anchor: lowercase, every non-word character becomes '-'."""
    return NON_WORD_RE.sub('-', text.lower())


def _title_text(title):
    return html.unescape(TAG_RE.sub('', title))


def post_process(content):
    """Give every heading a normalised id. Safe to run more than once."""
    # Headings the renderer emitted without an id
    content = BARE_HEADING_RE.sub(
        lambda m: f'<{m.group(1)} id="{clean_id(_title_text(m.group(2)))}">{m.group(2)}</{m.group(1)}>',
        content)

    # Ids written by hand or by the attribute syntax
    content = ID_HEADING_RE.sub(
        lambda m: f'<{m.group(1)}{m.group(2)} id="{clean_id(m.group(3))}"',
        content)
    return content


def toc_data(content, heading_level=2):
    """
    Build the table of contents from rendered HTML.

    h1 and h2 are always listed; h3 to h6 only down to ``heading_level``.
    Each heading is attached to the most recent heading one level up; a
    heading with no such parent yet is left out.
    """
    soup = BeautifulSoup(content or '', 'html.parser')
    result = []
    latest = {}

    for tag in soup.find_all(HEADING_TAGS):
        level = int(tag.name[1])
        if level >= 3 and heading_level < level:
            continue

        entry = {'id': tag.get('id'), 'content': tag.get_text()}
        if level < 6:
            entry['children'] = []
            latest[level] = entry

        if level == 1:
            result.append(entry)
        else:
            parent = latest.get(level - 1)
            if parent is not None:
                parent['children'].append(entry)

    return result
