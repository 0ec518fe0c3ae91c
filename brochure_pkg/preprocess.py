"""
Front matter splitting and include expansion.
"""

import logging
import os

import yaml

from .errors import CircularIncludeError, FrontMatterError
from .resolver import read_required

logger = logging.getLogger('Brochure.preprocess')

ASCIIDOC_PREFIX = 'include::'
ASCIIDOC_SUFFIX = '[]'
MARKDOWN_PP_PREFIX = '!INCLUDE '


def normalize_newlines(text):
    return text.replace('\r\n', '\n').replace('\r', '')


def split_front_matter(input_str):
    """
    Split a document into (metadata, body).

    The front matter is the block between the first two lines consisting of
    ``---``. A document without one has empty metadata and is all body, and
    so is one whose header parses to something other than a mapping.
    Invalid YAML raises FrontMatterError.
    """
    text = normalize_newlines(input_str or '')
    separator = '\n---\n'
    parts = ('\n' + text).split(separator)
    if len(parts) == 1:
        separator = '\n--- \n'
        parts = ('\n' + text).split(separator)
    if len(parts) < 3:
        return {}, text

    header_str = parts[1]
    # A later '---' is a horizontal rule in the body
    body = separator.join(parts[2:])
    try:
        metadata = yaml.safe_load(header_str)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front matter: {e}") from e
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        # Usually a setext heading or a horizontal rule, not front matter
        logger.warning(f"Ignoring front matter that is not a mapping ({type(metadata).__name__})")
        return {}, text
    return metadata, body


def include_target(line):
    """Return the file named by an include directive line, or ''."""
    if line.startswith(ASCIIDOC_PREFIX) and line.endswith(ASCIIDOC_SUFFIX):
        return line[len(ASCIIDOC_PREFIX):-len(ASCIIDOC_SUFFIX)].strip()
    if line.startswith(MARKDOWN_PP_PREFIX):
        return line[len(MARKDOWN_PP_PREFIX):].strip()
    return ''


def _expand_lines(lines, ctx, stack):
    expanded = []
    for line in lines:
        filename = include_target(line)
        if not filename:
            expanded.append(line)
            continue
        target = os.path.normpath(os.path.join(ctx.src.root, filename))
        if target in stack:
            raise CircularIncludeError(list(stack) + [target])
        logger.debug(f"Including {target}")
        included = read_required(target, ctx)
        if not included:
            continue
        expanded.extend(_expand_lines(normalize_newlines(included).split('\n'), ctx, stack + (target,)))
    return expanded


def expand_includes(content, ctx):
    """
    Replace include directive lines with the lines of the files they name.

    Both ``include::file.md[]`` and ``!INCLUDE file.md`` are recognised, relative
    to the project source root. Included files may include others; including
    a file that is already being expanded raises CircularIncludeError.
    """
    lines = normalize_newlines(content or '').split('\n')
    return '\n'.join(_expand_lines(lines, ctx, ()))
