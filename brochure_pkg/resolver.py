"""
Finding asset files and reading required text files.
"""

import logging
import os

from .errors import MissingFileError

logger = logging.getLogger('Brochure.resolver')

SEARCH_FOLDERS = ('root', 'img', 'js', 'css', 'fonts')


def try_paths(filename, paths):
    """Return the first path in paths that contains filename, or None."""
    for this_path in paths:
        candidate = os.path.join(this_path, filename)
        if os.path.isfile(candidate):
            return os.path.normpath(candidate)
    return None


def candidate_dirs(filename, ctx):
    """
    Directories searched for filename, in priority order.

    The project source tree comes before the built-in theme. Within each, the
    folder matching the file's extension is tried first, then the root and
    every child folder. The highlighter styles directory is always last.
    """
    dirs = []
    for layout in (ctx.src, ctx.internal_source):
        typed = layout.folder_name_for_file(filename)
        if typed:
            dirs.append(getattr(layout, typed))
        for folder in SEARCH_FOLDERS:
            dirs.append(getattr(layout, folder))
    dirs.append(ctx.theme_styles_dir)

    # Keep the first occurrence of each directory
    seen = set()
    ordered = []
    for d in dirs:
        if d not in seen:
            seen.add(d)
            ordered.append(d)
    return ordered


def resolve_path(filename, ctx, initial_dir=None):
    """
    Find filename on disk.

    Returns the absolute path of the first match, or None after logging a
    warning. Never raises for a missing file.
    """
    if not filename:
        return None

    if initial_dir:
        candidate = os.path.join(initial_dir, filename)
        if os.path.isfile(candidate):
            return os.path.normpath(os.path.abspath(candidate))

    if os.path.isabs(filename) and os.path.isfile(filename):
        return os.path.normpath(filename)

    from_cwd = os.path.abspath(filename)
    if os.path.isfile(from_cwd):
        return from_cwd

    found = try_paths(filename, candidate_dirs(filename, ctx))
    if found:
        return os.path.abspath(found)

    logger.warning(f"Could not find {filename}!")
    return None


def read_required(filename, ctx, binary=False):
    """
    Read a file whose content is spliced into the page.

    A missing or unreadable file is an error in strict (CLI) mode and empty
    content otherwise.
    """
    mode = 'rb' if binary else 'r'
    encoding = None if binary else 'utf-8'
    try:
        with open(filename, mode, encoding=encoding) as f:
            return f.read()
    except (IOError, OSError) as e:
        logger.error(f"Included file {filename} not found")
        if ctx.cli:
            raise MissingFileError(filename, getattr(e, 'strerror', None)) from e
    return b'' if binary else ''
