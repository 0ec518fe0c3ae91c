"""
Brochure - single-page documentation renderer.

Brochure takes one long Markdown document with YAML front matter and turns
it into a themed HTML page using Jinja2 layouts, staging every image, script
and stylesheet the page needs into a css/js/img/fonts tree (or inlining them).
"""

__version__ = "1.0.0"

from .core import Renderer, render, render_file, srcDir
from .context import RenderContext
from .errors import (BrochureError, CircularIncludeError, FrontMatterError,
                     MissingFileError, TemplateRenderError)

__all__ = [
    'Renderer', 'RenderContext', 'render', 'render_file', 'srcDir',
    'BrochureError', 'CircularIncludeError', 'FrontMatterError',
    'MissingFileError', 'TemplateRenderError',
]
