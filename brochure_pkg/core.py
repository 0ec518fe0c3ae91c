import os
import logging
import time
from datetime import datetime
from jinja2 import Environment, FileSystemLoader, TemplateError

from .assets import AssetTags, language_array
from .context import PACKAGE_DIR, TEMPLATE_LOCATION, RenderContext
from .errors import TemplateRenderError
from .headings import post_process, toc_data
from .markup import create_markdown_parser
from .preprocess import expand_includes, split_front_matter
from .resolver import read_required
from .sanitizer import clean

LAYOUT_TEMPLATE = 'layout.html'


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages (and anything louder) on the console."""
    def filter(self, record):
        if record.levelno > logging.INFO:
            return True
        allowed_messages = [
            "Rendered page in",
            "Wrote page to",
            "Loaded configuration from:",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(verbose=False, log_dir=None):
    """Set up logging configuration for command-line use."""
    logger = logging.getLogger('Brochure')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        # Console handler with filter
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        if not verbose:
            console_handler.addFilter(InfoFilter())
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

        # File handler for all logs
        logs_dir = log_dir or os.path.join(os.getcwd(), 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_filename = datetime.now().strftime('brochure_%Y-%m-%d_%H-%M-%S.log')
        file_handler = logging.FileHandler(os.path.join(logs_dir, log_filename))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

    return logger


class Renderer:
    """Turns one document body into a finished page for a given RenderContext."""

    def __init__(self, ctx, templates_dir=None):
        self.ctx = ctx
        self.templates_dir = templates_dir or TEMPLATE_LOCATION
        self.logger = logging.getLogger('Brochure')
        self.env = Environment(loader=FileSystemLoader(self.templates_dir))
        self.markdown_parser = create_markdown_parser(ctx)
        self.tags = AssetTags(ctx)

    def markdown_filter(self, text):
        """Convert markdown text to HTML."""
        return self.markdown_parser(text)

    def render_content(self, body):
        """Expand includes, sanitize, render and post-process the document body."""
        content = expand_includes(body, self.ctx)
        content = self.markdown_filter(clean(content, self.ctx))
        content = post_process(content)
        return self.tags.localize_images(content)

    def partial(self, include):
        """Render ``includes/_<include>.md`` from the project source tree."""
        filename = os.path.join(self.ctx.src.root, 'includes', f'_{include}.md')
        content = read_required(filename, self.ctx)
        content = post_process(self.markdown_filter(clean(content, self.ctx)))
        return self.tags.localize_images(content)

    def toc_data(self, content):
        return toc_data(content, self.ctx.heading_level)

    def template_locals(self, page_content):
        """The names every layout can rely on."""
        return {
            'current_page': {'data': self.ctx.front_matter},
            'page_content': page_content,
            'toc_data': self.toc_data,
            'partial': self.partial,
            'image_tag': self.tags.image_tag,
            'logo_image_tag': self.tags.logo_image_tag,
            'stylesheet_link_tag': self.tags.stylesheet_link_tag,
            'javascript_include_tag': self.tags.javascript_include_tag,
            'language_array': language_array,
        }

    def render_page(self, page_content):
        """Merge rendered content into the layout template."""
        try:
            template = self.env.get_template(LAYOUT_TEMPLATE)
            return template.render(**self.template_locals(page_content))
        except TemplateError as e:
            self.logger.error(f"Template error: {e}")
            raise TemplateRenderError(f"Could not render {LAYOUT_TEMPLATE} from {self.templates_dir}: {e}") from e

    def render(self, body):
        start_time = time.time()
        page = self.render_page(self.render_content(body))
        self.logger.info(f"Rendered page in {time.time() - start_time:.6f} seconds.")
        return page


def render(input_str, options=None, templates_dir=None):
    """
    Render a document (YAML front matter + Markdown) to a finished HTML page.

    Assets the page uses are staged under the web root (``options['webRoot']``,
    default ``./pub``) unless ``inline`` is set. Raises FrontMatterError,
    TemplateRenderError and CircularIncludeError, and in strict (``cli``)
    mode MissingFileError.
    """
    ctx = RenderContext.from_options(options)
    front_matter, body = split_front_matter(input_str)
    renderer = Renderer(ctx.with_front_matter(front_matter), templates_dir)
    return renderer.render(body)


def render_file(path, options=None, templates_dir=None):
    """Read path and render it."""
    with open(path, 'r', encoding='utf-8') as f:
        return render(f.read(), options, templates_dir)


def srcDir():
    """Directory of the installed package (its built-in theme lives in source/)."""
    return PACKAGE_DIR
