"""
Per-render configuration.

A RenderContext is built once for each call to ``render()`` and handed to
every stage explicitly. Nothing in the pipeline keeps module-level state, so
two renders in the same process cannot see each other's options.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .layout import OutputLayout

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
SOURCE_LOCATION = os.path.join(PACKAGE_DIR, 'source')
TEMPLATE_LOCATION = os.path.join(SOURCE_LOCATION, 'layouts')
THEME_STYLES_LOCATION = os.path.join(SOURCE_LOCATION, 'styles')
LOCAL_WEB_ROOT = 'pub'

# Option keys accepted by render(), with their defaults.
DEFAULT_OPTIONS = {
    'source': None,
    'webRoot': None,
    'inline': False,
    'minify': False,
    'unsafe': False,
    'customCss': False,
    'css': None,
    'logo': None,
    'logo-url': None,
    'attr': False,
    'no-links': False,
    'cli': False,
}


@dataclass(frozen=True)
class RenderContext:
    """Immutable options and directory layouts for one render."""

    internal_source: OutputLayout
    src: OutputLayout
    local: OutputLayout
    web: OutputLayout
    inline: bool = False
    minify: bool = False
    unsafe: bool = False
    custom_css: bool = False
    css: Optional[str] = None
    logo: Optional[str] = None
    logo_url: Optional[str] = None
    attr: bool = False
    no_links: bool = False
    cli: bool = False
    theme_styles_dir: str = THEME_STYLES_LOCATION
    front_matter: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> 'RenderContext':
        """
        Build a context from a render() options mapping.

        Args:
            options: Option keys as listed in DEFAULT_OPTIONS. Unknown keys are ignored.

        Returns:
            A new RenderContext with its on-disk layouts created.
        """
        opts = DEFAULT_OPTIONS.copy()
        opts.update({k: v for k, v in (options or {}).items() if v is not None})

        inline = bool(opts['inline'])
        internal_source = OutputLayout(os.path.abspath(SOURCE_LOCATION), create=False)
        # Where assets are copied from
        src = OutputLayout(os.path.normpath(os.path.abspath(opts['source'] or SOURCE_LOCATION)),
                           create=bool(opts['source']))
        # Where assets are copied to
        local = OutputLayout(os.path.normpath(os.path.abspath(opts['webRoot'] or LOCAL_WEB_ROOT)))
        # Path of the web root as seen from the emitted page
        web = OutputLayout(os.path.basename(local.root))

        return cls(
            internal_source=internal_source,
            src=src,
            local=local,
            web=web,
            inline=inline,
            # Inlined pages always carry a single bundled script
            minify=inline or bool(opts['minify']),
            unsafe=bool(opts['unsafe']),
            custom_css=bool(opts['customCss']),
            css=opts['css'],
            logo=opts['logo'],
            logo_url=opts['logo-url'],
            attr=bool(opts['attr']),
            no_links=bool(opts['no-links']),
            cli=bool(opts['cli']),
        )

    def with_front_matter(self, front_matter: Dict[str, Any]) -> 'RenderContext':
        """Return a copy of this context carrying the page's front matter."""
        return replace(self, front_matter=dict(front_matter or {}))

    @property
    def heading_level(self) -> int:
        try:
            return int(self.front_matter.get('headingLevel', 2))
        except (TypeError, ValueError):
            return 2
