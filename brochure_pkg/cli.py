#!/usr/bin/env python3
"""
Command-line interface for Brochure - single-page documentation renderer.
"""

import os
import sys
import argparse
from typing import List, Optional

from . import __version__
from .core import render_file, setup_logging
from .errors import BrochureError
from .settings import BrochureSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='brochure', description='Brochure - Markdown to themed HTML page')
    parser.add_argument('input', type=str,
                        help='Markdown document with YAML front matter')
    parser.add_argument('-o', '--output', type=str,
                        help='HTML file to write (default: index.html in the web root)')
    parser.add_argument('--source', type=str,
                        help='Project source directory holding includes and assets')
    parser.add_argument('--web-root', dest='webRoot', type=str,
                        help='Directory that staged assets are copied to (default: ./pub)')
    parser.add_argument('--layout', type=str,
                        help='Directory containing layout.html')
    parser.add_argument('--inline', action='store_true',
                        help='Embed images, stylesheets and scripts in the page (implies --minify)')
    parser.add_argument('--minify', action='store_true',
                        help='Bundle and minify scripts, minify stylesheets')
    parser.add_argument('--unsafe', action='store_true',
                        help='Do not sanitize the document HTML')
    parser.add_argument('--custom-css', dest='customCss', action='store_true',
                        help='Also include screen_overrides.css / print_overrides.css')
    parser.add_argument('--css', type=str,
                        help='Extra stylesheet added to the screen and print styles')
    parser.add_argument('--logo', type=str,
                        help='Logo image (default: logo.png)')
    parser.add_argument('--logo-url', dest='logo-url', type=str,
                        help='Link target for the logo')
    parser.add_argument('--attr', action='store_true',
                        help='Enable {#id .class} attribute syntax')
    parser.add_argument('--no-links', dest='no-links', action='store_true',
                        help='Do not turn bare URLs into links')
    parser.add_argument('--verbose', action='store_true',
                        help='Log debug output to the console')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(verbose=args.verbose)

    try:
        # Load settings from configuration file
        settings_loader = BrochureSettings()
        settings_loader.load_settings()

        # Command line arguments take precedence
        args_dict = {k: v for k, v in vars(args).items() if k not in ('input', 'verbose')}
        options = settings_loader.merge_with_args(args_dict)
        # Missing required files stop the run instead of rendering a hole
        options['cli'] = True

        html = render_file(args.input, options, templates_dir=options.get('layout'))

        output = options.get('output') or os.path.join(options.get('webRoot') or 'pub', 'index.html')
        os.makedirs(os.path.dirname(os.path.abspath(output)), exist_ok=True)
        with open(output, 'w', encoding='utf-8') as f:
            f.write(html)
        logger.info(f"Wrote page to {output}")

    except (BrochureError, ValueError, OSError) as e:
        logger.error(f"brochure: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
