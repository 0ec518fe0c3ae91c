"""
Staging assets into the output tree and building the tags that reference them.
"""

import base64
import html
import json
import logging
import mimetypes
import os
import posixpath
import re
import shutil

import csscompressor
import rjsmin

from .layout import OutputLayout
from .resolver import read_required, resolve_path

logger = logging.getLogger('Brochure.assets')

SCRIPT_SRC_RE = re.compile(r'<script\b[^>]*\bsrc="([^"]+)"[^>]*>\s*</script>', re.IGNORECASE)
IMG_SRC_RE = re.compile(r'(<img\b[^>]*?\bsrc=")([^"]+)(")', re.IGNORECASE)
EXTERNAL_URL_RE = re.compile(r'^(?:[a-z][a-z0-9+.-]*:|//|#)', re.IGNORECASE)


def web_path(dest, ctx):
    """Strip the staging root from dest and prefix the web root, with '/' separators."""
    relative = dest[len(ctx.local.root):].replace('\\', '/')
    return posixpath.normpath(ctx.web.root + '/' + relative)


def copy_to_dest(destination_folder, source, ctx):
    """
    Copy source into destination_folder and return its web path.

    >>> copy_to_dest('/site/pub/img', '/project/img/logo.png', ctx)
    'pub/img/logo.png'
    """
    folder = OutputLayout.ensure(os.path.normpath(os.path.abspath(destination_folder)))
    dest = os.path.join(folder, os.path.basename(source))
    if os.path.normpath(os.path.abspath(source)) != dest:
        shutil.copyfile(source, dest)
        logger.debug(f"Staged {source} -> {dest}")
    return web_path(dest, ctx)


def write_to_dest(destination, data, ctx):
    """Write generated text to destination and return its web path."""
    dest = os.path.normpath(os.path.abspath(destination))
    OutputLayout.ensure(os.path.dirname(dest))
    with open(dest, 'w', encoding='utf-8') as f:
        f.write(data)
    logger.debug(f"Wrote {dest}")
    return web_path(dest, ctx)


def data_uri(path, ctx):
    """Read path and return it as a base64 data URI."""
    mime_type = mimetypes.guess_type(path)[0] or 'image/png'
    content = read_required(path, ctx, binary=True)
    return f"data:{mime_type};base64," + base64.b64encode(content).decode('ascii')


def language_array(language_tabs):
    """
    Flatten language tab descriptors into an attribute-safe JSON array.

    Each entry is either a bare name or a single-key mapping of name to
    display label; the name is what ends up in the array.
    """
    result = []
    for lang in language_tabs or []:
        if isinstance(lang, dict):
            result.append(next(iter(lang), ''))
        else:
            result.append(lang)
    return json.dumps(result, separators=(',', ':'), ensure_ascii=False).replace('"', '&quot;')


class AssetTags:
    """Tag builders handed to the page layout, bound to one RenderContext."""

    def __init__(self, ctx):
        self.ctx = ctx

    def _image_source(self, source_path):
        if self.ctx.inline:
            return data_uri(source_path, self.ctx)
        return copy_to_dest(self.ctx.local.img, source_path, self.ctx)

    def image_tag(self, image, alt_text='', class_name=''):
        """<img> for a logical image name, or '' if it can't be found."""
        image_source = resolve_path(image, self.ctx)
        if not image_source:
            return ''
        try:
            src = self._image_source(image_source)
        except (IOError, OSError) as e:
            logger.error(f"Failed to stage image {image_source}: {e}")
            return ''
        return (f'<img src="{src}" class="{html.escape(class_name or "")}" '
                f'alt="{html.escape(alt_text or "")}">')

    def logo_image_tag(self):
        """The site logo, linked to logo-url when one is configured."""
        if not self.ctx.logo:
            return self.image_tag('logo.png', 'Logo', 'logo')
        image_source = resolve_path(self.ctx.logo, self.ctx)
        if not image_source:
            return ''
        try:
            src = self._image_source(image_source)
        except (IOError, OSError) as e:
            logger.error(f"Failed to stage logo {image_source}: {e}")
            return ''
        tag = f'<img src="{src}" class="logo" alt="Logo">'
        if self.ctx.logo_url:
            tag = f'<a href="{html.escape(self.ctx.logo_url)}">{tag}</a>'
        return tag

    def _stylesheet_paths(self, stylesheet):
        paths = []
        style_path = resolve_path(stylesheet + '.css', self.ctx)
        if style_path:
            paths.append(style_path)
        if stylesheet in ('print', 'screen'):
            if self.ctx.custom_css:
                override = resolve_path(stylesheet + '_overrides.css', self.ctx)
                if override:
                    paths.append(override)
            if self.ctx.css:
                global_css = resolve_path(self.ctx.css, self.ctx)
                if global_css:
                    paths.append(global_css)
        return paths

    def stylesheet_link_tag(self, stylesheet, media='screen'):
        """<link> (or inline <style>) tags for a stylesheet and its overrides."""
        tags = []
        for sheet_path in self._stylesheet_paths(stylesheet):
            try:
                if self.ctx.inline:
                    content = read_required(sheet_path, self.ctx)
                    content = content.replace('../../source/', self.ctx.web.root + '/')
                    if self.ctx.minify:
                        content = csscompressor.compress(content)
                    tags.append(f'<style media="{media}">{content}</style>')
                    continue
                if self.ctx.minify:
                    content = csscompressor.compress(read_required(sheet_path, self.ctx))
                    href = write_to_dest(os.path.join(self.ctx.local.css, os.path.basename(sheet_path)),
                                         content, self.ctx)
                else:
                    href = copy_to_dest(self.ctx.local.css, sheet_path, self.ctx)
                tags.append(f'<link rel="stylesheet" media="{media}" href="{href}">')
            except (IOError, OSError) as e:
                logger.error(f"Failed to stage stylesheet {sheet_path}: {e}")
        return '\n'.join(tags)

    def _script_source(self, src):
        """Map a script src from an .inc file back to a file on disk."""
        prefix = self.ctx.web.js + '/'
        name = src[len(prefix):] if src.startswith(prefix) else src
        return name, resolve_path(name, self.ctx)

    def javascript_include_tag(self, include):
        """
        Script tags listed in ``<include>.inc``.

        ``|PATH|`` in the manifest stands for the web js folder. Local scripts
        are staged next to the page; with minify they are bundled into a single
        minified script instead (embedded when inlining).
        """
        js_path = resolve_path(include + '.inc', self.ctx)
        if not js_path:
            return ''
        include_str = read_required(js_path, self.ctx).replace('|PATH|', self.ctx.web.js)

        external = []
        local = []
        for src in SCRIPT_SRC_RE.findall(include_str):
            if EXTERNAL_URL_RE.match(src):
                external.append(src)
                continue
            name, source = self._script_source(src)
            if source:
                local.append((name, source))

        if not self.ctx.minify:
            for name, source in local:
                folder = os.path.join(self.ctx.local.js, os.path.dirname(name))
                try:
                    copy_to_dest(folder, source, self.ctx)
                except (IOError, OSError) as e:
                    logger.error(f"Failed to stage script {source}: {e}")
            return include_str

        bundle = ';\n'.join(rjsmin.jsmin(read_required(source, self.ctx)) for _, source in local)
        tags = [f'<script src="{src}"></script>' for src in external]
        if self.ctx.inline:
            tags.append(f'<script>{bundle}</script>')
        else:
            bundle_path = os.path.join(self.ctx.local.js, include + '.bundle.js')
            tags.append(f'<script src="{write_to_dest(bundle_path, bundle, self.ctx)}"></script>')
        return '\n'.join(tags)

    def _publishable(self, path):
        """True if path lies inside the project source, the built-in theme or the theme styles."""
        if self.ctx.unsafe:
            return True
        real = os.path.realpath(path)
        for root in (self.ctx.src.root, self.ctx.internal_source.root, self.ctx.theme_styles_dir):
            root = os.path.realpath(root)
            try:
                if os.path.commonpath([real, root]) == root:
                    return True
            except ValueError:
                # Different drives
                continue
        return False

    def localize_images(self, content):
        """
        Point <img> tags in rendered content at staged (or inlined) copies.

        Only files from the project source tree or the theme are published;
        other sources are left as written unless the render is unsafe.
        """
        def _replace(match):
            src = match.group(2)
            if EXTERNAL_URL_RE.match(src):
                return match.group(0)
            image_source = resolve_path(html.unescape(src), self.ctx, initial_dir=self.ctx.src.root)
            if not image_source:
                return match.group(0)
            if not self._publishable(image_source):
                logger.warning(f"Not publishing {image_source}: outside the source tree")
                return match.group(0)
            try:
                new_src = self._image_source(image_source)
            except (IOError, OSError) as e:
                logger.error(f"Failed to stage image {image_source}: {e}")
                return match.group(0)
            return match.group(1) + new_src + match.group(3)

        return IMG_SRC_RE.sub(_replace, content)
