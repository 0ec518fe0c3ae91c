"""
Directory sets used by the renderer.

Every location Brochure reads from or writes to (the built-in theme, the
project source tree, the staging root and the public web root) carries the
same four children: css, fonts, img and js.
"""

import os

CHILD_DIRS = ('css', 'fonts', 'img', 'js')

# Extension -> child directory
EXTENSION_FOLDERS = {
    '.png': 'img', '.jpg': 'img', '.jpeg': 'img', '.gif': 'img',
    '.svg': 'img', '.webp': 'img', '.ico': 'img', '.bmp': 'img',
    '.js': 'js', '.inc': 'js',
    '.css': 'css',
    '.woff': 'fonts', '.woff2': 'fonts', '.ttf': 'fonts', '.otf': 'fonts',
    '.eot': 'fonts',
}


class OutputLayout:
    """A root directory plus its conventional child directories."""

    def __init__(self, root_path, create=True):
        self.root = root_path
        # A bare name such as "pub" is the virtual web root: paths only.
        self.is_real = os.path.dirname(root_path) != ''
        if self.is_real:
            self.root = os.path.normpath(os.path.abspath(root_path))
            if create:
                self._create_child_dirs()

    def __repr__(self):
        return f"OutputLayout({self.root!r})"

    def _create_child_dirs(self):
        for child_dir in CHILD_DIRS:
            self.ensure(getattr(self, child_dir))

    @staticmethod
    def ensure(folder):
        """Create folder (and parents) if needed. Existing folders are fine."""
        os.makedirs(folder, exist_ok=True)
        return folder

    @property
    def css(self):
        return self.root + '/css'

    @property
    def fonts(self):
        return self.root + '/fonts'

    @property
    def img(self):
        return self.root + '/img'

    @property
    def js(self):
        return self.root + '/js'

    def folder_name_for_file(self, filename):
        """Return the child directory name for filename, or None if unknown."""
        ext = os.path.splitext(filename)[1].lower()
        return EXTENSION_FOLDERS.get(ext)

    def folder_for_file(self, filename):
        """Return the directory a file of this type belongs in (root if unknown)."""
        name = self.folder_name_for_file(filename)
        if name is None:
            return self.root
        return getattr(self, name)
