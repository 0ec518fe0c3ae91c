"""Test configuration and fixtures for Brochure tests."""

import pytest
import tempfile
import shutil
import os
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from brochure_pkg.context import RenderContext

# A minimal PNG image (1x1 pixel)
PNG_DATA = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00\x90wS\xde\x00\x00\x00\tpHYs\x00\x00\x0b\x13\x00\x00\x0b\x13\x01\x00\x9a\x9c\x18\x00\x00\x00\nIDATx\x9cc\xf8\x00\x00\x00\x01\x00\x01\x00\x00\x00\x00IEND\xaeB`\x82'


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_cwd(temp_dir, monkeypatch):
    """Run every test from an empty working directory so cwd lookups find nothing."""
    work_dir = Path(temp_dir) / 'work'
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    return str(work_dir)


@pytest.fixture
def sample_image_data():
    """Sample image data for testing."""
    return PNG_DATA


@pytest.fixture
def project_dir(temp_dir):
    """Create a project source tree with includes and assets."""
    project = Path(temp_dir) / 'project'
    for child in ('css', 'fonts', 'img', 'js', 'includes'):
        (project / child).mkdir(parents=True)

    (project / 'img' / 'diagram.png').write_bytes(PNG_DATA)
    (project / 'css' / 'screen_overrides.css').write_text('.content { color: red; }\n')
    (project / 'includes' / '_intro.md').write_text('## Intro\n\nWelcome <script>alert(1)</script>aboard.\n')
    (project / 'chapter.md').write_text('## Chapter\n\nChapter text.\n')

    return str(project)


@pytest.fixture
def web_root(temp_dir):
    """Staging directory named like the default web root."""
    return str(Path(temp_dir) / 'site' / 'pub')


@pytest.fixture
def make_ctx(project_dir, web_root):
    """Factory for RenderContexts pointed at the test project."""
    def _make(**options):
        opts = {'source': project_dir, 'webRoot': web_root}
        opts.update(options)
        return RenderContext.from_options(opts)
    return _make


@pytest.fixture
def ctx(make_ctx):
    """A default, linking (non-inline) context."""
    return make_ctx()
