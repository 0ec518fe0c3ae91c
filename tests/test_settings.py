"""Tests for configuration file loading."""

import json
import os
from pathlib import Path

import pytest

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from brochure_pkg.settings import BrochureSettings


class TestBrochureSettings:
    """Test cases for BrochureSettings."""

    def test_defaults_without_config(self, temp_dir):
        loader = BrochureSettings(temp_dir)
        settings = loader.load_settings()

        assert settings == BrochureSettings.DEFAULT_SETTINGS
        assert loader.config_file_path is None

    def test_yaml_config(self, temp_dir):
        Path(temp_dir, 'brochure.yml').write_text('inline: true\nlogo: brand.png\nwebRoot: site\n')
        settings = BrochureSettings(temp_dir).load_settings()

        assert settings['inline'] is True
        assert settings['logo'] == 'brand.png'
        assert settings['webRoot'] == 'site'
        assert settings['minify'] is False

    def test_json_config(self, temp_dir):
        Path(temp_dir, 'brochure.json').write_text(json.dumps({'customCss': True, 'logo-url': 'https://x.test'}))
        settings = BrochureSettings(temp_dir).load_settings()

        assert settings['customCss'] is True
        assert settings['logo-url'] == 'https://x.test'

    def test_yml_preferred_over_json(self, temp_dir):
        Path(temp_dir, 'brochure.yml').write_text('logo: from-yml.png\n')
        Path(temp_dir, 'brochure.json').write_text('{"logo": "from-json.png"}')
        loader = BrochureSettings(temp_dir)

        assert loader.load_settings()['logo'] == 'from-yml.png'
        assert loader.config_file_path.endswith('brochure.yml')

    def test_invalid_yaml(self, temp_dir):
        Path(temp_dir, 'brochure.yml').write_text('logo: [broken\n')
        with pytest.raises(ValueError, match='Invalid YAML'):
            BrochureSettings(temp_dir).load_settings()

    def test_invalid_json(self, temp_dir):
        Path(temp_dir, 'brochure.json').write_text('{not json')
        with pytest.raises(ValueError, match='Invalid JSON'):
            BrochureSettings(temp_dir).load_settings()

    def test_non_mapping(self, temp_dir):
        Path(temp_dir, 'brochure.yml').write_text('- a\n- b\n')
        with pytest.raises(ValueError, match='mapping'):
            BrochureSettings(temp_dir).load_settings()

    def test_args_take_precedence(self, temp_dir):
        Path(temp_dir, 'brochure.yml').write_text('logo: brand.png\ninline: true\ncss: extra.css\n')
        loader = BrochureSettings(temp_dir)
        loader.load_settings()

        merged = loader.merge_with_args({'logo': 'cli.png', 'inline': False, 'css': None, 'attr': True})

        assert merged['logo'] == 'cli.png'
        assert merged['inline'] is True
        assert merged['css'] == 'extra.css'
        assert merged['attr'] is True

    def test_defaults_used_from_cwd(self, isolated_cwd):
        Path(isolated_cwd, 'brochure.yaml').write_text('minify: true\n')
        assert BrochureSettings().load_settings()['minify'] is True
