"""Tests for settings loading."""

import logging

import pytest

from yapmesh import config
from yapmesh.config import MeshSettings, clear_cache, load_settings
from yapmesh.topology import EditableMesh

# captured before the autouse fixture replaces it
_REAL_USER_CONFIG_PATH = config.user_config_path


def _write(path, text):
    path.write_text(text, encoding='utf-8')
    return path


class TestMeshSettings:

    def test_defaults(self):
        settings = MeshSettings()
        assert settings.validate_edits is False
        assert settings.free_edge_winding == 'two_one'
        assert settings.normal_epsilon == 1e-12
        assert settings.log_level == 'INFO'

    def test_bad_winding(self):
        with pytest.raises(ValueError):
            MeshSettings(free_edge_winding='clockwise')

    def test_negative_epsilon(self):
        with pytest.raises(ValueError):
            MeshSettings(normal_epsilon=-1.0)

    @pytest.mark.parametrize('level', ['LOUD', '', 10])
    def test_bad_log_level(self, level):
        with pytest.raises(ValueError):
            MeshSettings(log_level=level)

    def test_log_level_names(self):
        assert MeshSettings(log_level='debug').log_level == 'debug'
        assert MeshSettings(log_level='ERROR').log_level == 'ERROR'

    def test_frozen(self):
        settings = MeshSettings()
        with pytest.raises(AttributeError):
            settings.validate_edits = True


class TestLoadSettings:

    def test_no_file_gives_defaults(self):
        assert load_settings() == MeshSettings()

    def test_explicit_path(self, tmp_path):
        path = _write(tmp_path / 'settings.yaml',
                      'validate_edits: true\nfree_edge_winding: one_two\nnormal_epsilon: 1\n')
        settings = load_settings(path)
        assert settings.validate_edits is True
        assert settings.free_edge_winding == 'one_two'
        assert settings.normal_epsilon == 1.0

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / 'absent.yaml')

    def test_environment_variable(self, tmp_path, monkeypatch):
        path = _write(tmp_path / 'env.yaml', 'validate_edits: true\n')
        monkeypatch.setenv(config.YAPMESH_CONFIG, str(path))
        clear_cache()
        assert load_settings().validate_edits is True
        assert EditableMesh().settings.validate_edits is True

    def test_environment_variable_missing_file(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv(config.YAPMESH_CONFIG, str(tmp_path / 'gone.yaml'))
        clear_cache()
        with caplog.at_level(logging.WARNING, logger='yapmesh.config'):
            settings = load_settings()
        assert settings == MeshSettings()
        assert 'missing file' in caplog.text

    def test_user_config_file(self, tmp_path, monkeypatch):
        path = _write(tmp_path / 'user.yaml', 'log_level: DEBUG\n')
        monkeypatch.setattr(config, 'user_config_path', lambda: path)
        clear_cache()
        assert load_settings().log_level == 'DEBUG'

    def test_cache_until_cleared(self, tmp_path, monkeypatch):
        path = _write(tmp_path / 'env.yaml', 'validate_edits: true\n')
        monkeypatch.setenv(config.YAPMESH_CONFIG, str(path))
        clear_cache()
        first = load_settings()
        _write(path, 'validate_edits: false\n')
        assert load_settings() is first
        clear_cache()
        assert load_settings().validate_edits is False

    def test_empty_file(self, tmp_path):
        path = _write(tmp_path / 'empty.yaml', '')
        assert load_settings(path) == MeshSettings()

    def test_non_mapping_root(self, tmp_path):
        path = _write(tmp_path / 'list.yaml', '- 1\n- 2\n')
        with pytest.raises(ValueError):
            load_settings(path)

    def test_unknown_key_warns(self, tmp_path, caplog):
        path = _write(tmp_path / 'extra.yaml', 'colour: blue\n')
        with caplog.at_level(logging.WARNING, logger='yapmesh.config'):
            settings = load_settings(path)
        assert settings == MeshSettings()
        assert 'colour' in caplog.text

    @pytest.mark.parametrize('text', [
        'validate_edits: 1\n',
        'normal_epsilon: tiny\n',
        'normal_epsilon: true\n',
        'free_edge_winding: 3\n',
    ])
    def test_wrong_types(self, tmp_path, text):
        path = _write(tmp_path / 'bad.yaml', text)
        with pytest.raises(ValueError):
            load_settings(path)

    def test_user_config_path_location(self):
        path = _REAL_USER_CONFIG_PATH()
        assert path.parts[-2:] == ('yapmesh', 'config.yaml')
