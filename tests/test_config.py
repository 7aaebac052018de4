"""Tests for configuration loading."""

import json

import pytest
import yaml

from gotophoto.config import GotoPhotoConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("GOTOPHOTO_CONFIG", raising=False)
    monkeypatch.delenv("GOTOPHOTO_DEBUG", raising=False)


class TestGotoPhotoConfig:
    """Test GotoPhotoConfig functionality."""

    def test_defaults(self):
        config = GotoPhotoConfig()
        assert config.gotophoto_backend is None
        assert config.page_size == 1000
        assert config.debug is False

    def test_from_dict_flat_keys(self):
        config = GotoPhotoConfig.from_dict({
            "gotophoto_backend": "mysql",
            "cloudsql_database_name": "photos",
            "cloudsql_port": "3307",
            "page_size": "50",
        })
        assert config.gotophoto_backend == "mysql"
        assert config.cloudsql_database_name == "photos"
        assert config.cloudsql_port == 3307
        assert config.page_size == 50

    def test_from_dict_ignores_unknown_keys(self):
        config = GotoPhotoConfig.from_dict({"gotophoto_backend": "sqlite", "colour": "blue"})
        assert config.gotophoto_backend == "sqlite"
        assert not hasattr(config, "colour")

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text(yaml.dump({"gotophoto_backend": "postgres", "debug": True}))
        config = GotoPhotoConfig.load(str(path))
        assert config.gotophoto_backend == "postgres"
        assert config.debug is True

    def test_load_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"gotophoto_backend": "mongodb", "mongo_database": "gp"}))
        config = GotoPhotoConfig.load(str(path))
        assert config.mongo_database == "gp"

    def test_load_empty_yaml(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("")
        assert GotoPhotoConfig.load(str(path)).gotophoto_backend is None

    def test_load_from_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yml"
        path.write_text("gotophoto_backend: datastore\ngoogle_project_id: proj\n")
        monkeypatch.setenv("GOTOPHOTO_CONFIG", str(path))
        config = GotoPhotoConfig.load()
        assert config.gotophoto_backend == "datastore"
        assert config.google_project_id == "proj"

    def test_search_path(self, tmp_path, monkeypatch):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "settings.yml").write_text("gotophoto_backend: sqlite\n")
        monkeypatch.chdir(tmp_path)
        assert GotoPhotoConfig.load().gotophoto_backend == "sqlite"

    def test_no_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert GotoPhotoConfig.load().gotophoto_backend is None

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("no", False)])
    def test_debug_env_override(self, tmp_path, monkeypatch, value, expected):
        path = tmp_path / "settings.yml"
        path.write_text("debug: false\n" if expected else "debug: true\n")
        monkeypatch.setenv("GOTOPHOTO_DEBUG", value)
        assert GotoPhotoConfig.load(str(path)).debug is expected

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            GotoPhotoConfig.load("/nonexistent/settings.yml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("x = 1")
        with pytest.raises(ValueError):
            GotoPhotoConfig.load(str(path))

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "out.yaml"
        GotoPhotoConfig(gotophoto_backend="sqlite", page_size=10).save(str(path))
        loaded = GotoPhotoConfig.load(str(path))
        assert loaded.gotophoto_backend == "sqlite"
        assert loaded.page_size == 10
