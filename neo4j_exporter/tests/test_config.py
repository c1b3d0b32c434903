"""Unit tests for neo4j_exporter/config.py."""

from neo4j_exporter.config import (
    DEFAULT_TEMP_ID_PROPERTY,
    Settings,
    _expand_env_vars,
    get_settings,
    load_settings,
    reload_settings,
)


class TestExpandEnvVars:
    """Tests for ${VAR} expansion."""

    def test_set_variable(self, monkeypatch):
        monkeypatch.setenv("NEO4J_URI", "bolt://graph:7687")
        assert _expand_env_vars("uri: ${NEO4J_URI}") == "uri: bolt://graph:7687"

    def test_default_used(self, monkeypatch):
        monkeypatch.delenv("EXPORTER_MISSING", raising=False)
        assert _expand_env_vars("x: ${EXPORTER_MISSING:-fallback}") == "x: fallback"

    def test_missing_without_default(self, monkeypatch):
        monkeypatch.delenv("EXPORTER_MISSING", raising=False)
        assert _expand_env_vars("x: ${EXPORTER_MISSING}") == "x: "


class TestSettings:
    """Tests for settings loading."""

    def test_from_dict_defaults(self):
        settings = Settings.from_dict({})

        assert settings.uri == "bolt://localhost:7687"
        assert settings.database == "neo4j"
        assert settings.temp_id_property == DEFAULT_TEMP_ID_PROPERTY

    def test_from_dict_values(self):
        settings = Settings.from_dict({
            "neo4j": {"uri": "bolt://x:1", "user": "u", "password": 1234},
            "export": {"temp_id_property": "_exportId"},
        })

        assert settings.uri == "bolt://x:1"
        assert settings.user == "u"
        assert settings.password == "1234"
        assert settings.temp_id_property == "_exportId"

    def test_load_from_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXPORTER_TEMP_ID", "_fromEnv")
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "neo4j:\n"
            "  database: ${EXPORTER_DB:-archive}\n"
            "export:\n"
            "  temp_id_property: ${EXPORTER_TEMP_ID}\n"
        )

        settings = load_settings(config_file)

        assert settings.database == "archive"
        assert settings.temp_id_property == "_fromEnv"

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_settings(tmp_path / "absent.yaml") == Settings()

    def test_packaged_config_and_reload(self, monkeypatch):
        assert get_settings().temp_id_property == "_tempID"

        monkeypatch.setenv("EXPORTER_TEMP_ID", "_other")
        assert get_settings().temp_id_property == "_tempID"
        assert reload_settings().temp_id_property == "_other"
