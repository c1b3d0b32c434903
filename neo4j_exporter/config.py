"""Configuration loading for the exporter."""

import logging
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load .env file for credentials
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

log = logging.getLogger(__name__)

_config_path = Path(__file__).parent / "config.yaml"

DEFAULT_TEMP_ID_PROPERTY = "_tempID"


def _expand_env_vars(content: str) -> str:
    """Expand ${VAR} and ${VAR:-default} patterns in config."""
    # Match ${VAR:-default} or ${VAR}
    pattern = r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}"

    def replacer(match):
        var_name = match.group(1)
        default = match.group(2) if match.group(2) is not None else ""
        return os.getenv(var_name, default)

    return re.sub(pattern, replacer, content)


@dataclass(frozen=True)
class Settings:
    """Connection and export settings."""

    uri: str = "bolt://localhost:7687"
    user: str = "neo4j"
    password: str = ""
    database: str = "neo4j"
    temp_id_property: str = DEFAULT_TEMP_ID_PROPERTY

    @classmethod
    def from_dict(cls, raw: dict | None) -> "Settings":
        """Build settings from a parsed config mapping, falling back to defaults."""
        raw = raw or {}
        neo4j_cfg = raw.get("neo4j") or {}
        export_cfg = raw.get("export") or {}
        return cls(
            uri=neo4j_cfg.get("uri") or cls.uri,
            user=neo4j_cfg.get("user") or cls.user,
            password=str(neo4j_cfg.get("password") or cls.password),
            database=neo4j_cfg.get("database") or cls.database,
            temp_id_property=export_cfg.get("temp_id_property") or cls.temp_id_property,
        )


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from a YAML file, expanding environment placeholders."""
    config_path = path or _config_path
    if not config_path.exists():
        log.debug(f"No config file at {config_path}, using defaults")
        return Settings()

    with open(config_path, "r") as f:
        config_content = _expand_env_vars(f.read())
    return Settings.from_dict(yaml.safe_load(config_content))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings."""
    return load_settings()


def reload_settings() -> Settings:
    """Drop cached settings and load them again."""
    get_settings.cache_clear()
    return get_settings()
