"""Configuration files for TradeJournal.

All files live in ``~/.config/tradejournal`` unless the
``TRADEJOURNAL_HOME`` environment variable points elsewhere:

- config.toml: backend selection and credentials
- journal.db: local SQLite journal
- settings_cache.toml: mirror of the last loaded user settings
- session.toml: hosted backend session tokens
"""

import os
from pathlib import Path
from typing import Optional

import toml

CONFIG_FILE = "config.toml"
DB_FILE = "journal.db"
SETTINGS_CACHE_FILE = "settings_cache.toml"
SESSION_FILE = "session.toml"


class ConfigError(Exception):
    """Raised when the configuration file exists but cannot be read."""

    pass


def get_config_dir() -> Path:
    """Get the configuration directory."""
    override = os.environ.get("TRADEJOURNAL_HOME")
    if override:
        return Path(override)
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE


def load_config() -> Optional[dict]:
    """Load the configuration file.

    Returns:
        Config dict, or None if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e


def create_template_config(backend: str = "local") -> Path:
    """Create a template configuration file.

    Args:
        backend: Initial backend kind (``local`` or ``supabase``).

    Returns:
        Path of the written file.
    """
    config_dir = get_config_dir()
    config_path = config_dir / CONFIG_FILE

    config_dir.mkdir(parents=True, exist_ok=True)

    template = {
        "backend": {
            "kind": backend,  # local or supabase
        },
        "local": {
            "db_path": "",  # Leave empty for <config dir>/journal.db
            "user_id": "local",
        },
        "supabase": {
            "url": "",  # Leave empty to use SUPABASE_URL env var
            "key": "",  # Leave empty to use SUPABASE_KEY env var
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path


def backend_kind(config: Optional[dict]) -> str:
    """Get the configured backend, defaulting to local."""
    return (config or {}).get("backend", {}).get("kind", "local")


def local_db_path(config: Optional[dict]) -> Path:
    """Get the SQLite database path."""
    db_path = (config or {}).get("local", {}).get("db_path")
    if db_path:
        return Path(db_path).expanduser()
    return get_config_dir() / DB_FILE


def local_user_id(config: Optional[dict]) -> str:
    return (config or {}).get("local", {}).get("user_id") or "local"


def supabase_credentials(config: Optional[dict]) -> tuple[str, str]:
    """Get Supabase URL and key, falling back to environment variables."""
    section = (config or {}).get("supabase", {})
    url = section.get("url") or os.environ.get("SUPABASE_URL", "")
    key = section.get("key") or os.environ.get("SUPABASE_KEY", "")
    return url, key


def _read_toml(path: Path) -> Optional[dict]:
    if not path.exists():
        return None
    try:
        return toml.load(path)
    except (OSError, toml.TomlDecodeError):
        return None


def _write_toml(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(data, f)


def load_session() -> Optional[dict]:
    """Load saved hosted-backend session tokens."""
    return _read_toml(get_config_dir() / SESSION_FILE)


def save_session(session: dict) -> None:
    _write_toml(get_config_dir() / SESSION_FILE, session)


def clear_session() -> bool:
    """Delete the saved session.

    Returns:
        True if a session file was removed.
    """
    path = get_config_dir() / SESSION_FILE
    if path.exists():
        path.unlink()
        return True
    return False


def load_cached_settings() -> Optional[dict]:
    """Load the settings mirror, or None if absent."""
    return _read_toml(get_config_dir() / SETTINGS_CACHE_FILE)


def save_cached_settings(settings: dict) -> None:
    # toml cannot store None, so unset values are left out
    _write_toml(
        get_config_dir() / SETTINGS_CACHE_FILE,
        {k: v for k, v in settings.items() if v is not None},
    )
