"""Config manager — load JSON (optional) → apply env overrides → validate."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from mathrush.core.models.config import MathRushConfig

_log = logging.getLogger(__name__)

CONFIG_FILE_ENV = "MATHRUSH_CONFIG_FILE"

# Environment variable → ``(section, field, type)``.
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "MATHRUSH_LOG_LEVEL": ("system", "log_level", str),
    "MATHRUSH_WEBUI_PORT": ("system", "webui_port", int),
    "MATHRUSH_STORAGE_PATH": ("system", "storage_path", str),
    "MATHRUSH_ROUND_SECONDS": ("game", "round_seconds", int),
}


def load_config(config_path: Path | str | None = None) -> MathRushConfig:
    """Load, override, and validate the game configuration.

    Args:
        config_path: Path to a JSON config file.  When *None*, falls back to
            the ``MATHRUSH_CONFIG_FILE`` env-var, and then to built-in
            defaults (no file is required).

    Returns:
        A fully-validated :class:`MathRushConfig` instance.

    Raises:
        FileNotFoundError: If an explicitly named config file does not exist.
        pydantic.ValidationError: If the merged values are invalid.
    """
    path = _resolve_config_path(config_path)
    raw: dict[str, Any]
    if path is None:
        _log.info("No config file given — using built-in defaults")
        raw = {}
    else:
        _log.info("Loading config from %s", path)
        raw = json.loads(path.read_text(encoding="utf-8"))

    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            raw.setdefault(section, {})[field] = typ(env_val)
            _log.debug("Env override: %s → %s.%s = %r", env_key, section, field, env_val)

    return MathRushConfig(**raw)


def _resolve_config_path(config_path: Path | str | None) -> Path | None:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get(CONFIG_FILE_ENV)
        if not env:
            return None
        p = Path(env)
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            f"Create it or unset {CONFIG_FILE_ENV} to run with defaults."
        )
    return p
