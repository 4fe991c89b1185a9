"""Loading of the OAuth client configuration file."""

import json
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from yt_playlist.exceptions import ConfigError
from yt_playlist.logger import config_logger
from yt_playlist.schemas.config import PlaylistConfig

REQUIRED_FIELDS = ("clientId", "clientSecret", "redirectUrl")


def _read_source(source: str | Path | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source

    path = Path(source)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object.")

    return data


def load_config(source: str | Path | Mapping[str, Any]) -> PlaylistConfig:
    """
    Load and validate the client configuration.

    Args:
        source: Path to a JSON config file, or an already parsed mapping

    Returns:
        Validated, immutable config

    Raises:
        ConfigError: If the source is unreadable or a required entry is missing
    """
    try:
        data = _read_source(source)

        for field in REQUIRED_FIELDS:
            if not data.get(field):
                raise ConfigError(f"Missing {field} from config.")

        try:
            return PlaylistConfig.model_validate(data)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise ConfigError(f"Invalid config: {details}") from e

    except ConfigError as e:
        config_logger.error(str(e))
        raise
