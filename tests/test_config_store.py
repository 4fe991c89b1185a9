import json
from pathlib import Path

import pytest

from yt_playlist.exceptions import ConfigError
from yt_playlist.services.config_store import load_config


def write_config(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_config_from_file(tmp_path: Path) -> None:
    path = write_config(
        tmp_path / "yph_config.json",
        {
            "clientId": "id",
            "clientSecret": "secret",
            "redirectUrl": "https://example.com/auth",
            "playlistId": "PL123",
        },
    )

    config = load_config(path)

    assert config.client_id == "id"
    assert config.client_secret == "secret"
    assert config.redirect_url == "https://example.com/auth"
    assert config.default_playlist_id == "PL123"


def test_playlist_id_is_optional() -> None:
    config = load_config(
        {
            "clientId": "id",
            "clientSecret": "secret",
            "redirectUrl": "https://example.com/auth",
        }
    )

    assert config.default_playlist_id is None


@pytest.mark.parametrize("missing", ["clientId", "clientSecret", "redirectUrl"])
def test_missing_required_entry_fails(missing: str) -> None:
    data = {
        "clientId": "id",
        "clientSecret": "secret",
        "redirectUrl": "https://example.com/auth",
    }
    del data[missing]

    with pytest.raises(ConfigError, match=f"Missing {missing} from config."):
        load_config(data)


def test_empty_required_entry_fails() -> None:
    with pytest.raises(ConfigError, match="Missing clientSecret"):
        load_config(
            {
                "clientId": "id",
                "clientSecret": "",
                "redirectUrl": "https://example.com/auth",
            }
        )


def test_relative_redirect_url_fails() -> None:
    with pytest.raises(ConfigError, match="redirectUrl"):
        load_config(
            {"clientId": "id", "clientSecret": "secret", "redirectUrl": "/auth"}
        )


def test_missing_file_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.json")


def test_invalid_json_fails(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{ not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="not valid JSON"):
        load_config(path)
