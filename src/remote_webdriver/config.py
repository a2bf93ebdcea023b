"""Configuration for connecting to a remote automation server."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Where to find the remote server and which browser to ask for."""

    model_config = SettingsConfigDict(
        env_prefix="REMOTE_WEBDRIVER_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    url: str = Field(default="http://127.0.0.1:4444/wd/hub")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"browserName": "chrome"})
    timeout: Optional[float] = Field(
        default=60.0,
        description="HTTP timeout (in seconds) applied to every command.",
    )


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> ClientConfig:
    """Load configuration from an optional YAML file and overrides."""

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    if overrides:
        _deep_update(data, overrides)
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    # file and override values are layered over env and defaults by the merge below
    config = ClientConfig(**settings_kwargs)
    if not data:
        return config

    merged = config.model_dump(mode="python")
    _deep_update(merged, data)
    return ClientConfig.model_validate(merged)


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively merge ``updates`` into ``target`` in-place."""

    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(existing := target.get(key), Mapping):
            nested = existing if isinstance(existing, dict) else dict(existing)
            _deep_update(nested, value)
            target[key] = nested
        else:
            target[key] = value
