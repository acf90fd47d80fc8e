"""RuleSettings — one frozen object for CLI flags, environment and TOML.

Sources, strongest first:

1. keyword arguments (the CLI's global flags)
2. ``HASONEPRODUCT_*`` environment variables, ``__`` for nesting
   (``HASONEPRODUCT_STORE__DEFAULT_STORE_ID=2``)
3. the discovered ``hasoneproduct.toml``
4. defaults on the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from hasoneproduct.config.discovery import find_config
from hasoneproduct.config.models import RoutingConfig, StoreConfig

# pydantic-settings builds its sources inside __init__, so the file chosen
# by from_cli() is handed over through this variable.
_toml_path: ContextVar[Path | None] = ContextVar("hasoneproduct_toml_path", default=None)


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Top-level tables of ``hasoneproduct.toml`` mapped onto settings fields."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = _read_toml(path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class RuleSettings(BaseSettings):
    """Resolved configuration for one CLI invocation.

    Attributes:
        root: Directory holding the ``.hasoneproduct/`` data folder.
            Defaults to the config file's directory, else the cwd.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "HASONEPRODUCT_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    store: StoreConfig = Field(default_factory=StoreConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_path.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> RuleSettings:
        """Resolve settings for a CLI run.

        An explicit *config_path* that does not exist is ignored rather
        than falling back to discovery.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _toml_path.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _toml_path.reset(token)
