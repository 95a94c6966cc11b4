# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Tern."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal, Sequence

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tern.exceptions import ConfigError
from tern.logger import logger
from tern.probe import DEFAULT_PROBE_TIMEOUT
from tern.shell import Shell
from tern.spec.catalog import Catalog


def find_tern_config() -> Path | None:
    candidates = [
        Path.cwd() / "tern.yaml",
        Path.cwd() / "tern.toml",
        Path.cwd() / ".tern.yaml",
        Path.cwd() / ".tern.toml",
        Path(os.environ.get("TERN_CONFIG", "tern.yaml")),
        Path.home() / ".config" / "tern" / "tern.yaml",
        Path.home() / ".config" / "tern" / "tern.toml",
        Path.home() / ".tern.yaml",
        Path.home() / ".tern.toml",
    ]
    return next((p for p in candidates if p.is_file()), None)


class TernConfig(BaseModel):
    """Tern configuration model."""

    spec_dirs: list[Path] = Field(default_factory=list)
    include_bundled: bool = True
    shell: Shell = Shell.BASH
    probe_timeout: float = Field(default=DEFAULT_PROBE_TIMEOUT, gt=0)
    log_mode: Literal["cli", "json"] | None = None
    log_filename: str | None = None
    console_log_level: int = logging.WARNING

    @field_validator("spec_dirs", mode="before")
    @classmethod
    def validate_spec_dirs(cls, value: Any) -> Any:
        if isinstance(value, (str, Path)):
            return [value]
        return value

    @field_validator("console_log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            level = logging.getLevelName(value.upper())
            if not isinstance(level, int):
                raise ValueError(f"Unknown log level: {value!r}")
            return level
        return value

    def build_catalog(
        self, base: Path | None = None, extra_dirs: Sequence[Path] = ()
    ) -> Catalog:
        """
        Catalog of bundled grammars, then `spec_dirs`, then `extra_dirs`.

        Relative `spec_dirs` are taken relative to `base`, the directory of the
        config file they came from.
        """
        directories = []
        for directory in self.spec_dirs:
            directory = directory.expanduser()
            if base and not directory.is_absolute():
                directory = base / directory
            directories.append(directory)
        directories.extend(extra_dirs)
        return Catalog.from_directories(
            directories, include_bundled=self.include_bundled
        )


def load_config(file_path: Path | str) -> TernConfig:
    """
    Load Tern configuration from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        TernConfig: The validated configuration.

    Raises:
        ConfigError: If the file is missing, in an unsupported format, or invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise ConfigError(f"No such config file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise ConfigError(f"Could not parse config {path}: {error}") from error

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping.\n"
            "Example:\n"
            "shell: zsh\n"
            "spec_dirs:\n"
            "  - ~/.config/tern/specs"
        )

    try:
        config = TernConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid config {path}:\n{error}") from error
    logger.debug("Loaded config from %s.", path)
    return config
