"""Configuration loading and validation."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gcsbackup.errors import ConfigError

DEFAULT_BATCH_SIZE = 20
DEFAULT_TIMEOUT = 50.0


class GoogleCloudConfig(BaseModel):
    """Destination bucket and the service account used to reach it."""

    model_config = ConfigDict(populate_by_name=True)

    name_bucket: str = Field(alias="nameBucket", min_length=1)
    path_json_key: Path = Field(alias="pathJsonKey")

    @field_validator("path_json_key", mode="before")
    @classmethod
    def expand_path(cls, v: str) -> Path:
        """Expand environment variables and ~ in path."""
        expanded = os.path.expandvars(os.path.expanduser(str(v)))
        return Path(expanded)


class UploadConfig(BaseModel):
    """Upload engine tuning."""

    model_config = ConfigDict(populate_by_name=True)

    batch_size: int = Field(DEFAULT_BATCH_SIZE, alias="batchSize", ge=1)
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)


class BackupConfig(BaseModel):
    """Top-level configuration file."""

    model_config = ConfigDict(populate_by_name=True)

    directories: list[str] = Field(min_length=1)
    google_cloud: GoogleCloudConfig = Field(alias="googleCloud")
    upload: UploadConfig = Field(default_factory=UploadConfig)


def check_file(path: Path, label: str = "File") -> None:
    """Raise ConfigError unless ``path`` is an existing, non-empty file."""
    if not path.is_file():
        raise ConfigError(f'{label} "{path}" not found')

    if path.stat().st_size == 0:
        raise ConfigError(f'{label} "{path}" is empty')


def load_config(config_path: Path) -> BackupConfig:
    """
    Load and validate the backup configuration.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated BackupConfig

    Raises:
        ConfigError: If the file or the credential file it points to is
            missing or empty, or if the content does not validate
    """
    config_path = Path(config_path)
    check_file(config_path)

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Reading file configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f'File "{config_path}" does not contain a mapping')

    try:
        config = BackupConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Parsing configuration: {e}") from e

    check_file(config.google_cloud.path_json_key, label="File pathJsonKey")

    return config
