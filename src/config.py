"""Configuration Management with Pydantic.

This module implements the settings model for the topological sort tool. An
optional YAML file named by the ``TOPOSORT_CONFIG`` environment variable is
parsed first and individual ``TOPOSORT_*`` environment variables override it.
Settings only affect diagnostics and text encoding, never sort results.
"""

import codecs
import os
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = structlog.get_logger(__name__)

CONFIG_PATH_ENV = "TOPOSORT_CONFIG"
TRUTHY_VALUES = ("true", "1", "yes")


class ConfigurationError(ValueError):
    """Exception raised when a configuration file or override is invalid."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the configuration problem
        """
        super().__init__(message)
        self.message = message


class TopoSortConfig(BaseModel):
    """Settings for the topological sort command.

    Attributes:
        logging_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render log events as JSON instead of console text
        encoding: Text encoding used for the input and output files
    """

    logging_level: str = Field(
        default="WARNING",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding of input and output files",
        min_length=1,
    )

    model_config = {"str_strip_whitespace": True}

    @field_validator("logging_level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Upper-case the logging level before pattern validation.

        Args:
            v: The raw level value

        Returns:
            The level, upper-cased when it is a string
        """
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is known to Python.

        Args:
            v: The encoding name to validate

        Returns:
            The validated encoding name

        Raises:
            ValueError: If the codec does not exist
        """
        try:
            codecs.lookup(v)
        except LookupError as e:
            msg = f"Unknown encoding: {v}"
            raise ValueError(msg) from e
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TopoSortConfig":
        """Load configuration from a YAML file and apply env overrides.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed and validated TopoSortConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ConfigurationError: If the YAML or its values are invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ConfigurationError(msg) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ConfigurationError(msg)

        return cls.from_mapping(config_data)

    @classmethod
    def from_mapping(cls, config_data: dict) -> "TopoSortConfig":
        """Build configuration from a mapping with env overrides applied.

        Args:
            config_data: Base configuration values

        Returns:
            Validated TopoSortConfig instance

        Raises:
            ConfigurationError: If any value is invalid
        """
        config_data = cls._apply_env_overrides(dict(config_data))

        try:
            config = cls(**config_data)
        except ValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

        logger.debug(
            "configuration_loaded",
            logging_level=config.logging_level,
            json_logs=config.json_logs,
            encoding=config.encoding,
        )

        return config

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply environment variable overrides to configuration.

        Environment variables follow the pattern: TOPOSORT_<KEY>
        Example: TOPOSORT_LOGGING_LEVEL, TOPOSORT_JSON_LOGS

        Args:
            config_data: Base configuration dictionary

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            "logging_level": "TOPOSORT_LOGGING_LEVEL",
            "json_logs": "TOPOSORT_JSON_LOGS",
            "encoding": "TOPOSORT_ENCODING",
        }

        for key, env_var in env_overrides.items():
            value = os.environ.get(env_var)
            if value is None:
                continue

            if key == "json_logs":
                config_data[key] = value.strip().lower() in TRUTHY_VALUES
            else:
                config_data[key] = value

            logger.debug("env_override_applied", env_var=env_var, config_key=key)

        return config_data


def load_config() -> TopoSortConfig:
    """Load configuration from ``TOPOSORT_CONFIG`` and the environment.

    Returns:
        TopoSortConfig built from the optional YAML file and env overrides

    Raises:
        FileNotFoundError: If ``TOPOSORT_CONFIG`` names a missing file
        ConfigurationError: If any value is invalid
    """
    config_path = os.environ.get(CONFIG_PATH_ENV)
    if config_path:
        return TopoSortConfig.from_yaml(config_path)
    return TopoSortConfig.from_mapping({})


__all__ = [
    "ConfigurationError",
    "TopoSortConfig",
    "load_config",
]
