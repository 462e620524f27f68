"""
Configuration for passcheck.

Settings are plain dataclasses populated from environment variables (with an
optional ``.env`` file) through ``EnvironmentLoader``. Password policies
themselves are not environment settings; they are built by the surrounding
system and passed to the validator as ``PasswordPolicy`` values.

Environment variables:
- PASSCHECK_ENVIRONMENT: dev | test | staging | prod
- PASSCHECK_LOG_LEVEL / PASSCHECK_LOG_FORMAT
- PASSCHECK_EXTERNAL_RULE_URL: external rule service endpoint (unset disables it)
- PASSCHECK_EXTERNAL_RULE_HALT_ON_ERROR: true | false
- PASSCHECK_EXTERNAL_RULE_TIMEOUT: seconds
- PASSCHECK_SHARED_HISTORY_ENABLED: true | false
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any

from passcheck.core.enums import Environment, LogFormat, LogLevel
from passcheck.core.errors import ConfigurationError

ENV_PREFIX = "PASSCHECK_"

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off", ""}


def parse_boolean(value: Any, key: str) -> bool:
    """Coerce a config value to bool, raising ConfigurationError on garbage."""
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {key}: {value!r}", config_key=key)


def parse_integer(value: Any, key: str) -> int:
    """Coerce a config value to int, raising ConfigurationError on garbage."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid integer for {key}: {value!r}", config_key=key)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip() or "0")
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid integer for {key}: {value!r}", config_key=key
        ) from e


def parse_list(value: Any, key: str) -> list[str]:
    """Coerce a config value to a list of strings (newline separated when text)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [line.strip() for line in value.splitlines() if line.strip()]
    if isinstance(value, list | tuple | set | frozenset):
        return [str(item) for item in value]
    raise ConfigurationError(f"Invalid list for {key}: {value!r}", config_key=key)


class EnvironmentLoader:
    """
    Environment variable loader with type conversion and validation.

    Values already present in the process environment win over values from
    the optional environment file. Only prefixed keys are taken from the
    file; the rest of it belongs to other programs.
    """

    def __init__(self, env_file: str | None = ".env", prefix: str = ENV_PREFIX):
        self.env_file = env_file
        self.prefix = prefix
        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load environment variables from file if it exists."""
        if self.env_file is None or not os.path.exists(self.env_file):
            return

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()

                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()

                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    if key.startswith(self.prefix) and key not in os.environ:
                        os.environ[key] = value

        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

    def _raw(self, key: str) -> str | None:
        return os.environ.get(f"{self.prefix}{key}")

    def get_string(self, key: str, default: str | None = None) -> str | None:
        """Get string value from environment."""
        value = self._raw(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def get_integer(self, key: str, default: int) -> int:
        """Get integer value from environment."""
        value = self._raw(key)
        if value is None:
            return default
        return parse_integer(value, f"{self.prefix}{key}")

    def get_float(self, key: str, default: float) -> float:
        """Get float value from environment."""
        value = self._raw(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid float for {self.prefix}{key}: {value!r}",
                config_key=f"{self.prefix}{key}",
            ) from e

    def get_boolean(self, key: str, default: bool) -> bool:
        """Get boolean value from environment."""
        value = self._raw(key)
        if value is None:
            return default
        return parse_boolean(value, f"{self.prefix}{key}")

    def get_enum(self, key: str, enum_class: type[Enum], default: Enum) -> Enum:
        """Get enum value from environment, matching on value or member name."""
        value = self._raw(key)
        if value is None:
            return default
        for member in enum_class:
            if str(member.value).lower() == value.lower() or member.name.lower() == value.lower():
                return member
        raise ConfigurationError(
            f"Invalid value for {self.prefix}{key}: {value!r}",
            config_key=f"{self.prefix}{key}",
        )

    def get_list(self, key: str, default: list[str] | None = None) -> list[str]:
        """Get comma separated list value from environment."""
        value = self._raw(key)
        if value is None:
            return list(default or [])
        return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ExternalRuleConfig:
    """External rule service callout configuration."""

    url: str | None = None
    halt_on_error: bool = False
    timeout_seconds: float = 10.0
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                "External rule timeout must be positive",
                config_key="external_rule.timeout_seconds",
            )
        if self.url and not self.url.lower().startswith(("http://", "https://")):
            raise ConfigurationError(
                f"External rule URL must be http(s): {self.url}",
                config_key="external_rule.url",
            )

    @property
    def enabled(self) -> bool:
        """An endpoint is configured."""
        return bool(self.url)


@dataclass
class ValidatorSettings:
    """Validator-wide switches that are not part of a password policy."""

    shared_history_enabled: bool = False
    external_rule: ExternalRuleConfig = field(default_factory=ExternalRuleConfig)
    # Attribute names exposed to the external rule service in userInfo
    public_user_attributes: list[str] = field(default_factory=list)
    directory_error_map: dict[str, str] = field(default_factory=dict)


@dataclass
class Settings:
    """Top level settings."""

    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat = LogFormat.JSON
    validator: ValidatorSettings = field(default_factory=ValidatorSettings)

    @classmethod
    def from_environment(cls, env_file: str | None = ".env") -> "Settings":
        """Build settings from environment variables; ``env_file=None`` skips the file."""
        loader = EnvironmentLoader(env_file)

        external_rule = ExternalRuleConfig(
            url=loader.get_string("EXTERNAL_RULE_URL"),
            halt_on_error=loader.get_boolean("EXTERNAL_RULE_HALT_ON_ERROR", False),
            timeout_seconds=loader.get_float("EXTERNAL_RULE_TIMEOUT", 10.0),
        )

        return cls(
            environment=loader.get_enum("ENVIRONMENT", Environment, Environment.DEVELOPMENT),
            log_level=loader.get_enum("LOG_LEVEL", LogLevel, LogLevel.INFO),
            log_format=loader.get_enum("LOG_FORMAT", LogFormat, LogFormat.JSON),
            validator=ValidatorSettings(
                shared_history_enabled=loader.get_boolean("SHARED_HISTORY_ENABLED", False),
                external_rule=external_rule,
                public_user_attributes=loader.get_list("PUBLIC_USER_ATTRIBUTES"),
            ),
        )


@lru_cache
def get_settings(env_file: str = ".env") -> Settings:
    """Get cached settings instance."""
    return Settings.from_environment(env_file)
