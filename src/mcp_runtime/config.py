"""Server configuration loader.

Loads server settings from a YAML file. Every setting has a default, so
a configuration file only needs to name what it changes.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_MAX_MESSAGE_SIZE = 1_048_576
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "mcp-line-runtime/0.1.0"


class ConfigLoadError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


def expand_env_vars(value: str) -> str:
    """Expand ${VAR_NAME} references in a string.

    Unknown variables are left unchanged, except HOME which falls back to
    the user's home directory.

    Args:
        value: String potentially containing environment variable references.

    Returns:
        String with known environment variables expanded.
    """
    pattern = re.compile(r"\$\{([^}]+)\}")

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if var_name == "HOME":
            return os.path.expanduser("~")
        return match.group(0)

    return pattern.sub(replacer, value)


@dataclass
class ServerConfig:
    """Runtime configuration for a server process."""

    version: str = "1.0"

    # Server identity
    server_name: str = "mcp-line-runtime"
    server_version: str = "0.1.0"

    # Protocol settings
    max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE
    validate_arguments: bool = False

    # Audit settings
    audit_log_file: str = ""

    # HTTP settings shared by plugins that make network calls
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    http_user_agent: str = DEFAULT_USER_AGENT

    # Plugins to register at startup
    plugins: list[str] = field(default_factory=list)

    @classmethod
    def default(cls) -> ServerConfig:
        """Return the built-in defaults."""
        return cls()

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ServerConfig:
        """Create a ServerConfig from a configuration dictionary.

        Args:
            config: Dictionary parsed from YAML configuration.

        Returns:
            ServerConfig with defaults filled in for missing settings.

        Raises:
            ConfigLoadError: If a section has the wrong shape.
        """
        server = _section(config, "server")
        protocol = _section(config, "protocol")
        audit = _section(config, "audit")
        http = _section(config, "http")

        plugins = config.get("plugins") or []
        if not isinstance(plugins, list):
            raise ConfigLoadError("'plugins' must be a list of plugin names")

        return cls(
            version=str(config.get("version", "")),
            server_name=str(server.get("name", cls.server_name)),
            server_version=str(server.get("version", cls.server_version)),
            max_message_size=int(protocol.get("max_message_size", DEFAULT_MAX_MESSAGE_SIZE)),
            validate_arguments=bool(protocol.get("validate_arguments", False)),
            audit_log_file=expand_env_vars(audit.get("log_file", "") or ""),
            http_timeout=float(http.get("timeout", DEFAULT_HTTP_TIMEOUT)),
            http_user_agent=str(http.get("user_agent", DEFAULT_USER_AGENT)),
            plugins=[str(name) for name in plugins],
        )


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigLoadError(f"'{name}' section must be a mapping")
    return section


def load_config(path: Path) -> ServerConfig:
    """Load server configuration from a YAML file.

    Args:
        path: Path to the configuration YAML file.

    Returns:
        ServerConfig instance.

    Raises:
        ConfigLoadError: If the file cannot be found, parsed, or validated.
    """
    if not path.exists():
        raise ConfigLoadError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Failed to parse config YAML: {e}") from e

    if not isinstance(config, dict):
        raise ConfigLoadError("Config must be a YAML mapping")

    if "version" not in config:
        raise ConfigLoadError("Config must include 'version' field")

    try:
        return ServerConfig.from_dict(config)
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(f"Invalid config value: {e}") from e
