"""Configuration management for FreeFlow.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from freeflow.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from freeflow.core.exceptions import ConfigurationError

# Default paths (defined once, used by both Config and load_config)
DEFAULT_LOG_PATH = Path.home() / ".freeflow" / "logs"
DEFAULT_VARIANT = "decay"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        log_path: Directory for log files
        variant: Name of the dive variant to run
        debug: Enable debug logging
        time_scale: Real-time speed multiplier (2.0 = dive runs twice as fast)
    """

    log_path: Path = field(default_factory=lambda: DEFAULT_LOG_PATH)
    variant: str = DEFAULT_VARIANT
    debug: bool = False
    time_scale: float = 1.0


def load_env_file(path: Path) -> dict[str, str]:
    """Parse .env file.

    Handles:
        - KEY=VALUE format
        - Comments (lines starting with #)
        - Blank lines
        - Quoted values

    Args:
        path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not path.exists():
        return env_vars

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()

                if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    env_vars[key] = value

    return env_vars


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    """Get path from environment, expanding ~ and resolving."""
    value = os.environ.get(key) or env_vars.get(key)
    if value:
        return Path(value).expanduser().resolve()
    return default


def _get_str(key: str, default: str, env_vars: dict[str, str]) -> str:
    """Get string from environment."""
    return os.environ.get(key) or env_vars.get(key) or default


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    """Get boolean from environment."""
    value = os.environ.get(key) or env_vars.get(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _get_float(key: str, default: float, env_vars: dict[str, str]) -> float:
    """Get float from environment.

    Raises:
        ConfigurationError: If the value is not a number
    """
    value = os.environ.get(key) or env_vars.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(env_file)

    return Config(
        log_path=_get_path("FREEFLOW_LOG_PATH", DEFAULT_LOG_PATH, env_vars),
        variant=_get_str("FREEFLOW_VARIANT", DEFAULT_VARIANT, env_vars).lower(),
        debug=_get_bool("FREEFLOW_DEBUG", False, env_vars),
        time_scale=_get_float("FREEFLOW_TIME_SCALE", 1.0, env_vars),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Variant name is registered
        - Log directory exists or can be created, and is writable
        - Time scale is positive

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid)
    """
    from freeflow.engine.variants import VARIANTS

    issues: list[str] = []

    if config.variant not in VARIANTS:
        issues.append(
            f"Unknown variant: {config.variant}. "
            f"Available: {', '.join(sorted(VARIANTS))}"
        )

    try:
        config.log_path.mkdir(parents=True, exist_ok=True)
        if not os.access(config.log_path, os.W_OK):
            issues.append(f"Log directory not writable: {config.log_path}")
    except OSError as e:
        issues.append(f"Cannot create log directory {config.log_path}: {e}")

    if config.time_scale <= 0:
        issues.append(f"Time scale must be positive, got {config.time_scale}")

    return issues


# Singleton config
_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
