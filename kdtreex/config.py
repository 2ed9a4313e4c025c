from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

_LOGGER = logging.getLogger("kdtreex")

_SUPPORTED_PRECISION = {"float32", "float64"}
_SUPPORTED_TRAVERSALS = {"recursive", "stack"}
_DEFAULT_PRECISION = "float64"
_DEFAULT_TRAVERSAL = "recursive"
_DEFAULT_LOG_LEVEL = "INFO"


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _normalise_precision(value: str | None) -> str:
    if value is None:
        return _DEFAULT_PRECISION
    value = value.strip().lower()
    if value not in _SUPPORTED_PRECISION:
        raise ValueError(f"Unsupported precision '{value}'. Expected one of {_SUPPORTED_PRECISION}.")
    return value


def _normalise_traversal(value: str | None) -> str:
    if value is None:
        return _DEFAULT_TRAVERSAL
    traversal = value.strip().lower()
    if traversal not in _SUPPORTED_TRAVERSALS:
        raise ValueError(
            f"Unsupported traversal '{traversal}'. Expected one of {_SUPPORTED_TRAVERSALS}."
        )
    return traversal


def _normalise_log_level(value: str | None) -> str:
    if value is None or value.strip() == "":
        return _DEFAULT_LOG_LEVEL
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unsupported log level '{value}'.")
    return level


@dataclass(frozen=True)
class RuntimeConfig:
    precision: str = _DEFAULT_PRECISION
    traversal: str = _DEFAULT_TRAVERSAL
    enable_diagnostics: bool = True
    log_level: str = _DEFAULT_LOG_LEVEL
    validate_on_build: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "precision", _normalise_precision(self.precision))
        object.__setattr__(self, "traversal", _normalise_traversal(self.traversal))
        object.__setattr__(self, "log_level", _normalise_log_level(self.log_level))

    @property
    def dtype(self) -> str:
        return self.precision

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        return cls(
            precision=_normalise_precision(os.getenv("KDTREEX_PRECISION")),
            traversal=_normalise_traversal(os.getenv("KDTREEX_TRAVERSAL")),
            enable_diagnostics=_bool_from_env(
                os.getenv("KDTREEX_ENABLE_DIAGNOSTICS"), default=True
            ),
            log_level=_normalise_log_level(os.getenv("KDTREEX_LOG_LEVEL")),
            validate_on_build=_bool_from_env(
                os.getenv("KDTREEX_VALIDATE_ON_BUILD"), default=False
            ),
        )


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("kdtreex")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)


_CONFIG_CACHE: Optional[RuntimeConfig] = None


def runtime_config() -> RuntimeConfig:
    """Return the cached runtime configuration, reading the environment once."""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        config = RuntimeConfig.from_env()
        _configure_logging(config.log_level)
        _CONFIG_CACHE = config
    return _CONFIG_CACHE


def configure_runtime(config: RuntimeConfig) -> RuntimeConfig:
    """Force the active runtime to use ``config`` instead of env defaults."""

    global _CONFIG_CACHE
    _configure_logging(config.log_level)
    _CONFIG_CACHE = config
    _LOGGER.debug("runtime configured: %s", config)
    return config


def reset_runtime_config_cache() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def describe_runtime() -> Dict[str, Any]:
    """Return a serialisable view of the active runtime configuration."""

    config = runtime_config()
    return {
        "precision": config.precision,
        "traversal": config.traversal,
        "enable_diagnostics": config.enable_diagnostics,
        "log_level": config.log_level,
        "validate_on_build": config.validate_on_build,
    }


__all__ = [
    "RuntimeConfig",
    "runtime_config",
    "configure_runtime",
    "reset_runtime_config_cache",
    "describe_runtime",
]
