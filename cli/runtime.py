from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from kdtreex import config as kx_config


def _get_arg(source: Any, name: str, default: Any = None) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, default)
    return getattr(source, name, default)


_ARG_TO_FIELD = {
    "precision": "precision",
    "traversal": "traversal",
    "diagnostics": "enable_diagnostics",
    "log_level": "log_level",
    "validate": "validate_on_build",
}


def runtime_from_args(args: Any) -> kx_config.RuntimeConfig:
    """Layer explicit CLI arguments over the environment-derived runtime config."""

    overrides: dict[str, Any] = {}
    for arg_name, field_name in _ARG_TO_FIELD.items():
        value = _get_arg(args, arg_name)
        if value is not None:
            overrides[field_name] = value
    base = kx_config.RuntimeConfig.from_env()
    return replace(base, **overrides) if overrides else base


__all__ = ["runtime_from_args"]
