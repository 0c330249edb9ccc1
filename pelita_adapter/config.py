"""Adapter settings resolved from overrides, environment and config.toml."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


ENV_LOCK_TIMEOUT = "PELITA_ADAPTER_LOCK_TIMEOUT"
ENV_CHECK_LEGAL_MOVES = "PELITA_ADAPTER_CHECK_LEGAL_MOVES"
ENV_LOG_LEVEL = "PELITA_ADAPTER_LOG_LEVEL"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AdapterConfig:
    lock_timeout: Optional[float] = None
    check_legal_moves: bool = True
    log_level: str = "WARNING"


def _load_config_table(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    try:
        config = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"{path} is not valid TOML: {exc}") from exc

    table = config.get("adapter", {})
    return table if isinstance(table, dict) else {}


def _parse_timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        if value.strip().lower() in {"", "none"}:
            return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"lock_timeout must be a number, got {value!r}") from None
    if timeout <= 0:
        raise ValueError(f"lock_timeout must be positive, got {timeout}")
    return timeout


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def load_config(config_path: Optional[str] = None, **overrides: Any) -> AdapterConfig:
    table = _load_config_table(Path(config_path or "config.toml"))
    defaults = AdapterConfig()

    def resolve(name: str, env_name: str) -> Any:
        if overrides.get(name) is not None:
            return overrides[name]
        if env_name in os.environ:
            return os.environ[env_name]
        return table.get(name, getattr(defaults, name))

    log_level = str(resolve("log_level", ENV_LOG_LEVEL)).upper()
    return AdapterConfig(
        lock_timeout=_parse_timeout(resolve("lock_timeout", ENV_LOCK_TIMEOUT)),
        check_legal_moves=_parse_bool(resolve("check_legal_moves", ENV_CHECK_LEGAL_MOVES)),
        log_level=log_level,
    )
