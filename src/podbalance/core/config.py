"""
config.py
- Defines global configuration values derived from environment variables.
- Configures the shared loguru sink used by every module.
- Merges the optional YAML rebalance config over the built-in defaults.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from podbalance.core.config_loader import load_yaml
from podbalance.core.constants import (
    DEFAULT_ADJUSTMENT_THRESHOLD,
    DEFAULT_TARGET_ADJUSTMENT,
    DEFAULT_EVICTION_DELAY_SECONDS,
    DEFAULT_OWNER_KINDS,
    DEFAULT_LIST_PAGE_SIZE,
)

# --- Runtime Behavior Flags ---
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
DRY_RUN = os.getenv("DRY_RUN", "false").lower() == "true"

# --- Config Paths ---
REBALANCE_CONFIG_PATH = os.getenv("REBALANCE_CONFIG", "/etc/podbalance/rebalance_config.yml")

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(debug=DEBUG, sink=None):
    """Replace loguru's default handler with the project sink (stdout by default)."""
    sink = sink or sys.stdout
    logger.remove()
    logger.add(
        sink,
        level="DEBUG" if debug else "INFO",
        format=LOG_FORMAT,
        colorize=sink is sys.stdout and sys.stdout.isatty(),
    )


def default_kubeconfig_path():
    """
    Resolve the kubeconfig path the same way kubectl does:
    $KUBECONFIG first, then ~/.kube/config. Returns None when neither is usable.
    """
    custom = os.getenv("KUBECONFIG")
    if custom:
        return custom
    try:
        return str(Path.home() / ".kube" / "config")
    except RuntimeError:
        return None


def _section(data, name):
    value = data.get(name) or {}
    if not isinstance(value, dict):
        logger.warning(f"[config] Expected a mapping for {name!r}, got {type(value).__name__}; using defaults")
        return {}
    return value


def _coerce(section, key, cast, default):
    """Read `section[key]` through `cast`, logging and falling back to `default` on bad values."""
    value = section.get(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning(f"[config] Invalid value for {key!r}: {value!r}, using default {default!r}")
        return default


def _owner_kinds(value):
    if value is None:
        return DEFAULT_OWNER_KINDS
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and value and all(isinstance(kind, str) for kind in value):
        return tuple(value)
    logger.warning(f"[config] Invalid value for 'owner_kinds': {value!r}, using default {DEFAULT_OWNER_KINDS!r}")
    return DEFAULT_OWNER_KINDS


@dataclass(frozen=True)
class RebalanceSettings:
    adjustment_threshold: int = DEFAULT_ADJUSTMENT_THRESHOLD
    target_adjustment: int = DEFAULT_TARGET_ADJUSTMENT
    eviction_delay_seconds: float = DEFAULT_EVICTION_DELAY_SECONDS
    owner_kinds: tuple = DEFAULT_OWNER_KINDS
    list_page_size: int = DEFAULT_LIST_PAGE_SIZE

    @classmethod
    def from_dict(cls, data):
        """
        Build settings from a parsed YAML mapping. Unknown keys are ignored and
        missing sections fall back to defaults.

        Expected layout:
            target:
              adjustment_threshold: 5
              adjustment: 5
            eviction:
              delay_seconds: 1
              owner_kinds: [ReplicaSet]
            inventory:
              page_size: 500
        """
        data = data or {}
        target = _section(data, "target")
        eviction = _section(data, "eviction")
        inventory = _section(data, "inventory")

        return cls(
            adjustment_threshold=_coerce(target, "adjustment_threshold", int, DEFAULT_ADJUSTMENT_THRESHOLD),
            target_adjustment=_coerce(target, "adjustment", int, DEFAULT_TARGET_ADJUSTMENT),
            eviction_delay_seconds=_coerce(eviction, "delay_seconds", float, DEFAULT_EVICTION_DELAY_SECONDS),
            owner_kinds=_owner_kinds(eviction.get("owner_kinds")),
            list_page_size=_coerce(inventory, "page_size", int, DEFAULT_LIST_PAGE_SIZE),
        )


def load_settings(path=REBALANCE_CONFIG_PATH):
    """Load rebalance settings from YAML, falling back to defaults when absent."""
    if not Path(path).exists():
        logger.debug(f"[config] No config file at {path}, using defaults")
        return RebalanceSettings()
    settings = RebalanceSettings.from_dict(load_yaml(path))
    logger.debug(f"[config] Loaded settings from {path}: {settings}")
    return settings
