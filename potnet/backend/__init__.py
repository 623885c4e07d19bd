"""
Read-only discovery backends for the potnet agent.
This package enumerates what lives under the pot filesystem root:
- bridge definitions (`bridges/`)
- pot directories and their network configuration (`jails/`)
"""

from .base import BridgeConfigError, PotConfigError, PotError, ProbeError
from .bridges import list_bridge_files, list_bridges, load_bridge
from .pots import list_pot_configs, list_pot_names, resolve_pot_config, scan_pot_configs

__all__ = [
    "PotError",
    "BridgeConfigError",
    "PotConfigError",
    "ProbeError",
    "list_bridge_files",
    "list_bridges",
    "load_bridge",
    "list_pot_names",
    "list_pot_configs",
    "resolve_pot_config",
    "scan_pot_configs",
]
