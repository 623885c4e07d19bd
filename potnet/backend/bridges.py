"""
Bridge registry
===============
Bridge definitions live as one file per bridge under `<fs_root>/bridges/`:

    name=public-br
    net=10.192.0.24/29
    gateway=10.192.0.25

A definition is usable only when all three keys parse and the gateway lies
inside `net`. Unusable files are dropped from the listing.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from potnet.config.parser import as_ip_addr, as_ip_net, as_str, parse_kv_text
from potnet.models import BridgeConf, SystemConf

from .base import BridgeConfigError

logger = logging.getLogger("potnet-agent")

BRIDGE_KEYS = [
    ("name", "name", as_str),
    ("net", "network", as_ip_net),
    ("gateway", "gateway", as_ip_addr),
]


def list_bridge_files(fs_root: str) -> List[Path]:
    """Return regular files directly inside `<fs_root>/bridges` (unordered)."""
    bridges_dir = Path(fs_root) / "bridges"
    try:
        with os.scandir(bridges_dir) as it:
            return [Path(entry.path) for entry in it if entry.is_file(follow_symlinks=False)]
    except OSError as e:
        logger.debug("Unable to list %s: %s", bridges_dir, e)
        return []


def load_bridge(text: str) -> BridgeConf:
    """Parse one bridge definition. Raise BridgeConfigError on error."""
    values = parse_kv_text(text, BRIDGE_KEYS)
    missing = [key for key, attr, _ in BRIDGE_KEYS if values[attr] is None]
    if missing:
        raise BridgeConfigError(f"Missing or invalid bridge keys: {', '.join(missing)}")
    bridge = BridgeConf.optional_new(values["name"], values["network"], values["gateway"])
    if bridge is None:
        raise BridgeConfigError(f"Gateway {values['gateway']} is not inside network {values['network']}")
    return bridge


def _read_bridge_file(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Unable to read bridge file %s: %s", path, e)
        return None


def list_bridges(conf: SystemConf) -> List[BridgeConf]:
    """Return every valid bridge definition. Never fails as a whole."""
    if conf.fs_root is None:
        logger.warning("POT_FS_ROOT not configured, no bridges to list")
        return []
    bridges: List[BridgeConf] = []
    for path in list_bridge_files(conf.fs_root):
        text = _read_bridge_file(path)
        if text is None:
            continue
        try:
            bridges.append(load_bridge(text))
        except BridgeConfigError as e:
            logger.warning("Skipping bridge file %s: %s", path, e)
    return bridges
