"""
Pot inventory
=============
Every directory directly inside `<fs_root>/jails/` is a pot. Its network
configuration is read from `<fs_root>/jails/<name>/conf/pot.conf`, which comes
in two schemas:

- current: `network_type=inherit|alias|public-bridge|private-bridge`, with the
  address in `ip=` for bridged pots;
- legacy (no `network_type`): `ip4=inherit` or `ip4=<address>` plus
  `vnet=true|false`.

A pot is skipped (not an error) when its pot.conf is missing or unreadable,
when a required key is absent, when the network type is unknown, and always
when it is an alias pot under the current schema. A key that is present but
holds a malformed address raises PotConfigError for that pot only.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from potnet.config.parser import as_ip_addr, split_lines
from potnet.models import IpAddr, NetType, PotConf, PotConfVerbatim, SystemConf

from .base import PotConfigError

logger = logging.getLogger("potnet-agent")

_NET_TYPES = {t.value: t for t in NetType}


def jails_dir(conf: SystemConf) -> Path:
    return Path(conf.fs_root or "") / "jails"


def list_pot_names(conf: SystemConf) -> List[str]:
    """Return the names of all pot directories (unordered)."""
    if conf.fs_root is None:
        logger.warning("POT_FS_ROOT not configured, no pots to list")
        return []
    path = jails_dir(conf)
    try:
        with os.scandir(path) as it:
            return [entry.name for entry in it if entry.is_dir(follow_symlinks=False)]
    except OSError as e:
        logger.debug("Unable to list %s: %s", path, e)
        return []


def read_pot_conf(text: str) -> PotConfVerbatim:
    """Collect the raw network keys of a pot.conf; the value is everything after the first `=`."""
    raw = PotConfVerbatim()
    for line in split_lines(text):
        key, sep, value = line.partition("=")
        if sep and key in ("vnet", "ip4", "ip", "network_type"):
            setattr(raw, key, value)
    return raw


def _parse_ip(pot_name: str, field: str, value: str) -> IpAddr:
    try:
        return as_ip_addr(value)
    except ValueError:
        raise PotConfigError(pot_name, field, value) from None


def _resolve_current(pot_name: str, raw: PotConfVerbatim) -> Optional[PotConf]:
    net_type = _NET_TYPES.get(raw.network_type or "")
    if net_type is None:
        logger.warning("Skipping pot %s: unknown network_type '%s'", pot_name, raw.network_type)
        return None
    if net_type is NetType.ALIAS:
        logger.debug("Skipping alias pot %s", pot_name)
        return None
    pot = PotConf(name=pot_name, network_type=net_type)
    if net_type.is_bridged:
        if raw.ip is None:
            logger.warning("Skipping pot %s: %s without ip", pot_name, net_type.value)
            return None
        pot.ip_addr = _parse_ip(pot_name, "ip", raw.ip)
    return pot


def _resolve_legacy(pot_name: str, raw: PotConfVerbatim) -> Optional[PotConf]:
    if raw.ip4 is None:
        logger.warning("Skipping pot %s: neither network_type nor ip4 set", pot_name)
        return None
    if raw.ip4 == "inherit":
        return PotConf(name=pot_name, network_type=NetType.INHERIT)
    ip_addr = _parse_ip(pot_name, "ip4", raw.ip4)
    if raw.vnet is None:
        logger.warning("Skipping pot %s: ip4 without vnet", pot_name)
        return None
    net_type = NetType.PUBLIC_BRIDGE if raw.vnet == "true" else NetType.ALIAS
    return PotConf(name=pot_name, ip_addr=ip_addr, network_type=net_type)


def resolve_pot_config(pot_name: str, conf: SystemConf) -> Optional[PotConf]:
    """Resolve the network configuration of one pot.
    Returns None when the pot has no usable configuration; raises PotConfigError
    when an address field is present but malformed.
    """
    conf_file = jails_dir(conf) / pot_name / "conf" / "pot.conf"
    try:
        text = conf_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping pot %s: %s", pot_name, e)
        return None
    raw = read_pot_conf(text)
    if raw.network_type is not None:
        return _resolve_current(pot_name, raw)
    return _resolve_legacy(pot_name, raw)


def scan_pot_configs(conf: SystemConf) -> Tuple[List[PotConf], Dict[str, PotConfigError]]:
    """Resolve every pot, returning the usable configurations and the per-pot errors."""
    pots: List[PotConf] = []
    errors: Dict[str, PotConfigError] = {}
    if not conf.is_valid():
        logger.warning("Pot system configuration is incomplete, skipping pot inventory")
        return pots, errors
    for name in list_pot_names(conf):
        try:
            pot = resolve_pot_config(name, conf)
        except PotConfigError as e:
            logger.error("Invalid configuration for pot %s: %s", name, e)
            errors[name] = e
            continue
        if pot is not None:
            pots.append(pot)
    return pots, errors


def list_pot_configs(conf: SystemConf) -> List[PotConf]:
    """Return the resolved pot configurations; empty if the system configuration is invalid."""
    pots, _ = scan_pot_configs(conf)
    return pots
