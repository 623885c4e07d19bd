#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration management module for the potnet agent.
This module handles agent settings loading and the layered pot system configuration
(pot.default.conf, then pot.conf on top of it).
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from potnet.config.parser import as_ip_addr, as_ip_net, as_str, parse_kv_text
from potnet.models import SystemConf

logger = logging.getLogger("potnet-agent")

DEFAULT_AGENT_CONFIG = "/usr/local/etc/potnet/agent.json"
DEFAULT_POT_DEFAULT_CONF = "/usr/local/etc/pot/pot.default.conf"
DEFAULT_POT_CONF = "/usr/local/etc/pot/pot.conf"
DEFAULT_JLS_BIN = "/usr/sbin/jls"

SYSTEM_CONF_KEYS = [
    ("POT_ZFS_ROOT", "zfs_root", as_str),
    ("POT_FS_ROOT", "fs_root", as_str),
    ("POT_EXTIF", "ext_if", as_str),
    ("POT_DNS_NAME", "dns_name", as_str),
    ("POT_NETWORK", "network", as_ip_net),
    ("POT_NETMASK", "netmask", as_ip_addr),
    ("POT_GATEWAY", "gateway", as_ip_addr),
    ("POT_DNS_IP", "dns_ip", as_ip_addr),
]


def parse_system_conf(text: str) -> SystemConf:
    """Build a SystemConf from KEY=value text. Never fails; bad or missing fields stay None."""
    return SystemConf(**parse_kv_text(text, SYSTEM_CONF_KEYS))


def _read_text(path: Path) -> Optional[str]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Unable to read %s: %s", path, e)
        return None


class ConfigManager:
    """Manager for configuration operations."""

    def __init__(self, agent_settings: Optional[Dict[str, Any]] = None):
        self.agent_settings = agent_settings or {}

    def load_agent_config(self) -> Dict[str, Any]:
        """Load agent settings.
        Precedence: env > JSON file (POTNET_AGENT_CONFIG) > built-in defaults.
        A settings file with invalid JSON is fatal; a missing one is not.
        """
        cfg: Dict[str, Any] = {
            "bind_host": "127.0.0.1",
            "bind_port": 8088,
            "pot": {
                "default_conf": DEFAULT_POT_DEFAULT_CONF,
                "conf": DEFAULT_POT_CONF,
                "jls_bin": DEFAULT_JLS_BIN,
            },
            "logging": {"level": "INFO"},
        }
        cfg_path = Path(os.environ.get("POTNET_AGENT_CONFIG", DEFAULT_AGENT_CONFIG))
        if cfg_path.exists():
            with cfg_path.open("r", encoding="utf-8") as f:
                try:
                    file_cfg = json.load(f)
                except json.JSONDecodeError as e:
                    raise RuntimeError(f"Invalid JSON in POTNET_AGENT_CONFIG='{cfg_path}': {e}") from e
            if not isinstance(file_cfg, dict):
                raise RuntimeError(f"POTNET_AGENT_CONFIG='{cfg_path}' must contain a JSON object")
            if isinstance(file_cfg.get("bind_host"), str):
                cfg["bind_host"] = file_cfg["bind_host"]
            if "bind_port" in file_cfg:
                try:
                    cfg["bind_port"] = int(file_cfg["bind_port"])
                except (TypeError, ValueError):
                    logger.warning("Ignoring invalid bind_port %r", file_cfg["bind_port"])
            for section in ("pot", "logging"):
                if isinstance(file_cfg.get(section), dict):
                    cfg[section].update(file_cfg[section])
        for env_name, key in [
            ("POTNET_DEFAULT_CONF", "default_conf"),
            ("POTNET_CONF", "conf"),
            ("POTNET_JLS", "jls_bin"),
        ]:
            value = os.environ.get(env_name)
            if value:
                cfg["pot"][key] = value
        return cfg

    def _pot_path(self, key: str, default: str) -> Path:
        return Path(self.agent_settings.get("pot", {}).get(key) or default)

    def load_system_conf(self) -> SystemConf:
        """Load pot.default.conf, then overlay pot.conf.
        A layer that cannot be read contributes nothing; the result may be invalid.
        """
        default_path = self._pot_path("default_conf", DEFAULT_POT_DEFAULT_CONF)
        text = _read_text(default_path)
        if text is None:
            logger.warning("Default pot configuration %s not readable", default_path)
        conf = parse_system_conf(text or "")
        override_path = self._pot_path("conf", DEFAULT_POT_CONF)
        text = _read_text(override_path)
        if text is None:
            logger.info("No pot configuration override at %s", override_path)
        else:
            conf.merge(parse_system_conf(text))
        if not conf.is_valid():
            logger.warning("Pot system configuration is incomplete")
        return conf
