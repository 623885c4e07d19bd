#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI commands module for the potnet agent.
This module contains the command-line interface commands; each prints one JSON document.
"""
import logging
from typing import Any, Dict, Optional

from potnet.backend import ProbeError, list_bridges, list_pot_names, scan_pot_configs
from potnet.models import BridgeOut, PotOut, SystemConf, SystemConfOut
from potnet.state import StateManager
from potnet.utils.validation import fail, succeed, validate_name

logger = logging.getLogger("potnet-agent")


class CLICommands:
    """CLI commands handler."""

    def __init__(self, system_conf: SystemConf, agent_settings: Optional[Dict[str, Any]] = None):
        self.system_conf = system_conf
        self.agent_settings = agent_settings or {}
        self.state_manager = StateManager(self.agent_settings)

    def _require_valid_conf(self) -> None:
        if not self.system_conf.is_valid():
            fail("Pot system configuration is incomplete")

    def config_check(self):
        """Exit 0 if the system configuration is complete, 1 otherwise."""
        if not self.system_conf.is_valid():
            missing = [k for k, v in vars(self.system_conf).items() if v is None]
            fail(f"Pot system configuration is incomplete, missing: {', '.join(missing)}")
        succeed({"status": "ok", "message": "pot system configuration is valid"})

    def show_config(self):
        """Print the merged system configuration."""
        succeed(SystemConfOut.from_conf(self.system_conf).model_dump())

    def bridges(self):
        """Print all valid bridges."""
        bridges = sorted(list_bridges(self.system_conf), key=lambda b: b.name)
        succeed({"bridges": [BridgeOut.from_conf(b).model_dump() for b in bridges], "count": len(bridges)})

    def pots(self):
        """Print the pot inventory."""
        self._require_valid_conf()
        pots, errors = scan_pot_configs(self.system_conf)
        pots.sort(key=lambda p: p.name)
        data: Dict[str, Any] = {
            "pots": [PotOut.from_conf(p).model_dump() for p in pots],
            "count": len(pots),
        }
        if errors:
            data["errors"] = {name: str(e) for name, e in sorted(errors.items())}
        succeed(data)

    def running(self):
        """Print the names of running pots."""
        self._require_valid_conf()
        running = sorted(self.state_manager.list_running(self.system_conf))
        succeed({"running": running, "count": len(running)})

    def status(self, pot_name: str):
        """Print the run state of one pot."""
        self._require_valid_conf()
        try:
            validate_name("pot", pot_name)
        except ValueError as e:
            fail(str(e))
        if pot_name not in list_pot_names(self.system_conf):
            fail(f"Pot {pot_name} not found")
        try:
            running = self.state_manager.is_running(pot_name)
        except ProbeError as e:
            fail(f"Run state probe failed: {e}")
        succeed({"name": pot_name, "running": running})
