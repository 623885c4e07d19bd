#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
API handlers module for the potnet agent.
This module contains the read-only API endpoint handlers.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException

from potnet.backend import ProbeError, list_bridges, list_pot_names, scan_pot_configs
from potnet.models import BridgeOut, PotListOut, PotOut, SystemConf, SystemConfOut
from potnet.state import StateManager
from potnet.utils.validation import validate_name

logger = logging.getLogger("potnet-agent")

VERSION = "1.0.0"


class APIHandlers:

    def __init__(self, system_conf: SystemConf, agent_settings: Optional[Dict[str, Any]] = None):
        self.system_conf = system_conf
        self.agent_settings = agent_settings or {}
        self.state_manager = StateManager(self.agent_settings)

    def healthz(self) -> Dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "message": "potnet agent is running"}

    def v1_version(self) -> Dict[str, Any]:
        """Version endpoint."""
        return {"version": VERSION, "name": "potnet agent"}

    def v1_config(self) -> SystemConfOut:
        """Merged pot system configuration."""
        return SystemConfOut.from_conf(self.system_conf)

    def _require_valid_conf(self) -> None:
        if not self.system_conf.is_valid():
            raise HTTPException(status_code=503, detail="Pot system configuration is incomplete")

    def v1_list_bridges(self) -> Dict[str, Any]:
        """List all valid bridges."""
        try:
            bridges = sorted(list_bridges(self.system_conf), key=lambda b: b.name)
        except Exception as e:
            logger.exception("Failed to list bridges: %s", e)
            raise HTTPException(status_code=500, detail=f"Failed to list bridges: {e}")
        return {"bridges": [BridgeOut.from_conf(b) for b in bridges], "count": len(bridges)}

    def v1_list_pots(self) -> PotListOut:
        """List resolved pot configurations and the pots whose configuration is corrupt."""
        self._require_valid_conf()
        try:
            pots, errors = scan_pot_configs(self.system_conf)
        except Exception as e:
            logger.exception("Failed to list pots: %s", e)
            raise HTTPException(status_code=500, detail=f"Failed to list pots: {e}")
        pots.sort(key=lambda p: p.name)
        return PotListOut(
            pots=[PotOut.from_conf(p) for p in pots],
            errors={name: str(e) for name, e in sorted(errors.items())},
            count=len(pots),
        )

    def v1_list_running(self) -> Dict[str, Any]:
        """List running pots."""
        self._require_valid_conf()
        running = sorted(self.state_manager.list_running(self.system_conf))
        return {"running": running, "count": len(running)}

    def v1_pot_status_by_name(self, pot_name: str) -> Dict[str, Any]:
        """Report whether one pot is running."""
        self._require_valid_conf()
        try:
            validate_name("pot", pot_name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if pot_name not in list_pot_names(self.system_conf):
            raise HTTPException(status_code=404, detail=f"Pot {pot_name} not found")
        try:
            running = self.state_manager.is_running(pot_name)
        except ProbeError as e:
            logger.error("Run state probe failed for pot %s: %s", pot_name, e)
            raise HTTPException(status_code=500, detail=str(e))
        return {"name": pot_name, "running": running}
