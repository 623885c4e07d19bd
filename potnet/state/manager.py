#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
State management module for the potnet agent.
This module reports which pots are currently running, using jls(8).
"""
import logging
import subprocess
from typing import Any, Dict, List, Optional

from potnet.backend.base import ProbeError
from potnet.backend.pots import list_pot_names
from potnet.config.manager import DEFAULT_JLS_BIN
from potnet.models import SystemConf

logger = logging.getLogger("potnet-agent")


class StateManager:
    """Manager for pot run-state queries."""

    def __init__(self, agent_settings: Optional[Dict[str, Any]] = None):
        self.agent_settings = agent_settings or {}

    @property
    def jls_bin(self) -> str:
        return self.agent_settings.get("pot", {}).get("jls_bin") or DEFAULT_JLS_BIN

    def is_running(self, pot_name: str) -> bool:
        """Return True if `jls -j <pot_name>` succeeds. Raise ProbeError if jls cannot be run."""
        try:
            res = subprocess.run(
                [self.jls_bin, "-j", pot_name],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as e:
            raise ProbeError(f"Unable to run {self.jls_bin}: {e}") from e
        return res.returncode == 0

    def list_running(self, conf: SystemConf) -> List[str]:
        """Names of the pots that are running; a failed probe counts as not running."""
        running = []
        for pot_name in list_pot_names(conf):
            try:
                if self.is_running(pot_name):
                    running.append(pot_name)
            except ProbeError as e:
                logger.warning("Run state of pot %s unknown: %s", pot_name, e)
        return running
