"""Tests for the jls run-state probe."""

from __future__ import annotations

import subprocess
from typing import List, Sequence

import pytest

from potnet.backend import ProbeError
from potnet.models import SystemConf
from potnet.state import StateManager


class FakeJls:
    """Stand-in for subprocess.run that reports the listed jails as running."""

    def __init__(self, running: List[str], broken: Sequence[str] = ()) -> None:
        self.running = running
        self.broken = list(broken)
        self.calls: List[list] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        name = cmd[-1]
        if name in self.broken:
            raise FileNotFoundError(cmd[0])
        return subprocess.CompletedProcess(cmd, 0 if name in self.running else 1)


class TestIsRunning:
    def test_exit_status_maps_to_running(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeJls(running=["web"])
        monkeypatch.setattr(subprocess, "run", fake)
        manager = StateManager()
        assert manager.is_running("web") is True
        assert manager.is_running("db") is False
        assert fake.calls[0] == ["/usr/sbin/jls", "-j", "web"]

    def test_configured_jls_binary(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeJls(running=[])
        monkeypatch.setattr(subprocess, "run", fake)
        StateManager({"pot": {"jls_bin": "/opt/bin/jls"}}).is_running("web")
        assert fake.calls[0][0] == "/opt/bin/jls"

    def test_missing_tool_raises(self) -> None:
        manager = StateManager({"pot": {"jls_bin": "/nonexistent/jls"}})
        with pytest.raises(ProbeError):
            manager.is_running("web")


class TestListRunning:
    def test_running_pots(self, monkeypatch: pytest.MonkeyPatch, system_conf: SystemConf, write_pot) -> None:
        for name in ("web", "db", "dns"):
            write_pot(name)
        monkeypatch.setattr(subprocess, "run", FakeJls(running=["web", "dns"]))
        assert sorted(StateManager().list_running(system_conf)) == ["dns", "web"]

    def test_probe_failure_counts_as_not_running(
        self, monkeypatch: pytest.MonkeyPatch, system_conf: SystemConf, write_pot
    ) -> None:
        for name in ("web", "db"):
            write_pot(name)
        monkeypatch.setattr(subprocess, "run", FakeJls(running=["web", "db"], broken=["db"]))
        assert StateManager().list_running(system_conf) == ["web"]
