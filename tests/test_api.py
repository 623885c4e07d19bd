"""Tests for the read-only HTTP API."""

from __future__ import annotations

import subprocess

import pytest
from fastapi.testclient import TestClient

from potnet.agent import create_app
from potnet.models import SystemConf


@pytest.fixture()
def populated(system_conf: SystemConf, write_pot, write_bridge) -> SystemConf:
    write_bridge("public", "name=public\nnet=10.192.0.0/24\ngateway=10.192.0.1\n")
    write_bridge("broken", "name=broken\nnet=10.192.0.0/24\ngateway=10.0.0.1\n")
    write_pot("web", "network_type=public-bridge\nip=10.192.0.10\n")
    write_pot("base", "ip4=inherit\n")
    write_pot("bad", "network_type=private-bridge\nip=10.192.0.300\n")
    return system_conf


@pytest.fixture()
def client(populated: SystemConf, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0 if cmd[-1] == "web" else 1)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return TestClient(create_app(populated, {}))


class TestInfo:
    def test_healthz(self, client: TestClient) -> None:
        assert client.get("/healthz").json()["status"] == "healthy"

    def test_config(self, client: TestClient) -> None:
        body = client.get("/v1/config").json()
        assert body["valid"] is True
        assert body["network"] == "10.192.0.0/10"
        assert body["dns_name"] == "dns"


class TestDiscovery:
    def test_bridges(self, client: TestClient) -> None:
        body = client.get("/v1/bridges").json()
        assert body["count"] == 1
        assert body["bridges"][0] == {"name": "public", "network": "10.192.0.0/24", "gateway": "10.192.0.1"}

    def test_pots(self, client: TestClient) -> None:
        body = client.get("/v1/pots").json()
        assert body["count"] == 2
        assert body["pots"] == [
            {"name": "base", "network_type": "inherit", "ip_addr": None},
            {"name": "web", "network_type": "public-bridge", "ip_addr": "10.192.0.10"},
        ]
        assert list(body["errors"]) == ["bad"]

    def test_running(self, client: TestClient) -> None:
        assert client.get("/v1/pots/running").json() == {"running": ["web"], "count": 1}

    def test_pot_status(self, client: TestClient) -> None:
        assert client.get("/v1/pots/web/status").json() == {"name": "web", "running": True}
        assert client.get("/v1/pots/base/status").json() == {"name": "base", "running": False}

    def test_unknown_pot_status(self, client: TestClient) -> None:
        resp = client.get("/v1/pots/ghost/status")
        assert resp.status_code == 404
        assert "ghost" in resp.json()["error"]

    def test_invalid_pot_name(self, client: TestClient) -> None:
        assert client.get("/v1/pots/..%20x/status").status_code == 400


class TestIncompleteConfiguration:
    def test_pots_unavailable(self) -> None:
        client = TestClient(create_app(SystemConf(), {}))
        assert client.get("/v1/config").json()["valid"] is False
        assert client.get("/v1/pots").status_code == 503
        assert client.get("/v1/pots/running").status_code == 503
        assert client.get("/v1/bridges").json() == {"bridges": [], "count": 0}
