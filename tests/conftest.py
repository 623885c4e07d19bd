"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- fs_root: an empty pot filesystem root with `bridges/` and `jails/`
- system_conf: a complete SystemConf pointing at `fs_root`
- write_pot / write_bridge: helpers that populate `fs_root`
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from potnet.config import parse_system_conf
from potnet.models import SystemConf

VALID_CONF = """POT_ZFS_ROOT=zroot/pot
POT_FS_ROOT={fs_root}
POT_EXTIF=em0
POT_NETWORK=10.192.0.0/10
POT_NETMASK=255.192.0.0
POT_GATEWAY=10.192.0.1
POT_DNS_IP=10.192.0.2
POT_DNS_NAME=dns
"""


@pytest.fixture()
def fs_root(tmp_path: Path) -> Path:
    root = tmp_path / "pot"
    (root / "bridges").mkdir(parents=True)
    (root / "jails").mkdir()
    return root


@pytest.fixture()
def system_conf(fs_root: Path) -> SystemConf:
    conf = parse_system_conf(VALID_CONF.format(fs_root=fs_root))
    assert conf.is_valid()
    return conf


@pytest.fixture()
def write_pot(fs_root: Path) -> Callable[[str, Optional[str]], Path]:
    """Create `jails/<name>`; write conf/pot.conf unless `text` is None."""

    def _write(name: str, text: Optional[str] = None) -> Path:
        pot_dir = fs_root / "jails" / name
        (pot_dir / "conf").mkdir(parents=True)
        if text is not None:
            (pot_dir / "conf" / "pot.conf").write_text(text)
        return pot_dir

    return _write


@pytest.fixture()
def write_bridge(fs_root: Path) -> Callable[[str, str], Path]:
    def _write(filename: str, text: str) -> Path:
        path = fs_root / "bridges" / filename
        path.write_text(text)
        return path

    return _write
