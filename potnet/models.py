#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data models for the potnet agent.
This module contains the data classes used throughout the application.
"""
import dataclasses
import enum
import ipaddress
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

IpAddr = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
# An address with its prefix length, kept exactly as written (host bits are not masked).
IpNet = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]


@dataclasses.dataclass
class SystemConf:
    """Pot system configuration; every field stays None until a layer sets it."""

    zfs_root: Optional[str] = None
    fs_root: Optional[str] = None
    network: Optional[IpNet] = None
    netmask: Optional[IpAddr] = None
    gateway: Optional[IpAddr] = None
    ext_if: Optional[str] = None
    dns_name: Optional[str] = None
    dns_ip: Optional[IpAddr] = None

    def is_valid(self) -> bool:
        """True when all eight fields are set."""
        return all(getattr(self, f.name) is not None for f in dataclasses.fields(self))

    def merge(self, rhs: "SystemConf") -> None:
        """Overlay every field that is set on `rhs` onto this configuration."""
        for f in dataclasses.fields(self):
            value = getattr(rhs, f.name)
            if value is not None:
                setattr(self, f.name, value)


@dataclasses.dataclass(frozen=True)
class BridgeConf:
    """A bridge definition; the gateway always lies inside the network."""

    name: str
    network: IpNet
    gateway: IpAddr

    @classmethod
    def optional_new(
        cls,
        name: Optional[str],
        network: Optional[IpNet],
        gateway: Optional[IpAddr],
    ) -> Optional["BridgeConf"]:
        if name is None or network is None or gateway is None:
            return None
        if gateway not in network.network:
            return None
        return cls(name=name, network=network, gateway=gateway)


class NetType(enum.Enum):
    """Pot networking mode."""

    INHERIT = "inherit"
    ALIAS = "alias"
    PUBLIC_BRIDGE = "public-bridge"
    PRIVATE_BRIDGE = "private-bridge"

    @property
    def is_bridged(self) -> bool:
        return self in (NetType.PUBLIC_BRIDGE, NetType.PRIVATE_BRIDGE)


@dataclasses.dataclass
class PotConf:
    """Resolved network configuration of one pot."""

    name: str = ""
    ip_addr: Optional[IpAddr] = None
    network_type: NetType = NetType.INHERIT


@dataclasses.dataclass
class PotConfVerbatim:
    """Raw pot.conf values, before the schema is resolved."""

    vnet: Optional[str] = None
    ip4: Optional[str] = None
    ip: Optional[str] = None
    network_type: Optional[str] = None


class SystemConfOut(BaseModel):
    """API view of the system configuration."""

    valid: bool
    zfs_root: Optional[str] = None
    fs_root: Optional[str] = None
    network: Optional[str] = None
    netmask: Optional[str] = None
    gateway: Optional[str] = None
    ext_if: Optional[str] = None
    dns_name: Optional[str] = None
    dns_ip: Optional[str] = None

    @classmethod
    def from_conf(cls, conf: SystemConf) -> "SystemConfOut":
        values: Dict[str, Any] = {}
        for f in dataclasses.fields(conf):
            value = getattr(conf, f.name)
            values[f.name] = str(value) if value is not None else None
        return cls(valid=conf.is_valid(), **values)


class BridgeOut(BaseModel):
    """API view of a bridge."""

    name: str
    network: str
    gateway: str

    @classmethod
    def from_conf(cls, bridge: BridgeConf) -> "BridgeOut":
        return cls(name=bridge.name, network=str(bridge.network), gateway=str(bridge.gateway))


class PotOut(BaseModel):
    """API view of a pot."""

    name: str
    network_type: str
    ip_addr: Optional[str] = None

    @classmethod
    def from_conf(cls, pot: PotConf) -> "PotOut":
        return cls(
            name=pot.name,
            network_type=pot.network_type.value,
            ip_addr=str(pot.ip_addr) if pot.ip_addr is not None else None,
        )


class PotListOut(BaseModel):
    """API view of the pot inventory, including entries that failed to resolve."""

    pots: List[PotOut]
    errors: Dict[str, str] = {}
    count: int
