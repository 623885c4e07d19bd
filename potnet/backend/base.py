# backend/base.py
from __future__ import annotations


class PotError(Exception):
    """Base error for pot discovery."""


class BridgeConfigError(PotError):
    """A bridge definition is incomplete or its gateway is outside its network."""


class PotConfigError(PotError):
    """A pot.conf field is present but cannot be parsed."""

    def __init__(self, pot_name: str, field: str, value: str):
        super().__init__(f"pot {pot_name}: invalid {field} '{value}'")
        self.pot_name = pot_name
        self.field = field
        self.value = value


class ProbeError(PotError):
    """The jail listing tool could not be run."""
