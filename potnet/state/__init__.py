# Pot run-state queries
from .manager import StateManager

__all__ = ["StateManager"]
