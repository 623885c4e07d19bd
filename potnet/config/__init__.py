# Configuration loading (agent settings and pot system configuration)
from .manager import ConfigManager, parse_system_conf
from .parser import parse_kv_text

__all__ = ["ConfigManager", "parse_system_conf", "parse_kv_text"]
