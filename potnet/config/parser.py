#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KEY=value text parsing shared by the system and bridge configuration readers.

Rules, line by line:
- surrounding whitespace is trimmed and `#`-led lines are dropped;
- for a recognized `KEY=` prefix the value is the text after the first `=`,
  cut at the first space (this drops inline comments, and also truncates
  values that contain a space);
- quotes are kept as part of the value;
- the last occurrence of a key wins;
- a value the converter rejects leaves the field as None.
"""
import ipaddress
import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from potnet.models import IpAddr, IpNet

logger = logging.getLogger("potnet-agent")

Converter = Callable[[str], Any]
# (key as written in the file, attribute name, converter)
KeySpec = Tuple[str, str, Converter]


def as_str(value: str) -> str:
    return value


def as_ip_addr(value: str) -> IpAddr:
    """Parse a bare IPv4/IPv6 address, without a zone index. Raise ValueError on error."""
    if "%" in value:
        raise ValueError(f"'{value}' carries a zone index")
    return ipaddress.ip_address(value)


def as_ip_net(value: str) -> IpNet:
    """Parse `address/prefix`. A missing or non-numeric prefix is an error."""
    _, sep, prefix = value.partition("/")
    if not sep or not prefix.isdigit() or "%" in value:
        raise ValueError(f"'{value}' is not in address/prefix form")
    return ipaddress.ip_interface(value)


def split_lines(text: str) -> Iterable[str]:
    """Split on line feeds only, dropping the carriage return of CRLF endings."""
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def config_lines(text: str) -> Iterable[str]:
    """Yield trimmed lines that are not full-line comments."""
    for line in split_lines(text):
        line = line.strip()
        if line.startswith("#"):
            continue
        yield line


def parse_kv_text(text: str, keys: Iterable[KeySpec]) -> Dict[str, Optional[Any]]:
    """Parse `text` and return {attribute: value-or-None} for every key in `keys`."""
    keys = list(keys)
    result: Dict[str, Optional[Any]] = {attr: None for _, attr, _ in keys}
    for line in config_lines(text):
        for key, attr, convert in keys:
            prefix = f"{key}="
            if not line.startswith(prefix):
                continue
            raw = line[len(prefix):].split(" ", 1)[0]
            try:
                result[attr] = convert(raw)
            except ValueError:
                logger.debug("Ignoring unparseable value for %s: %r", key, raw)
                result[attr] = None
    return result
