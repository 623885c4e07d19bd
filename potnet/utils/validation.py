#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utilities module for the potnet agent.
This module contains the CLI output helpers and name validation.
"""
import json
import re
from typing import Any, Dict, NoReturn

import typer


def fail(msg: str) -> NoReturn:
    """Print a JSON error and exit with code 1."""
    typer.echo(json.dumps({"error": msg}))
    raise typer.Exit(code=1)


def succeed(data: Dict[str, Any]) -> NoReturn:
    """Print the JSON result and exit with code 0."""
    typer.echo(json.dumps(data, indent=2))
    raise typer.Exit(code=0)


def validate_name(entity: str, name: str) -> None:
    """Validate a pot name (alnum, '.', '_' and '-' only). Raise ValueError on error."""
    if not re.match(r"^[A-Za-z0-9._-]+$", name or "") or name in (".", ".."):
        raise ValueError(f"Invalid {entity} name '{name}'. Only A-Z, a-z, 0-9, '.', '_' and '-' allowed")
