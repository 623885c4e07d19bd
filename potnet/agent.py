#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.
from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

import typer
import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from potnet.api import register_routes
from potnet.api.handlers import VERSION
from potnet.cli import CLICommands
from potnet.config import ConfigManager
from potnet.models import SystemConf

logger = logging.getLogger("potnet-agent")
logger.setLevel(logging.INFO)
_DEF_HANDLER_SET = False


def _apply_logging_from_cfg(cfg: Dict[str, Any]) -> None:
    """Apply logging configuration from agent settings."""
    global _DEF_HANDLER_SET
    if _DEF_HANDLER_SET:
        return
    level = str(cfg.get("logging", {}).get("level", "INFO")).upper()
    try:
        logger.setLevel(getattr(logging, level))
    except AttributeError:
        logger.setLevel(logging.INFO)
    # Add console handler if not present
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    _DEF_HANDLER_SET = True


def load_configuration() -> Tuple[Dict[str, Any], SystemConf]:
    """Load agent settings, then the layered pot system configuration they point at."""
    config_manager = ConfigManager()
    settings = config_manager.load_agent_config()
    _apply_logging_from_cfg(settings)
    config_manager.agent_settings = settings
    system_conf = config_manager.load_system_conf()
    logger.debug("Pot system configuration: %s", system_conf)
    return settings, system_conf


def create_app(system_conf: SystemConf, agent_settings: Dict[str, Any]) -> FastAPI:
    """Build the read-only HTTP API around an already loaded system configuration."""
    app = FastAPI(title="potnet agent", version=VERSION)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log incoming requests immediately upon receipt."""
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions."""
        logger.error("HTTP error: %s", exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    register_routes(app, system_conf, agent_settings)
    return app


# CLI interface
cli = typer.Typer()


def _cli_commands() -> CLICommands:
    settings, system_conf = load_configuration()
    return CLICommands(system_conf, settings)


@cli.command()
def config_check():
    """Check that the pot system configuration is complete."""
    _cli_commands().config_check()


@cli.command()
def show_config():
    """Show the merged pot system configuration."""
    _cli_commands().show_config()


@cli.command()
def bridges():
    """List valid bridges."""
    _cli_commands().bridges()


@cli.command()
def pots():
    """List pots and their network configuration."""
    _cli_commands().pots()


@cli.command()
def running():
    """List running pots."""
    _cli_commands().running()


@cli.command()
def status(pot_name: str):
    """Show whether a pot is running."""
    _cli_commands().status(pot_name)


@cli.command()
def serve():
    """Run the read-only HTTP API."""
    settings, system_conf = load_configuration()
    if not system_conf.is_valid():
        logger.warning("Serving with an incomplete pot system configuration")
    app = create_app(system_conf, settings)
    logger.info("Starting potnet agent on %s:%s", settings["bind_host"], settings["bind_port"])
    uvicorn.run(app, host=settings["bind_host"], port=settings["bind_port"], reload=False)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
