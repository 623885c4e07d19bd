#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""API routes module for the potnet agent."""
from typing import Any, Dict, Optional

from fastapi import FastAPI

from potnet.models import PotListOut, SystemConf, SystemConfOut
from .handlers import APIHandlers


def register_routes(
    app: FastAPI,
    system_conf: SystemConf,
    agent_settings: Optional[Dict[str, Any]] = None,
) -> None:
    """Register all API routes with the FastAPI application."""
    handlers = APIHandlers(system_conf, agent_settings)

    # Health and info endpoints
    @app.get("/healthz")
    def healthz():
        return handlers.healthz()

    @app.get("/v1/version")
    def v1_version():
        return handlers.v1_version()

    @app.get("/v1/config", response_model=SystemConfOut)
    def v1_config():
        return handlers.v1_config()

    # Discovery endpoints
    @app.get("/v1/bridges")
    def v1_list_bridges():
        return handlers.v1_list_bridges()

    @app.get("/v1/pots", response_model=PotListOut)
    def v1_list_pots():
        return handlers.v1_list_pots()

    @app.get("/v1/pots/running")
    def v1_list_running():
        return handlers.v1_list_running()

    @app.get("/v1/pots/{pot_name}/status")
    def v1_pot_status_by_name(pot_name: str):
        return handlers.v1_pot_status_by_name(pot_name)
