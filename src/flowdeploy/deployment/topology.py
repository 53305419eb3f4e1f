#!/usr/bin/env python3
"""
Deployment topologies and the operator menu that selects one.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)

HEALTH_ACCESS_POINT = "http://localhost:8080/health"
DASHBOARD_ACCESS_POINT = "http://localhost:8081"


class Topology(Enum):
    """Named deployment shapes, each backed by one compose file."""

    PRODUCTION = "production"
    SIMPLE = "simple"
    DEVELOPMENT = "development"

    @property
    def menu_key(self) -> str:
        return _DETAILS[self][0]

    @property
    def compose_file(self) -> str:
        return _DETAILS[self][1]

    @property
    def description(self) -> str:
        return _DETAILS[self][2]

    @property
    def access_points(self) -> List[str]:
        """Endpoints an operator can reach once this topology is healthy."""
        points = [f"Health Check: {HEALTH_ACCESS_POINT}"]
        if self is Topology.PRODUCTION:
            points.append(f"Dashboard: {DASHBOARD_ACCESS_POINT}")
        return points


# menu key, compose file, description; must cover every Topology member
_DETAILS = {
    Topology.PRODUCTION: ("1", "docker-compose.production.yml", "Production (recommended - with monitoring)"),
    Topology.SIMPLE: ("2", "docker-compose.yml", "Simple (basic setup)"),
    Topology.DEVELOPMENT: ("3", "docker-compose.agent.yml", "Development (with hot reload)"),
}

DEFAULT_TOPOLOGY = Topology.PRODUCTION

TOPOLOGY_MENU = "\n".join(f"  {t.menu_key}) {t.description}" for t in Topology)


def select_topology(choice: Optional[str]) -> Topology:
    """
    Map an operator choice to a topology.

    Accepts a menu key ("1"-"3") or a topology name. Anything else, including
    no input at all, falls back to the production topology with a warning
    instead of aborting the deployment.
    """
    normalized = (choice or "").strip().lower()
    for topology in Topology:
        if normalized in (topology.menu_key, topology.value):
            logger.info("Deploying %s setup...", topology.value)
            return topology

    logger.warning(
        "Invalid choice %r. Defaulting to %s.", choice, DEFAULT_TOPOLOGY.value
    )
    return DEFAULT_TOPOLOGY
