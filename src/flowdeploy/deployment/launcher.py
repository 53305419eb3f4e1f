#!/usr/bin/env python3
"""
Build-and-start of the selected compose target.

Both steps run exactly once; a failed build means start is never attempted.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
from typing import Optional

from flowdeploy.core.compose import Compose
from flowdeploy.core.console import CommandError, Console
from flowdeploy.core.errors import (
    BuildFailedError,
    LaunchFailedError,
    create_error_context,
)
from flowdeploy.deployment.topology import Topology

logger = logging.getLogger(__name__)


def compose_for(topology: Topology, compose_command: str, console: Optional[Console] = None) -> Compose:
    """Resolve a topology to its compose target."""
    return Compose(compose_command, topology.compose_file, console=console)


def launch(compose: Compose, no_cache: bool = True, topology: Optional[Topology] = None) -> None:
    """
    Build the compose target, then start it detached.

    Raises:
        BuildFailedError: If the build exits non-zero
        LaunchFailedError: If start exits non-zero
    """
    topology_name = topology.value if topology else None

    logger.info("Building Docker image...")
    try:
        compose.build(no_cache=no_cache)
    except CommandError as e:
        raise BuildFailedError(
            f"Build of {compose.compose_file} failed with exit code {e.returncode}",
            returncode=e.returncode,
            context=create_error_context(
                operation="build", phase="launch", component="Compose", topology=topology_name
            ),
            suggestions=[f"Re-run the build manually: {compose.command('build')}"],
            cause=e,
        ) from e
    logger.info("Build complete")

    logger.info("Starting services...")
    try:
        compose.up(detached=True)
    except CommandError as e:
        raise LaunchFailedError(
            f"Starting {compose.compose_file} failed with exit code {e.returncode}",
            returncode=e.returncode,
            context=create_error_context(
                operation="up", phase="launch", component="Compose", topology=topology_name
            ),
            suggestions=[f"Inspect the services: {compose.command('ps')}"],
            cause=e,
        ) from e
    logger.info("Services started")
