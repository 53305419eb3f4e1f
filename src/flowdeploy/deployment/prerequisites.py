#!/usr/bin/env python3
"""
Prerequisite checks for the deployment host.

Only probes the execution path; nothing is started or modified here.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import shutil
from typing import Callable, List, Optional, Sequence

from flowdeploy.core.compose import COMPOSE_PLUGIN, COMPOSE_STANDALONE
from flowdeploy.core.console import Console
from flowdeploy.core.errors import MissingDependencyError, create_error_context

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_TOOLS = ["docker"]

INSTALL_HINTS = {
    "docker": "Install Docker: https://docs.docker.com/get-docker/",
    "docker-compose": "Install Docker Compose: https://docs.docker.com/compose/install/",
}

Which = Callable[[str], Optional[str]]


def check_prerequisites(
    tools: Sequence[str] = DEFAULT_REQUIRED_TOOLS,
    which: Which = shutil.which,
) -> List[str]:
    """
    Confirm every required executable is on PATH.

    Args:
        tools: Executable names to look for
        which: Lookup function, shutil.which by default

    Returns:
        Resolved paths of the tools, in the order given

    Raises:
        MissingDependencyError: Naming every tool that is absent
    """
    resolved = []
    missing = []
    for tool in tools:
        path = which(tool)
        if path:
            logger.debug("Found %s at %s", tool, path)
            resolved.append(path)
        else:
            missing.append(tool)

    if missing:
        raise MissingDependencyError(
            f"Required tools not installed: {', '.join(missing)}",
            missing=missing,
            context=create_error_context(operation="check_prerequisites", phase="prerequisites"),
            suggestions=[INSTALL_HINTS.get(tool, f"Install {tool}") for tool in missing],
        )
    return resolved


def resolve_compose_command(console: Optional[Console] = None, which: Which = shutil.which) -> str:
    """
    Pick the compose command available on this host.

    The docker compose plugin is preferred; the standalone docker-compose
    binary is the fallback.

    Raises:
        MissingDependencyError: If neither is usable
    """
    console = console or Console(shellVerbose=False)
    try:
        console.sh(f"{COMPOSE_PLUGIN} version", timeout=30, live_output=False)
        return COMPOSE_PLUGIN
    except RuntimeError as e:
        # CommandError on a non-zero exit, plain RuntimeError on timeout
        logger.debug("Compose plugin unavailable: %s", e)

    if which(COMPOSE_STANDALONE):
        return COMPOSE_STANDALONE

    raise MissingDependencyError(
        "Docker Compose is not installed",
        missing=[COMPOSE_STANDALONE],
        context=create_error_context(operation="resolve_compose_command", phase="prerequisites"),
        suggestions=[INSTALL_HINTS[COMPOSE_STANDALONE]],
    )
