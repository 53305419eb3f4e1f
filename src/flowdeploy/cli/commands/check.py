#!/usr/bin/env python3
"""
Check command for flowdeploy CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from flowdeploy.core.errors import FlowDeployError, handle_error
from flowdeploy.deployment.base import DeployOptions
from flowdeploy.orchestration.deploy_orchestrator import DeployOrchestrator

from ..constants import ExitCode, DEFAULT_ENV_FILE
from ..utils import console, setup_logging


def check(
    env_file: Annotated[
        Path,
        typer.Option("--env-file", "-e", help="Configuration file with PROVIDER and API keys"),
    ] = Path(DEFAULT_ENV_FILE),
    workdir: Annotated[
        Optional[Path],
        typer.Option("--workdir", "-w", help="Directory holding the compose files"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
) -> None:
    """
    🔍 Verify prerequisites and configuration without deploying.
    """
    setup_logging(verbose)

    options = DeployOptions(env_file=env_file, workdir=workdir, bootstrap_env=False)
    orchestrator = DeployOrchestrator(options, rich_console=console)

    try:
        config = orchestrator.preflight()
    except FlowDeployError as e:
        handle_error(e)
        raise typer.Exit(e.exit_code)

    console.print(
        f"✅ [bold green]Ready to deploy[/bold green] with provider "
        f"[cyan]{config.provider.value}[/cyan] using [cyan]{orchestrator.compose_command}[/cyan]"
    )
    raise typer.Exit(ExitCode.SUCCESS)
