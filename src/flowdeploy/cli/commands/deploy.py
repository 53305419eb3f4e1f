#!/usr/bin/env python3
"""
Deploy command for flowdeploy CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel

from flowdeploy.core.console import Console
from flowdeploy.core.errors import create_error_context, get_error_handler, handle_error
from flowdeploy.deployment.base import DeployOptions
from flowdeploy.deployment.health import ProbeResult
from flowdeploy.deployment.topology import TOPOLOGY_MENU
from flowdeploy.orchestration.deploy_orchestrator import DeployOrchestrator
from flowdeploy.reporting.summary import Reporter, build_summary

from ..constants import (
    ExitCode,
    DEFAULT_ENV_FILE,
    DEFAULT_ENV_TEMPLATE,
    DEFAULT_HEALTH_URL,
    DEFAULT_LOG_TAIL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_SETTLE_DELAY,
)
from ..utils import console, save_summary_with_feedback, setup_logging


def prompt_topology() -> str:
    """Show the topology menu and read the operator's choice."""
    console.print()
    console.print("[bold blue]Select deployment type:[/bold blue]")
    console.print(TOPOLOGY_MENU, markup=False)
    return typer.prompt("Enter choice [1-3]", default="", show_default=False)


def confirm_env_edited(message: str) -> str:
    """Block until the operator has filled in a freshly created env file."""
    return typer.prompt(message, default="", show_default=False)


def show_attempt(attempt: int, result: ProbeResult) -> None:
    if not result.ok:
        console.print(f"  [dim]attempt {attempt}: {result.detail}[/dim]")


def deploy(
    env_file: Annotated[
        Path,
        typer.Option("--env-file", "-e", help="Configuration file with PROVIDER and API keys"),
    ] = Path(DEFAULT_ENV_FILE),
    env_template: Annotated[
        Path,
        typer.Option("--env-template", help="Template copied when the env file is missing"),
    ] = Path(DEFAULT_ENV_TEMPLATE),
    workdir: Annotated[
        Optional[Path],
        typer.Option("--workdir", "-w", help="Directory holding the compose files"),
    ] = None,
    topology: Annotated[
        Optional[str],
        typer.Option(
            "--topology",
            "-t",
            help="Deployment type: 1/production, 2/simple, 3/development. Prompted when omitted.",
        ),
    ] = None,
    health_url: Annotated[
        str, typer.Option("--health-url", help="Liveness endpoint polled after start")
    ] = DEFAULT_HEALTH_URL,
    max_retries: Annotated[
        int, typer.Option("--max-retries", min=1, help="Maximum health probe attempts")
    ] = DEFAULT_MAX_RETRIES,
    retry_interval: Annotated[
        float, typer.Option("--retry-interval", min=0, help="Seconds between health probes")
    ] = DEFAULT_RETRY_INTERVAL,
    settle_delay: Annotated[
        float, typer.Option("--settle-delay", min=0, help="Seconds to wait before the first probe")
    ] = DEFAULT_SETTLE_DELAY,
    probe_timeout: Annotated[
        float, typer.Option("--probe-timeout", min=0, help="Timeout of a single health probe")
    ] = DEFAULT_PROBE_TIMEOUT,
    use_cache: Annotated[
        bool, typer.Option("--use-cache", help="Reuse the Docker build cache")
    ] = False,
    log_tail: Annotated[
        int, typer.Option("--log-tail", min=1, help="Log lines shown when the health check fails")
    ] = DEFAULT_LOG_TAIL,
    summary_output: Annotated[
        Optional[str],
        typer.Option("--summary-output", "-s", help="Output file for deployment summary JSON"),
    ] = None,
    live_output: Annotated[
        bool, typer.Option("--live-output", "-l", help="Print build output in real-time")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
) -> None:
    """
    🚀 Build, start and verify the service with Docker Compose.

    Checks host prerequisites, validates the env configuration, builds and
    starts the selected compose target, then polls the health endpoint.
    """
    setup_logging(verbose)

    options = DeployOptions(
        env_file=env_file,
        env_template=env_template,
        workdir=workdir,
        topology_choice=topology,
        health_url=health_url,
        max_retries=max_retries,
        retry_interval=retry_interval,
        settle_delay=settle_delay,
        probe_timeout=probe_timeout,
        no_cache=not use_cache,
        log_tail=log_tail,
        live_output=live_output,
    )

    console.print(
        Panel(
            f"🚀 [bold cyan]Deploying[/bold cyan]\n"
            f"Config: [yellow]{env_file}[/yellow]\n"
            f"Health endpoint: [yellow]{health_url}[/yellow]\n"
            f"Retry budget: [yellow]{max_retries} × {retry_interval}s[/yellow]",
            title="Deployment Configuration",
            border_style="blue",
        )
    )

    try:
        orchestrator = DeployOrchestrator(
            options,
            rich_console=console,
            prompt=prompt_topology,
            confirm=confirm_env_edited,
            on_attempt=show_attempt,
        )
        result = orchestrator.execute()

        reporter = Reporter(
            console=console,
            error_handler=get_error_handler(),
            shell=Console(shellVerbose=False, cwd=str(workdir) if workdir else None),
            log_tail=log_tail,
        )
        exit_code = reporter.report(result)
        save_summary_with_feedback(build_summary(result), summary_output, "Deployment")
        raise typer.Exit(exit_code)

    except typer.Exit:
        raise

    except (KeyboardInterrupt, typer.Abort):
        # typer.prompt turns Ctrl-C into Abort
        console.print("\n🛑 [yellow]Deployment cancelled by user[/yellow]")
        raise typer.Exit(ExitCode.FAILURE)

    except Exception as e:
        context = create_error_context(
            operation="deploy",
            phase="deploy",
            component="deploy_command",
        )
        handle_error(e, context=context, show_traceback=verbose)
        raise typer.Exit(ExitCode.FAILURE)
