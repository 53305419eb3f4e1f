#!/usr/bin/env python3
"""
Deploy Orchestrator - Coordinates the compose deployment workflow.

Runs the pipeline strictly in order, each stage gating the next:

    prerequisites -> configuration -> topology -> build/start -> health check

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import shutil
import time
from typing import Callable, Optional

from rich.console import Console as RichConsole

from flowdeploy.core.console import Console
from flowdeploy.core.errors import (
    FlowDeployError,
    HealthCheckExhaustedError,
    create_error_context,
)
from flowdeploy.deployment.base import DeploymentResult, DeploymentStatus, DeployOptions
from flowdeploy.deployment.config import (
    DeploymentConfig,
    ensure_env_file,
    load_env_file,
    validate_config,
)
from flowdeploy.deployment.health import HealthPoller, HttpProbe, Probe, ProbeResult
from flowdeploy.deployment.launcher import compose_for, launch
from flowdeploy.deployment.prerequisites import check_prerequisites, resolve_compose_command
from flowdeploy.deployment.topology import select_topology

logger = logging.getLogger(__name__)


class DeployOrchestrator:
    """
    Orchestrates one deployment attempt.

    Responsibilities:
    - Verify host tools and pick the compose command
    - Load and validate the env configuration
    - Select the topology (prompting only after validation passed)
    - Build and start the compose target
    - Poll the health endpoint under the retry budget

    External effects (tool lookup, shell, probe, sleep, clock, prompts) are
    injected so the whole pipeline can run against fakes.
    """

    def __init__(
        self,
        options: DeployOptions,
        console: Optional[Console] = None,
        rich_console: Optional[RichConsole] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        probe_factory: Callable[[str, float], Probe] = HttpProbe,
        sleep: Callable[[float], None] = time.sleep,
        prompt: Optional[Callable[[], str]] = None,
        confirm: Optional[Callable[[str], object]] = None,
        on_attempt: Optional[Callable[[int, ProbeResult], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.options = options
        workdir = str(options.workdir) if options.workdir else None
        self.console = console or Console(live_output=options.live_output, cwd=workdir)
        self.rich_console = rich_console or RichConsole()
        self.which = which
        self.probe_factory = probe_factory
        self.sleep = sleep
        self.prompt = prompt
        self.confirm = confirm
        self.on_attempt = on_attempt
        self.clock = clock
        self.compose_command: Optional[str] = None

    def preflight(self) -> DeploymentConfig:
        """
        Run the prerequisite and configuration stages only.

        Raises:
            MissingDependencyError: If a required tool is absent
            InvalidConfigurationError: If the configuration is unusable
            MissingCredentialError: If the provider's API key is missing
        """
        self.rich_console.print("[yellow]Checking prerequisites...[/yellow]")
        check_prerequisites(self.options.required_tools, which=self.which)
        self.compose_command = resolve_compose_command(self.console, which=self.which)
        self.rich_console.print(
            f"[green]✓ Prerequisites met[/green] (using [cyan]{self.compose_command}[/cyan])"
        )

        env_file = self.options.resolve(self.options.env_file)
        if self.options.bootstrap_env:
            ensure_env_file(
                env_file,
                self.options.resolve(self.options.env_template),
                confirm=self.confirm,
                announce=self.rich_console.print,
            )

        self.rich_console.print("[yellow]Validating configuration...[/yellow]")
        config = validate_config(load_env_file(env_file), source=env_file)
        self.rich_console.print(
            f"[green]✓ Configuration valid[/green] (provider: [cyan]{config.provider.value}[/cyan])"
        )
        return config

    def execute(self) -> DeploymentResult:
        """
        Execute the full deployment workflow.

        Pipeline errors end the run and are recorded on the result; anything
        else propagates to the caller.

        Returns:
            DeploymentResult with status, topology and health outcome
        """
        budget = self.options.retry_budget
        result = DeploymentResult()
        try:
            result.config = self.preflight()
            result.compose_command = self.compose_command

            choice = self.options.topology_choice
            if choice is None and self.prompt is not None:
                choice = self.prompt()
            result.topology = select_topology(choice)

            compose = compose_for(result.topology, self.compose_command, console=self.console)
            launch(compose, no_cache=self.options.no_cache, topology=result.topology)

            self.rich_console.print("[yellow]Waiting for health check...[/yellow]")
            poller = HealthPoller(
                self.probe_factory(self.options.health_url, self.options.probe_timeout),
                budget=budget,
                sleep=self.sleep,
                on_attempt=self.on_attempt,
                clock=self.clock,
            )
            result.health = poller.poll()

            if not result.health.is_healthy:
                raise HealthCheckExhaustedError(
                    f"Health check failed after {result.health.attempt_count} attempts "
                    f"({result.health.last_detail})",
                    attempts=result.health.attempt_count,
                    context=create_error_context(
                        operation="health_check",
                        phase="verification",
                        component="HealthPoller",
                        topology=result.topology.value,
                        additional_info={"url": self.options.health_url},
                    ),
                    suggestions=[
                        f"Check the endpoint manually: curl -f {self.options.health_url}",
                        f"Inspect the services: {compose.command('ps')}",
                    ],
                )

            self.rich_console.print("[green]✓ Health check passed![/green]")
            result.status = DeploymentStatus.SUCCESS

        except FlowDeployError as e:
            logger.debug("Deployment aborted: %s", e)
            result.error = e
            result.status = DeploymentStatus.FAILED

        return result
