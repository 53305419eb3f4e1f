#!/usr/bin/env python3
"""
Terminal summary of a deployment run.

On success the operator gets the access points and the compose commands to
manage the running services. On failure the error is rendered through the
unified error handler, followed by a bounded tail of diagnostic output: the
captured output of a failed build or start, or the services' logs when the
health check ran out of attempts. Failing to fetch those logs never changes
the exit status of the run.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from flowdeploy.core.compose import DEFAULT_LOG_TAIL
from flowdeploy.core.console import CommandError, Console as ShellConsole
from flowdeploy.core.errors import (
    BuildFailedError,
    ErrorHandler,
    FlowDeployError,
    HealthCheckExhaustedError,
    LaunchFailedError,
)
from flowdeploy.deployment.base import DeploymentResult
from flowdeploy.deployment.launcher import compose_for

logger = logging.getLogger(__name__)


class Reporter:
    """Prints the outcome of a run and returns its exit status."""

    def __init__(
        self,
        console: Optional[Console] = None,
        error_handler: Optional[ErrorHandler] = None,
        shell: Optional[ShellConsole] = None,
        log_tail: int = DEFAULT_LOG_TAIL,
    ):
        self.console = console or Console()
        self.error_handler = error_handler or ErrorHandler(console=self.console)
        self.shell = shell or ShellConsole(shellVerbose=False)
        self.log_tail = log_tail

    def report(self, result: DeploymentResult) -> int:
        if result.is_success:
            self._report_success(result)
        else:
            self._report_failure(result)
        return result.exit_code

    def _report_success(self, result: DeploymentResult) -> None:
        topology = result.topology
        lines = ["🎉 [bold green]Deployment Successful![/bold green]"]
        if topology is not None:
            lines.append(f"Topology: [yellow]{topology.value}[/yellow] ({topology.compose_file})")
        if result.health is not None:
            lines.append(
                f"Health check attempts: [yellow]{result.health.attempt_count}[/yellow] "
                f"({result.health.elapsed_seconds:.1f}s)"
            )
        if topology is not None:
            lines.append("")
            lines.append("[bold blue]Access points:[/bold blue]")
            lines.extend(f"  • {point}" for point in topology.access_points)
        self.console.print(Panel("\n".join(lines), title="Deployment Summary", border_style="green"))

        if topology is not None and result.compose_command:
            compose = compose_for(topology, result.compose_command)
            table = Table(title="Useful commands", show_header=True, header_style="bold magenta")
            table.add_column("Action", style="cyan")
            table.add_column("Command")
            for action, command in compose.useful_commands().items():
                table.add_row(action, command)
            self.console.print(table)

    def _report_failure(self, result: DeploymentResult) -> None:
        if result.error is not None:
            self.error_handler.handle_error(result.error)
        else:
            self.console.print("💥 [bold red]Deployment failed for unknown reasons[/bold red]")

        if isinstance(result.error, HealthCheckExhaustedError):
            result.diagnostics = self._fetch_diagnostics(result)
        elif isinstance(result.error, (BuildFailedError, LaunchFailedError)):
            result.diagnostics = self._captured_output(result.error)

        if result.diagnostics:
            self.console.print(
                Panel(
                    Text(result.diagnostics),
                    title=f"Last {self.log_tail} log lines",
                    border_style="yellow",
                )
            )

    def _captured_output(self, error: FlowDeployError) -> Optional[str]:
        """Tail of the output the failed compose step printed."""
        cause = error.cause
        if not isinstance(cause, CommandError) or not cause.output.strip():
            return None
        return "\n".join(cause.output.strip().splitlines()[-self.log_tail:])

    def _fetch_diagnostics(self, result: DeploymentResult) -> Optional[str]:
        """Best-effort retrieval of recent service logs."""
        if result.topology is None or not result.compose_command:
            return None
        compose = compose_for(result.topology, result.compose_command, console=self.shell)
        self.console.print("[yellow]Health check failed. Checking logs...[/yellow]")
        try:
            return compose.logs(tail=self.log_tail)
        except (RuntimeError, OSError) as e:
            logger.warning("Could not retrieve service logs: %s", e)
            return None


def build_summary(result: DeploymentResult) -> Dict[str, Any]:
    """JSON-serializable summary of a run."""
    summary: Dict[str, Any] = {
        "status": result.status.value,
        "exit_code": result.exit_code,
        "provider": result.config.provider.value if result.config else None,
        "topology": result.topology.value if result.topology else None,
        "compose_file": result.topology.compose_file if result.topology else None,
        "compose_command": result.compose_command,
        "health": None,
        "error": None,
    }
    if result.health is not None:
        summary["health"] = {
            "status": result.health.status.value,
            "attempts": result.health.attempt_count,
            "last_detail": result.health.last_detail,
            "elapsed_seconds": round(result.health.elapsed_seconds, 3),
        }
    if result.error is not None:
        summary["error"] = {
            "type": type(result.error).__name__,
            "category": result.error.category.value,
            "message": result.error.message,
        }
    return summary
