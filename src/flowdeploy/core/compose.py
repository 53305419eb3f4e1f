#!/usr/bin/env python3
"""Module to run docker compose commands.

This module provides a class to build, start and inspect a compose target.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import typing
# user-defined modules
from flowdeploy.core.console import Console


# Compose v2 plugin and the standalone v1 binary
COMPOSE_PLUGIN = "docker compose"
COMPOSE_STANDALONE = "docker-compose"

DEFAULT_LOG_TAIL = 50


class Compose:
    """Class to run docker compose commands against one compose file.

    Attributes:
        compose_command (str): The compose command, plugin or standalone.
        compose_file (str): The compose file passed with -f.
        console (Console): The console object.
    """

    def __init__(
        self,
        compose_command: str,
        compose_file: str,
        console: typing.Optional[Console] = None,
    ) -> None:
        """Constructor of the Compose class.

        Args:
            compose_command (str): The compose command, plugin or standalone.
            compose_file (str): The compose file passed with -f.
            console (Console): The console object.
        """
        self.compose_command = compose_command
        self.compose_file = compose_file
        self.console = console or Console()

    def command(self, *args: str) -> str:
        """Return the full compose command line for the given arguments."""
        return " ".join([self.compose_command, "-f", self.compose_file, *args])

    def build(self, no_cache: bool = True, timeout: typing.Optional[int] = None) -> str:
        """Build the images of the compose target.

        Raises:
            CommandError: If the build fails.
        """
        args = ["build"]
        if no_cache:
            args.append("--no-cache")
        return self.console.sh(self.command(*args), timeout=timeout)

    def up(self, detached: bool = True, timeout: typing.Optional[int] = None) -> str:
        """Start the services of the compose target.

        Raises:
            CommandError: If the services fail to start.
        """
        args = ["up"]
        if detached:
            args.append("-d")
        return self.console.sh(self.command(*args), timeout=timeout)

    def logs(self, tail: int = DEFAULT_LOG_TAIL, timeout: int = 60) -> str:
        """Return the last lines of the services' output.

        Raises:
            CommandError: If the logs cannot be retrieved.
        """
        return self.console.sh(
            self.command("logs", f"--tail={tail}"), timeout=timeout, live_output=False
        )

    def useful_commands(self) -> typing.Dict[str, str]:
        """Commands an operator typically runs against a live deployment."""
        return {
            "View logs": self.command("logs", "-f"),
            "Check status": self.command("ps"),
            "Stop services": self.command("down"),
            "Restart": self.command("restart"),
        }
