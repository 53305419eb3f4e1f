"""Fakes for the deployment pipeline's external effects.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from typing import Dict, List, Optional

from flowdeploy.core.console import CommandError
from flowdeploy.deployment.health import ProbeResult


class FakeShell:
    """Stands in for flowdeploy.core.console.Console.

    Records every command; commands containing a key of ``failures`` exit with
    the mapped status after printing ``failure_output``.
    """

    def __init__(
        self,
        failures: Optional[Dict[str, int]] = None,
        outputs: Optional[Dict[str, str]] = None,
        failure_output: str = "boom",
    ):
        self.failures = failures or {}
        self.outputs = outputs or {}
        self.failure_output = failure_output
        self.commands: List[str] = []

    def sh(self, command, canFail=False, timeout=60, secret=False, prefix="", env=None, live_output=None):
        self.commands.append(command)
        for fragment, returncode in self.failures.items():
            if fragment in command:
                raise CommandError(command, returncode, self.failure_output)
        for fragment, output in self.outputs.items():
            if fragment in command:
                return output
        return ""

    def ran(self, fragment: str) -> bool:
        return any(fragment in command for command in self.commands)


class ScriptedProbe:
    """Probe returning failures until ``succeed_on`` (1-based), then success."""

    def __init__(self, succeed_on: Optional[int] = None):
        self.succeed_on = succeed_on
        self.calls = 0

    def __call__(self) -> ProbeResult:
        self.calls += 1
        if self.succeed_on is not None and self.calls >= self.succeed_on:
            return ProbeResult(True, "HTTP 200")
        return ProbeResult(False, "HTTP connection refused")


class SleepRecorder:
    """Records requested sleeps instead of waiting.

    ``clock`` reads a virtual monotonic time advanced only by those sleeps.
    """

    def __init__(self):
        self.calls: List[float] = []
        self.now = 0.0

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.now += seconds

    def clock(self) -> float:
        return self.now

