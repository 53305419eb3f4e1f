#!/usr/bin/env python3
"""
Shared data types for the deployment pipeline.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from flowdeploy.core.compose import DEFAULT_LOG_TAIL
from flowdeploy.core.errors import FlowDeployError
from flowdeploy.deployment.config import DEFAULT_ENV_FILE, DEFAULT_ENV_TEMPLATE, DeploymentConfig
from flowdeploy.deployment.health import (
    DEFAULT_HEALTH_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_SETTLE_DELAY,
    HealthCheckOutcome,
    RetryBudget,
)
from flowdeploy.deployment.topology import Topology


class DeploymentStatus(Enum):
    """Deployment status enumeration."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeployOptions:
    """Runtime options for one deployment run."""

    env_file: Path = Path(DEFAULT_ENV_FILE)
    env_template: Path = Path(DEFAULT_ENV_TEMPLATE)
    workdir: Optional[Path] = None
    topology_choice: Optional[str] = None
    health_url: str = DEFAULT_HEALTH_URL
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_interval: float = DEFAULT_RETRY_INTERVAL
    settle_delay: float = DEFAULT_SETTLE_DELAY
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    no_cache: bool = True
    log_tail: int = DEFAULT_LOG_TAIL
    live_output: bool = False
    bootstrap_env: bool = True
    required_tools: List[str] = field(default_factory=lambda: ["docker"])

    @property
    def retry_budget(self) -> RetryBudget:
        return RetryBudget(
            max_attempts=self.max_retries,
            interval=self.retry_interval,
            settle_delay=self.settle_delay,
        )

    def resolve(self, path: Path) -> Path:
        """Resolve a relative path against the working directory."""
        path = Path(path)
        if self.workdir is not None and not path.is_absolute():
            return Path(self.workdir) / path
        return path


@dataclass
class DeploymentResult:
    """Result of a deployment run."""

    status: DeploymentStatus = DeploymentStatus.PENDING
    config: Optional[DeploymentConfig] = None
    topology: Optional[Topology] = None
    compose_command: Optional[str] = None
    health: Optional[HealthCheckOutcome] = None
    error: Optional[FlowDeployError] = None
    diagnostics: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if deployment succeeded."""
        return self.status == DeploymentStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        """Check if deployment failed."""
        return self.status == DeploymentStatus.FAILED

    @property
    def exit_code(self) -> int:
        if self.is_success:
            return 0
        if self.error is not None:
            return self.error.exit_code
        return 1

    @property
    def probe_attempts(self) -> int:
        return self.health.attempt_count if self.health else 0
