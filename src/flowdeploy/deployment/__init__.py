"""
Deployment layer for compose-based service bring-up.

Architecture:
- prerequisites: host tool checks and compose command resolution
- config: env-file loading and provider credential validation
- topology: operator menu mapped onto compose targets
- launcher: build-then-start of the selected target
- health: bounded liveness polling

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .base import DeploymentResult, DeploymentStatus, DeployOptions
from .config import DeploymentConfig, Provider, load_env_file, validate_config
from .health import HealthCheckOutcome, HealthPoller, HealthStatus, HttpProbe, RetryBudget
from .topology import Topology, select_topology

__all__ = [
    "DeploymentResult",
    "DeploymentStatus",
    "DeployOptions",
    "DeploymentConfig",
    "Provider",
    "load_env_file",
    "validate_config",
    "HealthCheckOutcome",
    "HealthPoller",
    "HealthStatus",
    "HttpProbe",
    "RetryBudget",
    "Topology",
    "select_topology",
]
