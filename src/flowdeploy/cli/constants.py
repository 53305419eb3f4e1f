#!/usr/bin/env python3
"""
Constants and configuration for flowdeploy CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from flowdeploy.core.compose import DEFAULT_LOG_TAIL
from flowdeploy.core.errors import (
    BuildFailedError,
    HealthCheckExhaustedError,
    InvalidConfigurationError,
    LaunchFailedError,
    MissingCredentialError,
    MissingDependencyError,
)
from flowdeploy.deployment.config import DEFAULT_ENV_FILE, DEFAULT_ENV_TEMPLATE, Provider
from flowdeploy.deployment.health import (
    DEFAULT_HEALTH_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_SETTLE_DELAY,
)


# Exit codes
class ExitCode:
    """Exit codes for CLI commands."""

    SUCCESS = 0
    FAILURE = 1
    INVALID_ARGS = 2
    MISSING_DEPENDENCY = MissingDependencyError.exit_code
    INVALID_CONFIGURATION = InvalidConfigurationError.exit_code
    MISSING_CREDENTIAL = MissingCredentialError.exit_code
    BUILD_FAILURE = BuildFailedError.exit_code
    LAUNCH_FAILURE = LaunchFailedError.exit_code
    HEALTH_CHECK_FAILURE = HealthCheckExhaustedError.exit_code


# Valid values for validation
VALID_PROVIDERS = Provider.values()
