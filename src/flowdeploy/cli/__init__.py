#!/usr/bin/env python3
"""
CLI Package for flowdeploy

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .app import app, cli_main
from .constants import ExitCode, VALID_PROVIDERS
from .constants import (
    DEFAULT_ENV_FILE,
    DEFAULT_ENV_TEMPLATE,
    DEFAULT_HEALTH_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_SETTLE_DELAY,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_LOG_TAIL,
)
from .utils import setup_logging, save_summary_with_feedback

__all__ = [
    "app",
    "cli_main",
    "ExitCode",
    "VALID_PROVIDERS",
    "DEFAULT_ENV_FILE",
    "DEFAULT_ENV_TEMPLATE",
    "DEFAULT_HEALTH_URL",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_INTERVAL",
    "DEFAULT_SETTLE_DELAY",
    "DEFAULT_PROBE_TIMEOUT",
    "DEFAULT_LOG_TAIL",
    "setup_logging",
    "save_summary_with_feedback",
]
