#!/usr/bin/env python3
"""
Unified error handling for flowdeploy.

Every pipeline failure is raised as a FlowDeployError subclass carrying a
category, optional context, operator suggestions and the process exit code
the CLI should terminate with. The ErrorHandler renders them as Rich panels.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class ErrorCategory(Enum):
    """High level error categories used for display and routing."""

    DEPENDENCY = "dependency"
    CONFIGURATION = "configuration"
    CREDENTIAL = "credential"
    BUILD = "build"
    LAUNCH = "launch"
    HEALTH = "health"
    RUNTIME = "runtime"


@dataclass
class ErrorContext:
    """Where an error happened."""

    operation: str
    phase: Optional[str] = None
    component: Optional[str] = None
    topology: Optional[str] = None
    file_path: Optional[str] = None
    additional_info: Optional[Dict[str, Any]] = None


def create_error_context(**kwargs) -> ErrorContext:
    """Convenience constructor for ErrorContext."""
    return ErrorContext(**kwargs)


class FlowDeployError(Exception):
    """Base class for all flowdeploy errors."""

    # Overridden by subclasses; 1 is the generic failure status
    exit_code: int = 1

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.RUNTIME,
        context: Optional[ErrorContext] = None,
        recoverable: bool = False,
        suggestions: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context
        self.recoverable = recoverable
        self.suggestions = suggestions or []
        self.cause = cause


class MissingDependencyError(FlowDeployError):
    """One or more required host tools are not installed."""

    exit_code = 3

    def __init__(self, message: str, missing: Optional[List[str]] = None, **kwargs):
        kwargs.setdefault("recoverable", True)
        super().__init__(message, ErrorCategory.DEPENDENCY, **kwargs)
        self.missing = list(missing or [])


class InvalidConfigurationError(FlowDeployError):
    """The deployment configuration is missing or malformed."""

    exit_code = 4

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.CONFIGURATION, **kwargs):
        kwargs.setdefault("recoverable", True)
        super().__init__(message, category, **kwargs)


class MissingCredentialError(InvalidConfigurationError):
    """The selected provider requires a credential that is not set."""

    exit_code = 5

    def __init__(self, message: str, variable: str, **kwargs):
        super().__init__(message, ErrorCategory.CREDENTIAL, **kwargs)
        self.variable = variable


class BuildFailedError(FlowDeployError):
    """The external build step exited with a non-zero status."""

    exit_code = 6

    def __init__(self, message: str, returncode: Optional[int] = None, **kwargs):
        super().__init__(message, ErrorCategory.BUILD, **kwargs)
        self.returncode = returncode


class LaunchFailedError(FlowDeployError):
    """The external start step exited with a non-zero status."""

    exit_code = 7

    def __init__(self, message: str, returncode: Optional[int] = None, **kwargs):
        super().__init__(message, ErrorCategory.LAUNCH, **kwargs)
        self.returncode = returncode


class HealthCheckExhaustedError(FlowDeployError):
    """The liveness probe never succeeded within the retry budget."""

    exit_code = 8

    def __init__(self, message: str, attempts: int = 0, **kwargs):
        kwargs.setdefault("recoverable", True)
        super().__init__(message, ErrorCategory.HEALTH, **kwargs)
        self.attempts = attempts


_CATEGORY_DISPLAY = {
    ErrorCategory.DEPENDENCY: ("📦", "Dependency Error"),
    ErrorCategory.CONFIGURATION: ("⚙️", "Configuration Error"),
    ErrorCategory.CREDENTIAL: ("🔑", "Credential Error"),
    ErrorCategory.BUILD: ("🔨", "Build Error"),
    ErrorCategory.LAUNCH: ("🚀", "Launch Error"),
    ErrorCategory.HEALTH: ("🩺", "Health Check Error"),
    ErrorCategory.RUNTIME: ("💥", "Runtime Error"),
}


class ErrorHandler:
    """Renders errors on a Rich console and mirrors them to logging."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def handle_error(
        self,
        error: BaseException,
        context: Optional[ErrorContext] = None,
        show_traceback: bool = False,
    ) -> None:
        """Display an error panel with context and suggestions."""
        if isinstance(error, FlowDeployError):
            emoji, title = _CATEGORY_DISPLAY[error.category]
            context = context or error.context
            suggestions = error.suggestions
        else:
            emoji, title = "💥", type(error).__name__
            suggestions = []

        body = Text(str(error), style="bold red")
        if context is not None:
            details = [
                f"{name}: {value}"
                for name, value in (
                    ("operation", context.operation),
                    ("phase", context.phase),
                    ("component", context.component),
                    ("topology", context.topology),
                    ("file", context.file_path),
                )
                if value
            ]
            if details:
                body.append("\n\n" + "\n".join(details), style="dim")
        if suggestions:
            body.append("\n\n💡 Suggestions:", style="cyan")
            for suggestion in suggestions:
                body.append(f"\n  • {suggestion}")

        self.console.print(Panel(body, title=f"{emoji} {title}", border_style="red"))
        self.logger.debug("Handled %s: %s", type(error).__name__, error)

        if show_traceback and self.verbose:
            self.console.print_exception()


_error_handler: Optional[ErrorHandler] = None


def set_error_handler(handler: Optional[ErrorHandler]) -> None:
    """Install the process-wide error handler."""
    global _error_handler
    _error_handler = handler


def get_error_handler() -> Optional[ErrorHandler]:
    """Return the process-wide error handler, if any."""
    return _error_handler


def handle_error(
    error: BaseException,
    context: Optional[ErrorContext] = None,
    show_traceback: bool = False,
) -> None:
    """Route an error to the global handler, or to logging when none is set."""
    if _error_handler is None:
        logging.error("%s: %s", type(error).__name__, error)
        return
    _error_handler.handle_error(error, context=context, show_traceback=show_traceback)
