#!/usr/bin/env python3
"""
Liveness polling for a freshly started deployment.

The poller is a small state machine: PENDING until a probe succeeds
(HEALTHY) or the retry budget is spent (FAILED). Both terminal states stop
the loop. Delays are fixed, and sleep is injectable so the loop can be driven
without real waiting.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_URL = "http://localhost:8080/health"
DEFAULT_MAX_RETRIES = 30
DEFAULT_RETRY_INTERVAL = 2.0
DEFAULT_SETTLE_DELAY = 10.0
DEFAULT_PROBE_TIMEOUT = 5.0


class HealthStatus(Enum):
    """Health check state."""

    PENDING = "pending"
    HEALTHY = "healthy"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not HealthStatus.PENDING


@dataclass(frozen=True)
class RetryBudget:
    """Fixed number of probe attempts with a fixed delay between them."""

    max_attempts: int = DEFAULT_MAX_RETRIES
    interval: float = DEFAULT_RETRY_INTERVAL
    settle_delay: float = DEFAULT_SETTLE_DELAY

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.interval < 0 or self.settle_delay < 0:
            raise ValueError("Delays must not be negative")

    @property
    def worst_case_seconds(self) -> float:
        """Upper bound on waiting time, excluding probe round trips."""
        return self.settle_delay + self.interval * (self.max_attempts - 1)


@dataclass
class ProbeResult:
    """Outcome of a single liveness probe."""

    ok: bool
    detail: str
    elapsed_ms: float = 0.0


@dataclass
class HealthCheckOutcome:
    """Final state of a polling run."""

    status: HealthStatus = HealthStatus.PENDING
    attempts: List[ProbeResult] = field(default_factory=list)
    # wall time from the start of the settle delay to the terminal state
    elapsed_seconds: float = 0.0

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    @property
    def retries(self) -> int:
        """Attempts beyond the first one."""
        return max(self.attempt_count - 1, 0)

    @property
    def is_healthy(self) -> bool:
        return self.status is HealthStatus.HEALTHY

    @property
    def last_detail(self) -> Optional[str]:
        return self.attempts[-1].detail if self.attempts else None


class HttpProbe:
    """GET a health endpoint; any status below 400 counts as alive."""

    def __init__(self, url: str = DEFAULT_HEALTH_URL, timeout: float = DEFAULT_PROBE_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def __call__(self) -> ProbeResult:
        start_time = time.monotonic()
        try:
            response = httpx.get(self.url, timeout=self.timeout)
        except httpx.TimeoutException:
            return ProbeResult(False, f"HTTP timeout after {self.timeout}s", self._elapsed(start_time))
        except httpx.ConnectError:
            return ProbeResult(False, "HTTP connection refused", self._elapsed(start_time))
        except httpx.HTTPError as e:
            return ProbeResult(False, f"HTTP error: {e}", self._elapsed(start_time))

        elapsed_ms = self._elapsed(start_time)
        if response.status_code < 400:
            return ProbeResult(True, f"HTTP {response.status_code}", elapsed_ms)
        return ProbeResult(False, f"HTTP {response.status_code}", elapsed_ms)

    @staticmethod
    def _elapsed(start_time: float) -> float:
        return (time.monotonic() - start_time) * 1000


Probe = Callable[[], ProbeResult]


class HealthPoller:
    """
    Drives a probe under a RetryBudget.

    Waits budget.settle_delay once, then probes up to budget.max_attempts
    times with budget.interval between consecutive attempts. Exceptions raised
    by the probe count as failed attempts and never leave poll().
    """

    def __init__(
        self,
        probe: Probe,
        budget: Optional[RetryBudget] = None,
        sleep: Callable[[float], None] = time.sleep,
        on_attempt: Optional[Callable[[int, ProbeResult], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.probe = probe
        self.budget = budget or RetryBudget()
        self.sleep = sleep
        self.on_attempt = on_attempt
        self.clock = clock

    def _attempt(self) -> ProbeResult:
        try:
            return self.probe()
        except Exception as e:
            logger.debug("Probe raised %s: %s", type(e).__name__, e)
            return ProbeResult(False, f"{type(e).__name__}: {e}")

    def poll(self) -> HealthCheckOutcome:
        """Run the probe loop until a terminal state is reached."""
        outcome = HealthCheckOutcome()
        budget = self.budget
        started = self.clock()

        if budget.settle_delay > 0:
            logger.debug("Waiting %.1fs for services to initialize", budget.settle_delay)
            self.sleep(budget.settle_delay)

        remaining = budget.max_attempts
        while not outcome.status.is_terminal:
            result = self._attempt()
            outcome.attempts.append(result)
            remaining -= 1
            if self.on_attempt is not None:
                self.on_attempt(outcome.attempt_count, result)

            if result.ok:
                outcome.status = HealthStatus.HEALTHY
            elif remaining == 0:
                outcome.status = HealthStatus.FAILED
            else:
                logger.debug(
                    "Probe %d/%d failed (%s), retrying in %.1fs",
                    outcome.attempt_count, budget.max_attempts, result.detail, budget.interval,
                )
                self.sleep(budget.interval)

        outcome.elapsed_seconds = self.clock() - started
        logger.debug(
            "Health check %s after %d attempt(s) in %.1fs",
            outcome.status.value, outcome.attempt_count, outcome.elapsed_seconds,
        )
        return outcome
