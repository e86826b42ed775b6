"""
RetryExecutor - Runs one logical call with bounded retries and exponential backoff.

States:
- IDLE: Created, nothing attempted yet
- ATTEMPTING: Operation in flight
- BACKING_OFF: Waiting before the next attempt
- SUCCEEDED: Operation returned a value (terminal)
- FAILED: Fatal error or retry budget exhausted (terminal)

Transitions:
- IDLE → ATTEMPTING: On run()
- ATTEMPTING → SUCCEEDED: Operation returned
- ATTEMPTING → BACKING_OFF: Transient failure and retries remain
- ATTEMPTING → FAILED: Fatal failure, or transient failure with no retries left
- BACKING_OFF → ATTEMPTING: After base_delay * 2 ** (attempt - 1) seconds
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from loguru import logger

from tourclient.services.classifier import FaultKind, classify_error

T = TypeVar("T")


class RetryPhase(str, Enum):
    """Retry executor states."""

    IDLE = "IDLE"
    ATTEMPTING = "ATTEMPTING"
    BACKING_OFF = "BACKING_OFF"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


TERMINAL_PHASES = frozenset({RetryPhase.SUCCEEDED, RetryPhase.FAILED})


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry behaviour."""

    max_retries: int = 3  # Retries after the first attempt
    base_delay: float = 1.0  # Seconds before the first retry

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Delay before the retry that follows the given (1-based) attempt."""
        return self.base_delay * (2 ** (attempt - 1))

    def worst_case_delay(self) -> float:
        """Total sleep time when every retry is used."""
        return self.base_delay * (2**self.max_retries - 1)


@dataclass
class RetryState(Generic[T]):
    """Call-local progress of a single run()."""

    phase: RetryPhase = RetryPhase.IDLE
    attempt: int = 0
    last_error: Exception | None = None
    result: T | None = None
    delays: list[float] = field(default_factory=list)


Sleeper = Callable[[float], Awaitable[Any]]
Classifier = Callable[[BaseException], FaultKind]


class RetryExecutor:
    """
    Executes an async operation, retrying transient failures.

    The executor keeps no per-call state; every run() gets a fresh RetryState,
    so one executor can serve any number of concurrent calls.

    Usage:
        executor = RetryExecutor(RetryPolicy(max_retries=3, base_delay=1.0))
        data = await executor.run(lambda: client.get_json(request))
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        classify: Classifier = classify_error,
        sleep: Sleeper = asyncio.sleep,
        name: str = "request",
    ):
        self.policy = policy or RetryPolicy()
        self._classify = classify
        self._sleep = sleep
        self.name = name

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        name: str | None = None,
    ) -> T:
        """Run operation to a terminal state; return its value or raise its last error."""
        state: RetryState[T] = RetryState()
        label = name or self.name

        self._transition(state, RetryPhase.ATTEMPTING, label)
        while state.phase not in TERMINAL_PHASES:
            if state.phase == RetryPhase.ATTEMPTING:
                await self._attempt(state, operation, label)
            elif state.phase == RetryPhase.BACKING_OFF:
                await self._back_off(state, label)

        # FAILED is only entered through _fail, which records the error
        if state.phase == RetryPhase.FAILED and state.last_error is not None:
            raise state.last_error
        return state.result  # type: ignore[return-value]

    async def _attempt(
        self,
        state: RetryState[T],
        operation: Callable[[], Awaitable[T]],
        label: str,
    ) -> None:
        state.attempt += 1
        # CancelledError is a BaseException and passes straight through
        try:
            state.result = await operation()
        except Exception as e:
            kind = self._classify(e)

            if kind == FaultKind.FATAL:
                logger.error(f"[{label}] fatal error on attempt {state.attempt}: {e}")
                self._fail(state, e, label)
            elif state.attempt >= self.policy.max_attempts:
                logger.error(
                    f"[{label}] giving up after {state.attempt} attempts: {e}"
                )
                self._fail(state, e, label)
            else:
                logger.warning(
                    f"[{label}] transient error on attempt "
                    f"{state.attempt}/{self.policy.max_attempts}: {e}"
                )
                state.last_error = e
                self._transition(state, RetryPhase.BACKING_OFF, label)
            return

        if state.attempt > 1:
            logger.info(f"[{label}] succeeded on attempt {state.attempt}")
        self._transition(state, RetryPhase.SUCCEEDED, label)

    async def _back_off(self, state: RetryState[T], label: str) -> None:
        delay = self.policy.delay_for(state.attempt)
        state.delays.append(delay)
        logger.debug(f"[{label}] backing off {delay:.2f}s before retry")
        await self._sleep(delay)
        self._transition(state, RetryPhase.ATTEMPTING, label)

    def _fail(self, state: RetryState[T], error: Exception, label: str) -> None:
        state.last_error = error
        self._transition(state, RetryPhase.FAILED, label)

    def _transition(self, state: RetryState[T], phase: RetryPhase, label: str) -> None:
        logger.trace(f"[{label}] {state.phase.value} -> {phase.value}")
        state.phase = phase
