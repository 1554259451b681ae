"""
Generation Orchestrator - single-job state machine

    idle -> checking-auth -> generating -> polling -> completed
                  |               |           |
                  +---> idle      +-> error <-+
                  (access denied)

Exactly one job is tracked per orchestrator. A request while a job is in
flight is refused. `reset()` is always allowed: it drops the result and
abandons (does not cancel) any remote job. Every attempt gets a token, and
work belonging to an older token can no longer change the state.
"""

import asyncio
import threading
import time
from dataclasses import dataclass, asdict
from typing import Awaitable, Callable, Dict, Optional, Set

from adgen.core import (
    get_logger,
    set_job_id,
    AuthRequiredError,
    GenerationBusyError,
    GenerationError,
    InvalidTransitionError,
    TransientPollError,
)
from adgen.models import ErrorKind, GenerationJobConfig, GenerationStatus, MediaKind, can_transition

from .poll_policy import PollPolicy
from .ports import AuthGate, JobHandle, MediaJobClient, PollResult

logger = get_logger(__name__, component="generation_orchestrator")

AUTH_FAILED_MESSAGE = "Authentication failed. Please select a valid API Key."
GENERIC_FAILURE_MESSAGE = "Video generation failed. The model might be busy or the prompt triggered a safety filter."
NO_RESULT_MESSAGE = "No video URI returned"


@dataclass(frozen=True)
class GenerationSnapshot:
    """Read-only view of the orchestrator state"""
    status: GenerationStatus
    kind: Optional[MediaKind] = None
    result_uri: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    auth_prompt_requested: bool = False
    updated_at: float = 0.0

    @property
    def is_busy(self) -> bool:
        return self.status.is_busy()

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        data["kind"] = self.kind.value if self.kind else None
        data["error_kind"] = self.error_kind.value if self.error_kind else None
        return data


class GenerationOrchestrator:
    """Drive one generation job through auth, submit and poll."""

    def __init__(
        self,
        auth_gate: AuthGate,
        *clients: MediaJobClient,
        poll_policy: Optional[PollPolicy] = None,
        auth_fail_open: bool = True,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        if not clients:
            raise ValueError("At least one media client is required")
        self._auth_gate = auth_gate
        self._clients: Dict[MediaKind, MediaJobClient] = {client.kind: client for client in clients}
        self._poll_policy = poll_policy or PollPolicy()
        self._auth_fail_open = auth_fail_open
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic

        self._lock = threading.RLock()
        self._attempt = 0
        self._status = GenerationStatus.IDLE
        self._kind: Optional[MediaKind] = None
        self._result_uri: Optional[str] = None
        self._error_kind: Optional[ErrorKind] = None
        self._error_message: Optional[str] = None
        self._auth_prompt_requested = False
        self._updated_at = time.time()
        self._background_tasks: Set[asyncio.Task] = set()

    # === Read side ===

    @property
    def status(self) -> GenerationStatus:
        with self._lock:
            return self._status

    def supports(self, kind: MediaKind) -> bool:
        return kind in self._clients

    def snapshot(self) -> GenerationSnapshot:
        with self._lock:
            return GenerationSnapshot(
                status=self._status,
                kind=self._kind,
                result_uri=self._result_uri,
                error_kind=self._error_kind,
                error_message=self._error_message,
                auth_prompt_requested=self._auth_prompt_requested,
                updated_at=self._updated_at,
            )

    # === Commands ===

    def start(self, config: GenerationJobConfig) -> int:
        """
        Claim the orchestrator for a new attempt and enter checking-auth.

        The busy check and the state change happen under one lock, so of two
        racing requests only one gets a token.

        Returns:
            Attempt token to pass to `run`.

        Raises:
            GenerationBusyError: a job is already in flight
        """
        if not self.supports(config.kind):
            raise ValueError(f"No media client registered for {config.kind.value} jobs")

        with self._lock:
            if self._status.is_busy():
                raise GenerationBusyError(f"Generation already in progress ({self._status.value})")
            self._attempt += 1
            token = self._attempt
            self._kind = config.kind
            self._result_uri = None
            self._error_kind = None
            self._error_message = None
            self._auth_prompt_requested = False
            self._transition(token, GenerationStatus.CHECKING_AUTH)

        logger.info("Generation requested", extra={"attempt": token, **config.describe()})
        return token

    async def run(self, token: int, config: GenerationJobConfig) -> GenerationSnapshot:
        """Carry a started attempt through to a terminal state (or abandonment)."""
        if not await self._check_access(token):
            return self.snapshot()

        if not self._transition(token, GenerationStatus.GENERATING):
            return self.snapshot()

        client = self._clients[config.kind]
        handle = await self._submit(token, client, config)
        if handle is None:
            return self.snapshot()

        set_job_id(handle.id)
        try:
            if self._transition(token, GenerationStatus.POLLING):
                await self._poll_until_done(token, client, handle)
        finally:
            set_job_id(None)
        return self.snapshot()

    async def request_generation(self, config: GenerationJobConfig) -> GenerationSnapshot:
        """Start and run a generation attempt, returning the final snapshot."""
        token = self.start(config)
        return await self.run(token, config)

    def reset(self) -> GenerationSnapshot:
        """Return to idle from any state, abandoning the current attempt."""
        with self._lock:
            previous = self._status
            self._attempt += 1
            self._status = GenerationStatus.IDLE
            self._kind = None
            self._result_uri = None
            self._error_kind = None
            self._error_message = None
            self._auth_prompt_requested = False
            self._updated_at = time.time()
        if previous.is_busy():
            logger.info("Generation reset; in-flight job abandoned", extra={"previous_status": previous.value})
        return self.snapshot()

    # === Flow steps ===

    async def _check_access(self, token: int) -> bool:
        try:
            granted = await self._auth_gate.check()
        except Exception as e:
            if self._auth_fail_open:
                logger.warning(
                    "Access check failed; assuming access is granted",
                    extra={"error": str(e)},
                )
                return True
            logger.error("Access check failed", extra={"error": str(e)})
            self._fail(token, ErrorKind.AUTH_REQUIRED, AUTH_FAILED_MESSAGE)
            return False

        if granted:
            return True

        logger.info("Access not granted; returning to idle")
        if self._transition(token, GenerationStatus.IDLE):
            self._request_auth_prompt()
        return False

    async def _submit(
        self,
        token: int,
        client: MediaJobClient,
        config: GenerationJobConfig,
    ) -> Optional[JobHandle]:
        try:
            handle = await client.submit(config)
        except AuthRequiredError as e:
            logger.warning("Submission rejected credentials", extra={"error": str(e)})
            self._fail_auth(token)
            return None
        except GenerationError as e:
            logger.error("Submission failed", extra={"error": str(e), "error_kind": e.kind.value})
            self._fail(token, e.kind, e.message or GENERIC_FAILURE_MESSAGE)
            return None
        except Exception as e:
            logger.error("Submission failed", extra={"error": str(e)}, exc_info=True)
            self._fail(token, ErrorKind.SUBMISSION_FAILED, str(e) or GENERIC_FAILURE_MESSAGE)
            return None

        logger.info("Job submitted", extra={"attempt": token, "remote_job": handle.id})
        return handle

    async def _poll_until_done(self, token: int, client: MediaJobClient, handle: JobHandle) -> None:
        policy = self._poll_policy
        started = self._clock()
        failures = 0
        first = True

        while True:
            if not first:
                await self._sleep(policy.delay_for(failures))
                if not self._is_current(token):
                    logger.info("Polling stopped for abandoned attempt", extra={"attempt": token})
                    return
                if self._clock() - started >= policy.timeout:
                    logger.error("Job timed out", extra={"timeout_seconds": policy.timeout})
                    self._fail(
                        token,
                        ErrorKind.TIMEOUT,
                        f"Generation did not finish within {int(policy.timeout)} seconds",
                    )
                    return
            first = False

            try:
                result = await client.poll(handle)
            except AuthRequiredError as e:
                logger.warning("Poll rejected credentials", extra={"error": str(e)})
                self._fail_auth(token)
                return
            except GenerationError as e:
                if not isinstance(e, TransientPollError):
                    logger.error("Polling failed", extra={"error": str(e), "error_kind": e.kind.value})
                    self._fail(token, e.kind, e.message or GENERIC_FAILURE_MESSAGE)
                    return
                failures += 1
                error = e
            except Exception as e:
                failures += 1
                error = e
            else:
                failures = 0
                error = None

            if error is not None:
                if policy.retries_exhausted(failures):
                    logger.error(
                        "Giving up after repeated poll failures",
                        extra={"failures": failures, "error": str(error)},
                    )
                    self._fail(
                        token,
                        ErrorKind.TRANSIENT_POLL_ERROR,
                        f"Lost contact with the generation service: {error}",
                    )
                    return
                logger.warning("Transient poll failure; retrying", extra={"failures": failures, "error": str(error)})
                continue

            if not self._is_current(token):
                logger.info("Discarding poll result for abandoned attempt", extra={"attempt": token})
                return

            if result.handle is not None:
                handle = result.handle
            if not result.done:
                logger.debug("Job still running", extra={"remote_job": handle.id})
                continue

            self._finish(token, result)
            return

    def _finish(self, token: int, result: PollResult) -> None:
        if result.error_kind is ErrorKind.AUTH_REQUIRED:
            self._fail_auth(token)
        elif result.error_kind is not None:
            logger.error("Job failed", extra={"error": result.error_message, "error_kind": result.error_kind.value})
            self._fail(token, result.error_kind, result.error_message or GENERIC_FAILURE_MESSAGE)
        elif not result.result_uri:
            self._fail(token, ErrorKind.POLLING_FAILED, NO_RESULT_MESSAGE)
        else:
            with self._lock:
                if self._transition(token, GenerationStatus.COMPLETED):
                    self._result_uri = result.result_uri
            logger.info("Job completed", extra={"attempt": token})

    # === State helpers ===

    def _is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._attempt

    def _transition(self, token: int, target: GenerationStatus) -> bool:
        """Move to `target` on behalf of attempt `token`.

        Returns False (and changes nothing) when the attempt is stale.
        """
        with self._lock:
            if token != self._attempt:
                return False
            if not can_transition(self._status, target):
                raise InvalidTransitionError(f"Cannot go from {self._status.value} to {target.value}")
            logger.debug("Status change", extra={"from": self._status.value, "to": target.value})
            self._status = target
            self._updated_at = time.time()
            return True

    def _fail(self, token: int, kind: ErrorKind, message: str) -> None:
        with self._lock:
            if self._transition(token, GenerationStatus.ERROR):
                self._error_kind = kind
                self._error_message = message

    def _fail_auth(self, token: int) -> None:
        with self._lock:
            current = token == self._attempt
            self._fail(token, ErrorKind.AUTH_REQUIRED, AUTH_FAILED_MESSAGE)
        if current:
            self._request_auth_prompt()

    def _request_auth_prompt(self) -> None:
        """Fire-and-forget `prompt_interactive`; its outcome is only logged."""
        with self._lock:
            self._auth_prompt_requested = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self._auth_gate.prompt_interactive())
        self._background_tasks.add(task)
        task.add_done_callback(self._on_prompt_done)

    def _on_prompt_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Interactive credential prompt failed", extra={"error": str(error)})
