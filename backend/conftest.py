from typing import Iterable, List, Optional

import pytest

from adgen.models import GenerationJobConfig, MediaKind
from adgen.services.generation import (
    AuthGate,
    ChatClient,
    GenerationOrchestrator,
    JobHandle,
    MediaJobClient,
    PollPolicy,
    PollResult,
)


@pytest.fixture(autouse=True)
def mock_cloud_env(monkeypatch):
    """Automatically mock cloud environment variables for all tests"""
    monkeypatch.setenv("GEMINI_API_KEY", "mock-key")
    monkeypatch.setenv("USE_VERTEX_AI", "false")


class FakeAuthGate(AuthGate):
    """Access gate with a fixed answer that records its calls"""

    def __init__(self, granted: bool = True, error: Optional[Exception] = None):
        self.granted = granted
        self.error = error
        self.check_calls = 0
        self.prompt_calls = 0

    async def check(self) -> bool:
        self.check_calls += 1
        if self.error is not None:
            raise self.error
        return self.granted

    async def prompt_interactive(self) -> None:
        self.prompt_calls += 1


class ScriptedMediaClient(MediaJobClient):
    """
    Media client that replays scripted poll outcomes.

    Each outcome is a PollResult to return or an exception to raise. Once the
    script runs out every poll reports the job as still running.
    """

    def __init__(
        self,
        poll_outcomes: Iterable = (),
        kind: MediaKind = MediaKind.VIDEO,
        submit_error: Optional[Exception] = None,
        on_poll=None,
    ):
        self.kind = kind
        self.submit_error = submit_error
        self.on_poll = on_poll
        self.submitted: List[GenerationJobConfig] = []
        self.polled: List[JobHandle] = []
        self._outcomes = list(poll_outcomes)

    async def submit(self, config: GenerationJobConfig) -> JobHandle:
        self.submitted.append(config)
        if self.submit_error is not None:
            raise self.submit_error
        return JobHandle(id=f"{self.kind.value}-job-{len(self.submitted)}", kind=self.kind)

    async def poll(self, handle: JobHandle) -> PollResult:
        self.polled.append(handle)
        if self.on_poll is not None:
            self.on_poll(len(self.polled))
        outcome = self._outcomes.pop(0) if self._outcomes else PollResult.pending()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeChatClient(ChatClient):
    """Chat client that streams canned chunks, optionally failing afterwards"""

    def __init__(self, chunks: Iterable[str] = (), error: Optional[Exception] = None):
        self.chunks = list(chunks)
        self.error = error
        self.calls = []

    async def stream_reply(self, text, attachment=None):
        self.calls.append((text, attachment))
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


class FakeClock:
    """Monotonic clock advanced only by the injected sleep"""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_orchestrator(fake_clock):
    """Factory for orchestrators running on the fake clock"""

    def _make(
        auth_gate: Optional[AuthGate] = None,
        *clients: MediaJobClient,
        poll_policy: Optional[PollPolicy] = None,
        auth_fail_open: bool = True,
    ) -> GenerationOrchestrator:
        return GenerationOrchestrator(
            auth_gate or FakeAuthGate(),
            *(clients or (ScriptedMediaClient(),)),
            poll_policy=poll_policy or PollPolicy(),
            auth_fail_open=auth_fail_open,
            sleep=fake_clock.sleep,
            clock=fake_clock,
        )

    return _make


@pytest.fixture
def video_config():
    return GenerationJobConfig(prompt="Style: Neon. Scene 1 (Hook): A shoe lands", aspect_ratio="9:16")


@pytest.fixture
def fakes():
    """Access to the fake collaborator classes"""

    class _Fakes:
        AuthGate = FakeAuthGate
        MediaClient = ScriptedMediaClient
        ChatClient = FakeChatClient

    return _Fakes
