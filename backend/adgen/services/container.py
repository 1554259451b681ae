"""
Studio container - wires the chat session, auth gate and orchestrator.

One Studio serves one user session; it lives on `app.state.studio`.
"""

from dataclasses import dataclass
from typing import Optional

from adgen.core import get_logger
from adgen.services.conversation import ChatSession
from adgen.services.generation import GenerationOrchestrator, PollPolicy
from adgen.services.infrastructure.auth import ApiKeyAuthGate
from adgen.services.infrastructure.llm.gemini import (
    GeminiChatClient,
    GeminiClientProvider,
    GeminiImageJobClient,
    GeminiVideoJobClient,
)
from adgen.services.use_cases import GenerationUseCase

logger = get_logger(__name__, component="studio")


@dataclass
class Studio:
    auth_gate: ApiKeyAuthGate
    chat_session: ChatSession
    orchestrator: GenerationOrchestrator
    generation: GenerationUseCase


def build_studio(
    auth_gate: Optional[ApiKeyAuthGate] = None,
    provider: Optional[GeminiClientProvider] = None,
    poll_policy: Optional[PollPolicy] = None,
) -> Studio:
    """Build a Studio from `adgen.config`, with optional overrides."""
    from adgen import config

    auth_gate = auth_gate or ApiKeyAuthGate(
        configured_key=config.GEMINI_API_KEY,
        use_vertex_ai=config.USE_VERTEX_AI,
    )
    provider = provider or GeminiClientProvider(
        api_key_source=auth_gate.current_key,
        use_vertex_ai=config.USE_VERTEX_AI,
        project=config.GCP_PROJECT_ID,
        location=config.GCP_LOCATION,
    )

    chat_session = ChatSession(GeminiChatClient(provider))
    orchestrator = GenerationOrchestrator(
        auth_gate,
        GeminiVideoJobClient(provider),
        GeminiImageJobClient(provider),
        poll_policy=poll_policy or PollPolicy.from_config(),
        auth_fail_open=config.AUTH_CHECK_FAIL_OPEN,
    )

    logger.info("Studio ready", extra={
        "use_vertex_ai": config.USE_VERTEX_AI,
        "models": config.list_models(),
        "auth_fail_open": config.AUTH_CHECK_FAIL_OPEN,
    })
    return Studio(
        auth_gate=auth_gate,
        chat_session=chat_session,
        orchestrator=orchestrator,
        generation=GenerationUseCase(orchestrator, chat_session),
    )
