"""
GenerationUseCase - turns the chat state into generation jobs.

Builds a fresh GenerationJobConfig per attempt from the newest script (or an
explicit prompt) plus the reference image picked from the conversation, and
hands it to the orchestrator. Routes start the job synchronously (so a busy
orchestrator is reported immediately) and run the rest in the background.
"""

from dataclasses import dataclass
from typing import Optional

from adgen.core import get_logger
from adgen.models import (
    Attachment,
    AttachmentKind,
    GenerationJobConfig,
    ImageGenerationRequest,
    MediaKind,
    ScriptData,
    VideoGenerationRequest,
)
from adgen.services.conversation import ChatSession, select_reference, user_image
from adgen.services.conversation.reference import AttachmentPredicate
from adgen.services.generation import GenerationOrchestrator, GenerationSnapshot
from adgen.services.script import build_video_prompt, extract_script

from .base import UseCase

logger = get_logger(__name__, component="generation_use_case")


@dataclass(frozen=True)
class ScriptPreview:
    """Newest script with the prompt it would be rendered from"""
    script: ScriptData
    prompt: str
    has_reference_image: bool
    source_message_id: Optional[str] = None


@dataclass(frozen=True)
class StartedJob:
    token: int
    config: GenerationJobConfig
    snapshot: GenerationSnapshot


class GenerationUseCase(UseCase[GenerationJobConfig, GenerationSnapshot]):
    """Handle generation requests against a single orchestrator."""

    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        chat_session: ChatSession,
        reference_predicate: AttachmentPredicate = user_image,
    ):
        self.orchestrator = orchestrator
        self.chat_session = chat_session
        self._reference_predicate = reference_predicate

    # === Inputs ===

    def latest_script(self) -> Optional[ScriptData]:
        """Cached script from streaming, else the newest titled assistant message."""
        script = self.chat_session.latest_script
        if script is not None:
            return script
        return extract_script(self.chat_session.conversation.latest_script_markdown())

    def reference_image(self) -> Optional[Attachment]:
        return select_reference(self.chat_session.conversation.messages, self._reference_predicate)

    def preview_script(self) -> Optional[ScriptPreview]:
        script = self.latest_script()
        if script is None:
            return None
        return ScriptPreview(
            script=script,
            prompt=build_video_prompt(script),
            has_reference_image=self.reference_image() is not None,
            source_message_id=self.chat_session.script_message_id,
        )

    def build_video_config(self, request: VideoGenerationRequest) -> GenerationJobConfig:
        """
        Raises:
            ValueError: no explicit prompt and no script to build one from
        """
        prompt = (request.prompt or "").strip()
        if not prompt:
            script = self.latest_script()
            if script is None:
                raise ValueError("No script available yet; ask the assistant for a script first")
            prompt = build_video_prompt(script)

        config = GenerationJobConfig(
            prompt=prompt,
            aspect_ratio=request.aspect_ratio,
            resolution=request.resolution,
            kind=MediaKind.VIDEO,
        )
        if request.use_reference:
            config = config.with_reference(self.reference_image())
        return config

    def build_image_config(self, request: ImageGenerationRequest) -> GenerationJobConfig:
        prompt = (request.prompt or "").strip()
        if not prompt:
            raise ValueError("An image prompt is required")

        reference = None
        if request.attachment is not None:
            reference = request.attachment.to_attachment()
            if reference.kind is not AttachmentKind.IMAGE:
                raise ValueError("Only images can be edited")
        elif request.use_reference:
            reference = self.reference_image()
            if reference is None:
                raise ValueError("No uploaded image to edit")

        return GenerationJobConfig(
            prompt=prompt,
            aspect_ratio=request.aspect_ratio,
            reference=reference,
            kind=MediaKind.IMAGE,
        )

    # === Execution ===

    def start(self, config: GenerationJobConfig) -> StartedJob:
        """Claim the orchestrator; raises GenerationBusyError while a job is in flight."""
        token = self.orchestrator.start(config)
        return StartedJob(token=token, config=config, snapshot=self.orchestrator.snapshot())

    async def run(self, job: StartedJob) -> GenerationSnapshot:
        snapshot = await self.orchestrator.run(job.token, job.config)
        logger.info("Generation attempt finished", extra={
            "attempt": job.token,
            "status": snapshot.status.value,
            "error_kind": snapshot.error_kind.value if snapshot.error_kind else None,
        })
        return snapshot

    async def execute(self, request: GenerationJobConfig) -> GenerationSnapshot:
        return await self.run(self.start(request))
