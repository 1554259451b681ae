"""
Gemini media job clients

`GeminiVideoJobClient` wraps Veo's long-running operation: `generate_videos`
returns an operation that is refreshed with `operations.get` until done.

`GeminiImageJobClient` produces images with a single `generate_content`
call. It exposes the same submit/poll surface so the orchestrator can drive
both; its jobs are already finished when `submit` returns.
"""

import asyncio
import base64
import uuid
from dataclasses import replace
from typing import Any, Optional

from google.genai import types

from adgen.config.models import IMAGE_MODEL, VIDEO_MODEL, ModelConfig
from adgen.core import (
    get_logger,
    LogTimer,
    SubmissionFailedError,
    TransientPollError,
)
from adgen.models import ErrorKind, GenerationJobConfig, MediaKind
from adgen.services.generation.ports import JobHandle, MediaJobClient, PollResult

from .client import AUTH_ERROR_MARKER, GeminiClientProvider, classify_error

logger = get_logger(__name__, component="gemini_media")

DEFAULT_OPERATION_ERROR = "Video generation failed"


def _with_api_key(uri: str, api_key: Optional[str]) -> str:
    """Download links for generated files need the key as a query parameter."""
    if not api_key:
        return uri
    separator = "&" if "?" in uri else "?"
    return f"{uri}{separator}key={api_key}"


def _operation_error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or DEFAULT_OPERATION_ERROR)
    return str(getattr(error, "message", None) or error or DEFAULT_OPERATION_ERROR)


def _first_video_uri(response: Any) -> Optional[str]:
    videos = getattr(response, "generated_videos", None) if response is not None else None
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) if video is not None else None


class GeminiVideoJobClient(MediaJobClient):
    """Veo text-to-video and image-to-video."""

    kind = MediaKind.VIDEO

    def __init__(self, provider: GeminiClientProvider, model: ModelConfig = VIDEO_MODEL):
        self._provider = provider
        self._model = model

    async def submit(self, config: GenerationJobConfig) -> JobHandle:
        client = self._provider.get()
        kwargs = {
            "model": self._model.model_name,
            "prompt": config.prompt,
            "config": types.GenerateVideosConfig(
                number_of_videos=1,
                resolution=config.resolution,
                aspect_ratio=config.aspect_ratio,
            ),
        }
        if config.reference is not None:
            kwargs["image"] = types.Image(
                image_bytes=config.reference.decode(),
                mime_type=config.reference.mime_type,
            )

        try:
            operation = await asyncio.to_thread(client.models.generate_videos, **kwargs)
        except Exception as e:
            raise classify_error(e, SubmissionFailedError) from e

        operation_id = getattr(operation, "name", None) or uuid.uuid4().hex
        logger.info("Video operation started", extra={
            "model": self._model.model_name,
            "operation": operation_id,
            "image_to_video": config.reference is not None,
        })
        return JobHandle(id=operation_id, kind=MediaKind.VIDEO, operation=operation)

    async def poll(self, handle: JobHandle) -> PollResult:
        operation = handle.operation
        if not getattr(operation, "done", False):
            client = self._provider.get()
            try:
                operation = await asyncio.to_thread(client.operations.get, operation)
            except Exception as e:
                # The operation itself only fails through `operation.error`
                raise classify_error(e, TransientPollError) from e

        handle = replace(handle, operation=operation)
        if not getattr(operation, "done", False):
            return PollResult.pending(handle)

        error = getattr(operation, "error", None)
        if error:
            message = _operation_error_message(error)
            kind = ErrorKind.AUTH_REQUIRED if AUTH_ERROR_MARKER in message else ErrorKind.POLLING_FAILED
            return PollResult.failed(message, kind)

        uri = _first_video_uri(getattr(operation, "response", None))
        if not uri:
            # Orchestrator reports done-without-result as a polling failure
            return PollResult(done=True, handle=handle)
        return PollResult.succeeded(_with_api_key(uri, self._provider.api_key))


class GeminiImageJobClient(MediaJobClient):
    """Image generation, or editing when the config carries a reference image."""

    kind = MediaKind.IMAGE

    def __init__(self, provider: GeminiClientProvider, model: ModelConfig = IMAGE_MODEL):
        self._provider = provider
        self._model = model

    def _generate(self, client, config: GenerationJobConfig) -> Optional[str]:
        contents = []
        if config.reference is not None:
            contents.append(types.Part.from_bytes(
                data=config.reference.decode(),
                mime_type=config.reference.mime_type,
            ))
        contents.append(config.prompt)

        response = client.models.generate_content(
            model=self._model.model_name,
            contents=contents,
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE"],
                image_config=types.ImageConfig(aspect_ratio=config.aspect_ratio),
            ),
        )

        candidates = getattr(response, "candidates", None) or []
        if candidates and candidates[0].content and candidates[0].content.parts:
            for part in candidates[0].content.parts:
                if part.inline_data is not None and part.inline_data.data:
                    encoded = base64.b64encode(part.inline_data.data).decode("ascii")
                    mime_type = part.inline_data.mime_type or "image/png"
                    return f"data:{mime_type};base64,{encoded}"
        return None

    async def submit(self, config: GenerationJobConfig) -> JobHandle:
        client = self._provider.get()
        try:
            with LogTimer(logger, "image generation"):
                data_uri = await asyncio.to_thread(self._generate, client, config)
        except Exception as e:
            raise classify_error(e, SubmissionFailedError) from e

        if data_uri is None:
            raise SubmissionFailedError("No image generated; the response contained no image parts")
        return JobHandle(id=uuid.uuid4().hex, kind=MediaKind.IMAGE, operation=data_uri)

    async def poll(self, handle: JobHandle) -> PollResult:
        return PollResult.succeeded(handle.operation)
