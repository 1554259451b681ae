"""
Tests for services/infrastructure/llm/gemini/media

The genai client is a MagicMock; operations are plain namespaces shaped like
the SDK objects.
"""

import base64
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from google.genai import errors

from adgen.core import AuthRequiredError, SubmissionFailedError, TransientPollError
from adgen.models import Attachment, AttachmentKind, ErrorKind, GenerationJobConfig, MediaKind
from adgen.services.generation import JobHandle
from adgen.services.infrastructure.llm.gemini import (
    GeminiClientProvider,
    GeminiImageJobClient,
    GeminiVideoJobClient,
)


def _operation(done=False, uri=None, error=None, name="operations/veo-123"):
    response = None
    if uri is not None:
        response = SimpleNamespace(generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri))])
    return SimpleNamespace(name=name, done=done, error=error, response=response)


@pytest.fixture
def genai_client():
    return MagicMock()


@pytest.fixture
def provider(genai_client):
    return GeminiClientProvider(api_key_source=lambda: "test-key", client=genai_client)


class TestVideoSubmit:
    """Test suite for GeminiVideoJobClient.submit"""

    @pytest.mark.asyncio
    async def test_text_to_video(self, provider, genai_client):
        genai_client.models.generate_videos.return_value = _operation()
        client = GeminiVideoJobClient(provider)
        config = GenerationJobConfig(prompt="A shoe lands", aspect_ratio="16:9", resolution="1080p")

        handle = await client.submit(config)

        assert handle.id == "operations/veo-123"
        assert handle.kind is MediaKind.VIDEO
        kwargs = genai_client.models.generate_videos.call_args.kwargs
        assert kwargs["model"] == "veo-3.1-fast-generate-preview"
        assert kwargs["prompt"] == "A shoe lands"
        assert kwargs["config"].number_of_videos == 1
        assert kwargs["config"].aspect_ratio == "16:9"
        assert kwargs["config"].resolution == "1080p"
        assert "image" not in kwargs

    @pytest.mark.asyncio
    async def test_image_to_video(self, provider, genai_client):
        genai_client.models.generate_videos.return_value = _operation()
        reference = Attachment(
            kind=AttachmentKind.IMAGE,
            mime_type="image/png",
            data=base64.b64encode(b"png-bytes").decode(),
        )
        config = GenerationJobConfig(prompt="Animate it", reference=reference)

        await GeminiVideoJobClient(provider).submit(config)

        image = genai_client.models.generate_videos.call_args.kwargs["image"]
        assert image.image_bytes == b"png-bytes"
        assert image.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_auth_error_is_classified(self, provider, genai_client):
        genai_client.models.generate_videos.side_effect = RuntimeError("404 Requested entity was not found.")

        with pytest.raises(AuthRequiredError):
            await GeminiVideoJobClient(provider).submit(GenerationJobConfig(prompt="x"))

    @pytest.mark.asyncio
    async def test_other_errors_are_submission_failures(self, provider, genai_client):
        genai_client.models.generate_videos.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(SubmissionFailedError, match="quota exceeded"):
            await GeminiVideoJobClient(provider).submit(GenerationJobConfig(prompt="x"))

    @pytest.mark.asyncio
    async def test_missing_key_requires_auth(self):
        provider = GeminiClientProvider(api_key_source=lambda: None)

        with pytest.raises(AuthRequiredError):
            await GeminiVideoJobClient(provider).submit(GenerationJobConfig(prompt="x"))


class TestVideoPoll:
    """Test suite for GeminiVideoJobClient.poll"""

    @pytest.mark.asyncio
    async def test_still_running(self, provider, genai_client):
        refreshed = _operation(done=False)
        genai_client.operations.get.return_value = refreshed
        handle = JobHandle(id="op", operation=_operation())

        result = await GeminiVideoJobClient(provider).poll(handle)

        assert result.done is False
        assert result.handle.operation is refreshed

    @pytest.mark.asyncio
    async def test_success_appends_key(self, provider, genai_client):
        genai_client.operations.get.return_value = _operation(done=True, uri="https://files/v.mp4")

        result = await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))

        assert result.done is True
        assert result.result_uri == "https://files/v.mp4?key=test-key"

    @pytest.mark.asyncio
    async def test_existing_query_uses_ampersand(self, provider, genai_client):
        genai_client.operations.get.return_value = _operation(done=True, uri="https://files/v?alt=media")

        result = await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))

        assert result.result_uri == "https://files/v?alt=media&key=test-key"

    @pytest.mark.asyncio
    async def test_done_operation_is_not_refetched(self, provider, genai_client):
        handle = JobHandle(id="op", operation=_operation(done=True, uri="https://files/v.mp4"))

        result = await GeminiVideoJobClient(provider).poll(handle)

        assert result.done is True
        genai_client.operations.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_operation_error(self, provider, genai_client):
        genai_client.operations.get.return_value = _operation(done=True, error={"message": "Safety filter"})

        result = await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))

        assert result.error_kind is ErrorKind.POLLING_FAILED
        assert result.error_message == "Safety filter"

    @pytest.mark.asyncio
    async def test_operation_auth_error(self, provider, genai_client):
        genai_client.operations.get.return_value = _operation(
            done=True, error={"message": "Requested entity was not found."}
        )

        result = await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))

        assert result.error_kind is ErrorKind.AUTH_REQUIRED

    @pytest.mark.asyncio
    async def test_done_without_videos(self, provider, genai_client):
        genai_client.operations.get.return_value = _operation(done=True)

        result = await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))

        assert result.done is True
        assert result.result_uri is None
        assert result.error_kind is None

    @pytest.mark.asyncio
    async def test_transport_error_is_transient(self, provider, genai_client):
        genai_client.operations.get.side_effect = ConnectionError("reset")

        with pytest.raises(TransientPollError):
            await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))

    @pytest.mark.asyncio
    async def test_client_error_is_retried(self, provider, genai_client):
        genai_client.operations.get.side_effect = errors.ClientError(
            400, {"error": {"code": 400, "message": "bad operation", "status": "INVALID_ARGUMENT"}}
        )

        with pytest.raises(TransientPollError):
            await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))

    @pytest.mark.asyncio
    async def test_rate_limit_is_transient(self, provider, genai_client):
        genai_client.operations.get.side_effect = errors.ClientError(
            429, {"error": {"code": 429, "message": "slow down", "status": "RESOURCE_EXHAUSTED"}}
        )

        with pytest.raises(TransientPollError):
            await GeminiVideoJobClient(provider).poll(JobHandle(id="op", operation=_operation()))


class TestImageClient:
    """Test suite for GeminiImageJobClient"""

    @staticmethod
    def _response(*parts):
        content = SimpleNamespace(parts=list(parts))
        return SimpleNamespace(candidates=[SimpleNamespace(content=content)])

    @pytest.mark.asyncio
    async def test_returns_data_uri(self, provider, genai_client):
        image_part = SimpleNamespace(inline_data=SimpleNamespace(data=b"img", mime_type="image/png"))
        text_part = SimpleNamespace(inline_data=None)
        genai_client.models.generate_content.return_value = self._response(text_part, image_part)
        client = GeminiImageJobClient(provider)

        handle = await client.submit(GenerationJobConfig(prompt="A bottle", aspect_ratio="1:1", kind=MediaKind.IMAGE))
        result = await client.poll(handle)

        assert result.done is True
        assert result.result_uri == "data:image/png;base64," + base64.b64encode(b"img").decode()
        kwargs = genai_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image"
        assert kwargs["contents"] == ["A bottle"]
        assert kwargs["config"].response_modalities == ["IMAGE"]

    @pytest.mark.asyncio
    async def test_edit_sends_reference_first(self, provider, genai_client):
        image_part = SimpleNamespace(inline_data=SimpleNamespace(data=b"img", mime_type="image/jpeg"))
        genai_client.models.generate_content.return_value = self._response(image_part)
        reference = Attachment(kind=AttachmentKind.IMAGE, mime_type="image/jpeg", data="aW1n")
        config = GenerationJobConfig(prompt="Make it red", kind=MediaKind.IMAGE, reference=reference)

        await GeminiImageJobClient(provider).submit(config)

        contents = genai_client.models.generate_content.call_args.kwargs["contents"]
        assert len(contents) == 2
        assert contents[1] == "Make it red"

    @pytest.mark.asyncio
    async def test_no_image_in_response(self, provider, genai_client):
        genai_client.models.generate_content.return_value = self._response(SimpleNamespace(inline_data=None))

        with pytest.raises(SubmissionFailedError):
            await GeminiImageJobClient(provider).submit(GenerationJobConfig(prompt="x", kind=MediaKind.IMAGE))
