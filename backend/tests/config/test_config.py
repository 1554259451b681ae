"""
Tests for config module

Covers API constants, credentials, poll settings and the model registry.
"""

import importlib
from pathlib import Path

import pytest

from adgen.config import (
    APP_DIR,
    BACKEND_DIR,
    API_TITLE,
    API_VERSION,
    CORS_ORIGINS,
    MAX_REQUEST_BODY_BYTES,
    ALLOWED_ATTACHMENT_MIME_PREFIXES,
)
from adgen.config.models import (
    ModelConfig,
    CHAT_MODEL,
    VIDEO_MODEL,
    IMAGE_MODEL,
    VIDEO_ASPECT_RATIOS,
    VIDEO_RESOLUTIONS,
    IMAGE_ASPECT_RATIOS,
    list_models,
)


class TestPaths:
    def test_directory_hierarchy(self):
        assert isinstance(APP_DIR, Path)
        assert APP_DIR.parent == BACKEND_DIR


class TestApiConstants:
    """Test suite for API constants"""

    def test_api_title(self):
        assert API_TITLE == "AdGen Studio API"

    def test_api_version_format(self):
        assert len(API_VERSION.split(".")) == 3

    def test_cors_origins(self):
        assert "http://localhost:5173" in CORS_ORIGINS

    def test_body_limit_fits_attachments(self):
        assert MAX_REQUEST_BODY_BYTES >= 1024 * 1024

    def test_attachment_mime_prefixes(self):
        assert ALLOWED_ATTACHMENT_MIME_PREFIXES == ("image/", "video/")


class TestEnvironment:
    """Values read from the environment at import"""

    @pytest.fixture
    def reload_config(self):
        import adgen.config as config
        yield lambda: importlib.reload(config)
        importlib.reload(config)

    def test_api_key_fallback(self, monkeypatch, reload_config):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "studio-key")

        assert reload_config().GEMINI_API_KEY == "studio-key"

    def test_poll_settings(self, monkeypatch, reload_config):
        monkeypatch.setenv("POLL_INTERVAL_SECONDS", "2")
        monkeypatch.setenv("POLL_MAX_TRANSIENT_ERRORS", "not-a-number")

        config = reload_config()

        assert config.POLL_INTERVAL_SECONDS == 2.0
        assert config.POLL_MAX_TRANSIENT_ERRORS == 12

    def test_fail_open_switch(self, monkeypatch, reload_config):
        monkeypatch.setenv("AUTH_CHECK_FAIL_OPEN", "false")

        assert reload_config().AUTH_CHECK_FAIL_OPEN is False


class TestModelConfig:
    """Test suite for the model registry"""

    def test_defaults(self):
        assert CHAT_MODEL.model_name == "gemini-3-pro-preview"
        assert CHAT_MODEL.temperature == 0.7
        assert VIDEO_MODEL.model_name == "veo-3.1-fast-generate-preview"
        assert IMAGE_MODEL.model_name == "gemini-2.5-flash-image"

    def test_model_config_is_frozen(self):
        config = ModelConfig(model_name="x")

        with pytest.raises(AttributeError):
            config.model_name = "y"

    def test_list_models(self):
        assert list_models() == {
            "chat": CHAT_MODEL.model_name,
            "video": VIDEO_MODEL.model_name,
            "image": IMAGE_MODEL.model_name,
        }

    def test_supported_options(self):
        assert VIDEO_ASPECT_RATIOS == ("16:9", "9:16")
        assert VIDEO_RESOLUTIONS == ("720p", "1080p")
        assert "1:1" in IMAGE_ASPECT_RATIOS

    def test_env_override(self, monkeypatch):
        import adgen.config.models as models

        monkeypatch.setenv("ADGEN_VIDEO_MODEL", "veo-3.1-generate-preview")
        try:
            assert importlib.reload(models).VIDEO_MODEL.model_name == "veo-3.1-generate-preview"
        finally:
            monkeypatch.delenv("ADGEN_VIDEO_MODEL")
            importlib.reload(models)
