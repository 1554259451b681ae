"""
Tests for models/status module

Tests for the GenerationStatus state machine and related enums.
"""

import pytest

from adgen.models.status import (
    ALLOWED_TRANSITIONS,
    BUSY_STATUSES,
    ErrorKind,
    GenerationStatus,
    MediaKind,
    can_transition,
)


class TestGenerationStatus:
    """Test suite for GenerationStatus enum"""

    def test_wire_values(self):
        """Test values match the strings the front-end switches on"""
        assert [s.value for s in GenerationStatus] == [
            "idle", "checking-auth", "generating", "polling", "completed", "error",
        ]

    @pytest.mark.parametrize("status", [GenerationStatus.COMPLETED, GenerationStatus.ERROR])
    def test_terminal(self, status):
        assert status.is_terminal() is True
        assert status.is_busy() is False

    @pytest.mark.parametrize("status", sorted(BUSY_STATUSES, key=lambda s: s.value))
    def test_busy(self, status):
        assert status.is_busy() is True
        assert status.is_terminal() is False

    def test_idle_is_neither(self):
        assert GenerationStatus.IDLE.is_busy() is False
        assert GenerationStatus.IDLE.is_terminal() is False


class TestTransitions:
    """Test suite for can_transition"""

    @pytest.mark.parametrize("current, target", [
        (GenerationStatus.IDLE, GenerationStatus.CHECKING_AUTH),
        (GenerationStatus.CHECKING_AUTH, GenerationStatus.GENERATING),
        (GenerationStatus.CHECKING_AUTH, GenerationStatus.IDLE),
        (GenerationStatus.CHECKING_AUTH, GenerationStatus.ERROR),
        (GenerationStatus.GENERATING, GenerationStatus.POLLING),
        (GenerationStatus.GENERATING, GenerationStatus.ERROR),
        (GenerationStatus.POLLING, GenerationStatus.COMPLETED),
        (GenerationStatus.POLLING, GenerationStatus.ERROR),
        (GenerationStatus.COMPLETED, GenerationStatus.CHECKING_AUTH),
        (GenerationStatus.ERROR, GenerationStatus.CHECKING_AUTH),
    ])
    def test_allowed(self, current, target):
        assert can_transition(current, target) is True

    @pytest.mark.parametrize("current, target", [
        (GenerationStatus.IDLE, GenerationStatus.GENERATING),
        (GenerationStatus.IDLE, GenerationStatus.COMPLETED),
        (GenerationStatus.CHECKING_AUTH, GenerationStatus.POLLING),
        (GenerationStatus.GENERATING, GenerationStatus.COMPLETED),
        (GenerationStatus.POLLING, GenerationStatus.GENERATING),
        (GenerationStatus.COMPLETED, GenerationStatus.ERROR),
    ])
    def test_forbidden(self, current, target):
        assert can_transition(current, target) is False

    @pytest.mark.parametrize("current", list(GenerationStatus))
    def test_reset_always_allowed(self, current):
        assert can_transition(current, GenerationStatus.IDLE) is True

    def test_every_status_has_edges(self):
        assert set(ALLOWED_TRANSITIONS) == set(GenerationStatus)


class TestKinds:
    def test_error_kinds(self):
        assert {k.value for k in ErrorKind} == {
            "auth_required", "submission_failed", "polling_failed", "transient_poll_error", "timeout",
        }

    def test_media_kinds(self):
        assert MediaKind("video") is MediaKind.VIDEO
        assert MediaKind.IMAGE == "image"
