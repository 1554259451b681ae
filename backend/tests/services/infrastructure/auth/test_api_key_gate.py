"""
Tests for services/infrastructure/auth/api_key_gate
"""

import pytest

from adgen.services.infrastructure.auth import ApiKeyAuthGate


class TestApiKeyAuthGate:
    """Test suite for ApiKeyAuthGate"""

    @pytest.mark.asyncio
    async def test_configured_key_grants_access(self):
        gate = ApiKeyAuthGate("env-key")

        assert await gate.check() is True
        assert gate.current_key() == "env-key"
        assert gate.has_selected_key is False

    @pytest.mark.asyncio
    async def test_no_key_denies_access(self):
        assert await ApiKeyAuthGate().check() is False
        assert await ApiKeyAuthGate("   ").check() is False

    @pytest.mark.asyncio
    async def test_vertex_grants_access_without_key(self):
        gate = ApiKeyAuthGate(use_vertex_ai=True)

        assert await gate.check() is True
        assert gate.uses_vertex_ai is True

    @pytest.mark.asyncio
    async def test_selected_key_overrides_configured(self):
        gate = ApiKeyAuthGate("env-key")

        gate.set_key("  paid-key ")

        assert gate.current_key() == "paid-key"
        assert gate.has_selected_key is True

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError):
            ApiKeyAuthGate().set_key("  ")

    @pytest.mark.asyncio
    async def test_prompt_flag_cleared_by_selection(self):
        gate = ApiKeyAuthGate()

        await gate.prompt_interactive()
        assert gate.prompt_requested is True

        gate.set_key("paid-key")
        assert gate.prompt_requested is False
        assert await gate.check() is True
