"""
API key access gate

Veo requires a key from a paid project. Access is granted when a key was
configured through the environment, selected by the user at runtime, or when
Vertex AI credentials are used. When access is missing the UI is asked to run
its key-selection flow; the selected key is stored with `set_key`.
"""

import threading
from typing import Optional

from adgen.core import get_logger
from adgen.services.generation.ports import AuthGate

logger = get_logger(__name__, component="auth_gate")


class ApiKeyAuthGate(AuthGate):
    """Holds the active Gemini API key and answers access checks."""

    def __init__(self, configured_key: Optional[str] = None, use_vertex_ai: bool = False):
        self._configured_key = (configured_key or "").strip() or None
        self._selected_key: Optional[str] = None
        self._use_vertex_ai = use_vertex_ai
        self._prompt_requested = False
        self._lock = threading.Lock()

    @property
    def has_selected_key(self) -> bool:
        with self._lock:
            return self._selected_key is not None

    @property
    def prompt_requested(self) -> bool:
        with self._lock:
            return self._prompt_requested

    @property
    def uses_vertex_ai(self) -> bool:
        return self._use_vertex_ai

    def current_key(self) -> Optional[str]:
        """Selected key if any, else the configured one."""
        with self._lock:
            return self._selected_key or self._configured_key

    def set_key(self, api_key: str) -> None:
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        with self._lock:
            self._selected_key = api_key
            self._prompt_requested = False
        logger.info("API key selected")

    async def check(self) -> bool:
        return self._use_vertex_ai or self.current_key() is not None

    async def prompt_interactive(self) -> None:
        with self._lock:
            self._prompt_requested = True
        logger.warning("API key selection required; waiting for POST /auth/api-key")
