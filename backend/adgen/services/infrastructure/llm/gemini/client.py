"""
Gemini client provider - Works with both the Gemini API and Vertex AI

The API key can change at runtime (the user may select a new key after a
generation was rejected), so clients are built lazily and rebuilt whenever the
key changes.

Environment Variables:
    USE_VERTEX_AI: Set to 'true' to use Vertex AI instead of the Gemini API
    GEMINI_API_KEY / API_KEY: API key for the Gemini API
    GCP_PROJECT_ID: GCP project ID (when USE_VERTEX_AI=true)
    GCP_LOCATION: GCP region (default: us-central1, when USE_VERTEX_AI=true)
"""

import threading
from typing import Callable, Optional

from google import genai

from adgen.core import get_logger, AuthRequiredError, GenerationError

logger = get_logger(__name__, component="gemini_client")

# Message the service returns when the key lacks access to the model
AUTH_ERROR_MARKER = "Requested entity was not found"


def is_auth_error(error: BaseException) -> bool:
    return AUTH_ERROR_MARKER in str(error)


def classify_error(error: BaseException, default: type) -> GenerationError:
    """Map an SDK/transport exception onto the generation error hierarchy."""
    if isinstance(error, GenerationError):
        return error
    if is_auth_error(error):
        return AuthRequiredError(str(error))
    return default(str(error) or error.__class__.__name__)


class GeminiClientProvider:
    """
    Builds `genai.Client` instances for the current credentials.

    Args:
        api_key_source: Callable returning the key to use (None when unset)
        use_vertex_ai: Use Vertex AI (project/location) instead of an API key
        project / location: Vertex AI settings
        client: Pre-built client, used as-is (tests)
    """

    def __init__(
        self,
        api_key_source: Optional[Callable[[], Optional[str]]] = None,
        use_vertex_ai: bool = False,
        project: Optional[str] = None,
        location: Optional[str] = None,
        client=None,
    ):
        self._api_key_source = api_key_source or (lambda: None)
        self.use_vertex_ai = use_vertex_ai
        self._project = project
        self._location = location
        self._fixed_client = client
        self._client = None
        self._client_key: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def api_key(self) -> Optional[str]:
        if self.use_vertex_ai:
            return None
        return self._api_key_source()

    def get(self):
        """Return a client for the current credentials.

        Raises:
            AuthRequiredError: no API key is available
        """
        if self._fixed_client is not None:
            return self._fixed_client

        with self._lock:
            if self.use_vertex_ai:
                if self._client is None:
                    if not self._project:
                        raise AuthRequiredError("GCP_PROJECT_ID is required when USE_VERTEX_AI=true")
                    logger.info("Creating Vertex AI client", extra={"project": self._project, "location": self._location})
                    self._client = genai.Client(vertexai=True, project=self._project, location=self._location)
                return self._client

            key = self.api_key
            if not key:
                raise AuthRequiredError("No Gemini API key selected")
            if self._client is None or key != self._client_key:
                logger.info("Creating Gemini API client")
                self._client = genai.Client(api_key=key)
                self._client_key = key
            return self._client

