"""
Client for the external text-embedding provider.

Calls the Gemini ``embedContent`` endpoint over HTTP and returns the
embedding as a list of floats.
"""

from typing import Any, Optional

import httpx

from src.core.exceptions import EmbeddingConfigurationError, EmbeddingProviderError
from src.utils.config import get_settings
from src.utils.logger import get_logger

logger = get_logger(__name__)


class EmbeddingClient:
    """
    Wrapper around the embedding provider's HTTP API.

    The HTTP client is created lazily so constructing an ``EmbeddingClient``
    never touches the network; tests inject an ``httpx.Client`` built on a
    ``MockTransport``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the embedding client.

        Args:
            api_key: Provider API key. Defaults to config setting.
            model: Provider model name, e.g. ``models/text-embedding-004``.
            base_url: Provider API root.
            timeout: Request timeout in seconds.
            http_client: Optional pre-built HTTP client.
        """
        settings = get_settings().embedding
        self.api_key = api_key if api_key is not None else settings.api_key
        self.model = model or settings.model
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout_seconds

        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.Client:
        """Get the underlying HTTP client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:embedContent"

    def embed_text(self, text: str) -> list[float]:
        """
        Generate an embedding for ``text``.

        Blank input returns ``[]`` without calling the provider.

        Raises:
            EmbeddingConfigurationError: If no API key is configured.
            EmbeddingProviderError: On a non-success response or transport failure.
        """
        if not self.api_key:
            raise EmbeddingConfigurationError("Embedding API key not configured")
        if not text or not text.strip():
            return []

        body = {
            "model": self.model,
            "content": {"parts": [{"text": text}]},
        }

        try:
            response = self.client.post(
                self.endpoint,
                json=body,
                headers={"x-goog-api-key": self.api_key},
            )
        except httpx.TimeoutException as e:
            raise EmbeddingProviderError(f"Embedding request timed out: {e}", status_code=504) from e
        except httpx.HTTPError as e:
            raise EmbeddingProviderError(f"Embedding request failed: {e}", status_code=502) from e

        if not response.is_success:
            raise EmbeddingProviderError(
                f"Embedding provider failed: {response.status_code} {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EmbeddingProviderError(f"Embedding provider returned invalid JSON: {e}") from e

        vector = self._parse_vector(data)
        logger.debug(f"Embedded {len(text)} chars into {len(vector)} dimensions")
        return vector

    @staticmethod
    def _parse_vector(data: Any) -> list[float]:
        """Read ``embedding.values`` (or ``embedding.value``) from a response body."""
        embedding = data.get("embedding") if isinstance(data, dict) else None
        if not isinstance(embedding, dict):
            return []

        values = embedding.get("values", embedding.get("value"))
        if not isinstance(values, list):
            return []

        try:
            return [float(v) for v in values]
        except (TypeError, ValueError) as e:
            raise EmbeddingProviderError(f"Embedding provider returned non-numeric values: {e}") from e

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "EmbeddingClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# Singleton instance
_embedding_client: Optional[EmbeddingClient] = None


def get_embedding_client() -> EmbeddingClient:
    """Get the embedding client singleton instance."""
    global _embedding_client
    if _embedding_client is None:
        _embedding_client = EmbeddingClient()
    return _embedding_client
