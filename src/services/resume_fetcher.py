"""
Remote résumé fetching for the embedding pipeline.

Candidates keep a ``resumeUrl`` that usually points at a Google Drive file,
a Google Doc or Sheet, or a plain hosted PDF. Share links are rewritten to
their direct-download/export form, fetched, and turned into plain text that
is appended to the candidate's search document.

Usage:
    fetcher = ResumeFetcher()
    result = fetcher.fetch(candidate.resume_url, candidate_id=str(candidate.id))
    if result.ok:
        print(result.text)
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from src.ml.nlp.extractors import ExtractionChain, get_extraction_chain
from src.ml.nlp.text_cleaning import strip_html
from src.utils.config import get_settings
from src.utils.constants import BINARY_CONTENT_HINTS, TEXT_CONTENT_HINTS
from src.utils.logger import get_logger, snippet

logger = get_logger(__name__)

# Share-link patterns and the direct-download URL each one maps to
_DOWNLOAD_REWRITES = [
    (
        re.compile(r"https://docs\.google\.com/document/d/([^/]+)/"),
        "https://docs.google.com/document/d/{id}/export?format=txt",
    ),
    (
        re.compile(r"https://docs\.google\.com/spreadsheets/d/([^/]+)/"),
        "https://docs.google.com/spreadsheets/d/{id}/export?format=csv",
    ),
    (
        re.compile(r"https://drive\.google\.com/file/d/([^/]+)/"),
        "https://drive.google.com/uc?export=download&id={id}",
    ),
]


def rewrite_for_download(url: Any) -> Any:
    """
    Rewrite known share links to a URL that returns the file itself.

    Google Drive files become ``uc?export=download`` links, Docs export as
    plain text and Sheets as CSV. Anything else, including non-string
    input, is returned unchanged.
    """
    if not isinstance(url, str):
        return url

    for pattern, template in _DOWNLOAD_REWRITES:
        match = pattern.search(url)
        if match:
            return template.format(id=match.group(1))
    return url


@dataclass
class FetchResult:
    """Outcome of fetching one résumé URL."""

    url: str
    fetch_url: str
    status_code: Optional[int] = None
    content_type: str = ""
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)


def _is_text_type(content_type: str) -> bool:
    return content_type.startswith("text/") or any(h in content_type for h in TEXT_CONTENT_HINTS)


def _is_binary_type(content_type: str) -> bool:
    return any(h in content_type for h in BINARY_CONTENT_HINTS)


class ResumeFetcher:
    """
    Fetches résumé URLs and extracts their text.

    The HTTP client follows redirects (Drive download links bounce through
    several hosts) and is bounded by the configured timeout.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        chain: Optional[ExtractionChain] = None,
    ):
        settings = get_settings().fetch
        self.timeout = settings.timeout_seconds
        self.user_agent = settings.user_agent
        self.max_bytes = settings.max_bytes

        self._client = client
        self._chain = chain

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
            )
        return self._client

    @property
    def chain(self) -> ExtractionChain:
        if self._chain is None:
            self._chain = get_extraction_chain()
        return self._chain

    def fetch(self, url: str, candidate_id: str = "") -> FetchResult:
        """
        Fetch ``url`` and extract plain text from the response.

        Args:
            url: Résumé URL as stored on the candidate
            candidate_id: Used only to tag log lines

        Returns:
            FetchResult; ``error`` is set when nothing usable came back
        """
        fetch_url = rewrite_for_download(url)
        result = FetchResult(url=url, fetch_url=fetch_url)

        try:
            with self.client.stream("GET", fetch_url, follow_redirects=True) as response:
                result.status_code = response.status_code
                result.content_type = response.headers.get("content-type", "").lower()
                logger.info(
                    f"Fetched résumé for {candidate_id or '-'}: "
                    f"status={result.status_code} content_type={result.content_type!r} url={fetch_url}"
                )

                if not response.is_success:
                    result.error = f"HTTP {response.status_code}"
                elif _is_text_type(result.content_type):
                    body = self._read_body(response)
                    if body is not None:
                        raw = body.decode(response.encoding or "utf-8", errors="replace")
                        result.text = strip_html(raw) if "html" in result.content_type else raw
                    else:
                        result.error = "Response too large"
                elif _is_binary_type(result.content_type):
                    body = self._read_body(response)
                    if body is not None:
                        result.text = self.chain.extract_text(body, result.content_type)
                    else:
                        result.error = "Response too large"
                else:
                    result.error = f"Unsupported content type: {result.content_type or 'none'}"
        except httpx.HTTPError as e:
            result.error = f"{type(e).__name__}: {e}"

        if result.error:
            logger.warning(f"Skipping résumé text for {candidate_id or '-'}: {result.error}")
        else:
            logger.debug(
                f"Résumé text for {candidate_id or '-'}: {len(result.text)} chars, "
                f"snippet={snippet(result.text)!r}"
            )
        return result

    def _read_body(self, response: httpx.Response) -> Optional[bytes]:
        """Read the streamed body, giving up past ``max_bytes``."""
        chunks = []
        size = 0
        for chunk in response.iter_bytes():
            size += len(chunk)
            if size > self.max_bytes:
                return None
            chunks.append(chunk)
        return b"".join(chunks)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


# Singleton instance
_resume_fetcher: Optional[ResumeFetcher] = None


def get_resume_fetcher() -> ResumeFetcher:
    """Get the résumé fetcher singleton instance."""
    global _resume_fetcher
    if _resume_fetcher is None:
        _resume_fetcher = ResumeFetcher()
    return _resume_fetcher


def fetch_resume_text(
    url: Optional[str],
    candidate_id: str = "",
    fetcher: Optional[ResumeFetcher] = None,
) -> str:
    """Résumé text for ``url``, or ``""`` on any failure. Never raises."""
    if not url:
        return ""
    try:
        return (fetcher or get_resume_fetcher()).fetch(url, candidate_id=candidate_id).text
    except Exception as e:
        logger.warning(f"Résumé fetch failed for {candidate_id or '-'}: {e}")
        return ""
