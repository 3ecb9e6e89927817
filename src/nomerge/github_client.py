"""Client for the GitHub REST API."""

import base64
import binascii
import logging
import os
from typing import Any
from urllib.parse import quote

import httpx

from .errors import ContentUnreadableError, GitHubAPIError
from .models import RemoteFile

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
FILES_PER_PAGE = 100


class GitHubClient:
    """Async HTTP client for the pull request endpoints nomerge needs.

    The base URL can be configured via the GITHUB_API_URL environment variable
    (set by GitHub Actions, also on GitHub Enterprise).
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub token used as a bearer token.
            base_url: API root. Defaults to GITHUB_API_URL or https://api.github.com.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.token = token
        self.base_url = base_url or os.environ.get("GITHUB_API_URL", DEFAULT_API_URL)
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GitHubClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": "NoMerge-Action",
            },
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        if not self._client:
            raise RuntimeError("GitHubClient must be used as an async context manager")

        response = await self._client.get(endpoint, params=params)
        if response.is_error:
            raise GitHubAPIError(response.status_code, response.reason_phrase)
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(response.status_code, f"Response is not JSON: {e}") from e

    async def list_pull_request_files(self, owner: str, repo: str, number: int) -> list[RemoteFile]:
        """List every file changed in a pull request, following pagination."""
        files: list[RemoteFile] = []
        page = 1

        while True:
            page_files = await self._request(
                f"/repos/{owner}/{repo}/pulls/{number}/files",
                params={"per_page": FILES_PER_PAGE, "page": page},
            )
            files.extend(
                RemoteFile(
                    filename=f["filename"],
                    status=f.get("status", "modified"),
                    sha=f.get("sha", ""),
                )
                for f in page_files
            )

            if len(page_files) < FILES_PER_PAGE:
                break
            page += 1

        logger.info(f"Found {len(files)} changed files")
        return files

    async def get_file_content(self, owner: str, repo: str, path: str, ref: str) -> str:
        """Fetch a file's text content at a given ref.

        Raises:
            ContentUnreadableError: If the content is not UTF-8 text.
            GitHubAPIError: If the file cannot be fetched.
        """
        data = await self._request(
            f"/repos/{owner}/{repo}/contents/{quote(path)}",
            params={"ref": ref},
        )
        if not isinstance(data, dict) or "content" not in data:
            raise ContentUnreadableError(path, "not a file")

        content = data["content"]
        if data.get("encoding") != "base64":
            return content

        try:
            return base64.b64decode(content).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ContentUnreadableError(path, str(e)) from e

    def content_fetcher(self, owner: str, repo: str):
        """Bind owner and repo, returning an ``async (path, ref) -> str`` callable."""

        async def fetch(path: str, ref: str) -> str:
            return await self.get_file_content(owner, repo, path, ref)

        return fetch
