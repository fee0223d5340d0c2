"""Modrinth Labrinth API client."""

from __future__ import annotations

import logging

import httpx

from mod_update_tracker.api.models import ApiResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.modrinth.com/v2"
DEFAULT_USER_AGENT = "mod-update-tracker/0.1.0"


class ModrinthClient:
    """Thin async client for the Modrinth API.

    Modrinth requires a uniquely identifying User-Agent on every request.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the Modrinth client.

        Args:
            base_url: API endpoint URL, including the version prefix.
            user_agent: User-Agent header value.
            timeout: HTTP request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.name = "modrinth"

    async def _get(self, path: str) -> ApiResponse | None:
        url = f"{self.base_url}{path}"
        logger.debug(f"Modrinth request: GET {url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers={"User-Agent": self.user_agent})
        except httpx.TimeoutException:
            logger.debug(f"Modrinth request timed out: GET {url}")
            return None

        return ApiResponse(status_code=response.status_code, body=response.content)

    async def get_project(self, project_id: str) -> ApiResponse | None:
        """Fetch a project's metadata by id or slug."""
        return await self._get(f"/project/{project_id}")

    async def list_project_versions(self, project_id: str) -> ApiResponse | None:
        """List a project's versions, newest first.

        Args:
            project_id: Modrinth project id or slug.

        Returns:
            ApiResponse with a JSON array body, or None if the request timed out.
        """
        return await self._get(f"/project/{project_id}/version")
