"""CurseForge Core API client."""

from __future__ import annotations

import logging

import httpx

from mod_update_tracker.api.models import ApiResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.curseforge.com"


class CurseForgeClient:
    """Thin async client for the CurseForge Core API.

    Every call returns the raw ``ApiResponse`` so callers decide how to
    treat non-200 status codes. A timed out request returns None.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the CurseForge client.

        Args:
            api_key: CurseForge Core API key sent as ``x-api-key``.
            base_url: API endpoint URL.
            timeout: HTTP request timeout in seconds.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.name = "curseforge"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def _get(self, path: str) -> ApiResponse | None:
        url = f"{self.base_url}{path}"
        logger.debug(f"CurseForge request: GET {url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=self._headers())
        except httpx.TimeoutException:
            logger.debug(f"CurseForge request timed out: GET {url}")
            return None

        return ApiResponse(status_code=response.status_code, body=response.content)

    async def get_mod(self, project_id: int | str) -> ApiResponse | None:
        """Fetch a mod's project metadata.

        Args:
            project_id: CurseForge mod id.

        Returns:
            ApiResponse, or None if the request timed out.
        """
        return await self._get(f"/v1/mods/{project_id}")

    async def get_mod_file_changelog(
        self, project_id: int | str, file_id: int | str
    ) -> ApiResponse | None:
        """Fetch the changelog of one of a mod's files.

        Args:
            project_id: CurseForge mod id.
            file_id: File id within the mod.

        Returns:
            ApiResponse whose JSON body holds the changelog HTML under
            ``data``, or None if the request timed out.
        """
        return await self._get(f"/v1/mods/{project_id}/files/{file_id}/changelog")
