"""Data models shared by the upstream API clients."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ApiResponse:
    """Raw upstream HTTP response.

    Attributes:
        status_code: HTTP status code returned by the platform.
        body: Undecoded response body.
    """

    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        """Return True for a 200 response."""
        return self.status_code == 200


def parse_json(body: bytes | str) -> Any:
    """Decode a JSON response body."""
    return json.loads(body)
