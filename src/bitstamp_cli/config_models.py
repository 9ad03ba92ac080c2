from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_API_VERSION = "v2"


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    rate_limit_sec: int
    rate_limit_min: int
    timeout_ms: int
    api_version: str = DEFAULT_API_VERSION
    client_id: Optional[str] = None
    client_secret: Optional[str] = field(default=None, repr=False)

    @property
    def request_timeout(self) -> float:
        """Configured timeout in seconds, as requests expects it."""
        return self.timeout_ms / 1000.0
