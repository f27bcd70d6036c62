"""Shared HTTP client for the ingress API."""

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from greener_reporter_junitxml.ingress.config import IngressConfig

API_KEY_HEADER = "x-api-key"

SESSIONS_PATH = "api/v1/ingress/sessions"
TESTCASES_PATH = "api/v1/ingress/testcases"


@dataclass(frozen=True, kw_only=True)
class IngressClient:
    """Ingress API connection passed to the session and submission calls.

    Request paths are relative to the configured endpoint.
    """

    config: IngressConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: IngressConfig
    ) -> AsyncGenerator["IngressClient", None]:
        """Create client with managed session lifecycle."""
        async with aiohttp.ClientSession(
            base_url=config.base_url,
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as session:
            yield cls(config=config, session=session)

    @property
    def headers(self) -> Mapping[str, str]:
        """Authentication headers sent with every request."""
        return {API_KEY_HEADER: self.config.api_key.get_secret_value()}
