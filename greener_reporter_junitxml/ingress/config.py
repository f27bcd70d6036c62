"""Configuration for the ingress API client."""

from pydantic import BaseModel, Field, SecretStr, field_validator
from yarl import URL


class IngressConfig(BaseModel):
    """Connection settings for the Greener ingress API."""

    endpoint: str
    api_key: SecretStr
    # Applies to each request as a whole, like aiohttp's own default
    timeout: float = Field(default=300, gt=0)

    @field_validator("endpoint")
    @classmethod
    def absolute_http_url(cls, value: str) -> str:
        """Require an absolute HTTP(S) endpoint."""
        url = URL(value)
        if not url.absolute or url.scheme not in ("http", "https"):
            raise ValueError(f"endpoint must be an absolute http(s) URL: {value!r}")
        return value

    @property
    def base_url(self) -> URL:
        """Endpoint as a base URL that request paths are joined onto."""
        return URL(self.endpoint.rstrip("/") + "/")
