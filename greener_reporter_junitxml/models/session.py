"""Models for ingress sessions."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import Field, field_validator

from greener_reporter_junitxml.models.base import WireModel

DEFAULT_SESSION_DESCRIPTION = "JUnit XML test report"


class Label(WireModel):
    """Session label; a label without a value is a plain tag."""

    key: str
    value: str | None = None


class SessionRequest(WireModel):
    """Session descriptor sent when opening a session.

    Empty optional values are normalized to None so they are left out of the
    request body, and an empty description falls back to the default.
    """

    id: str | None = Field(
        default=None, description="Client-supplied session ID (server assigns one)"
    )
    description: str = DEFAULT_SESSION_DESCRIPTION
    labels: Sequence[Label] | None = None
    baggage: Mapping[str, Any] | None = None

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: str | None) -> str:
        """Apply the default description when none is given."""
        return value or DEFAULT_SESSION_DESCRIPTION

    @field_validator("id", "labels", "baggage", mode="before")
    @classmethod
    def empty_as_none(cls, value: Any) -> Any:
        """Treat empty values as absent."""
        return value or None

    def to_payload(self) -> dict[str, Any]:
        """Serialize as the JSON body of the create-session request."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SessionResponse(WireModel):
    """Body of a successful create-session response."""

    id: str = Field(..., min_length=1)


@dataclass(frozen=True, kw_only=True)
class SessionHandle:
    """Resolved session; its ID is authoritative for all submissions."""

    session_id: str
