"""Configuration assembled from command-line flags and environment variables."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from greener_reporter_junitxml.errors import ConfigError
from greener_reporter_junitxml.ingress.config import IngressConfig
from greener_reporter_junitxml.models.session import Label, SessionRequest


class ReporterConfig(BaseModel):
    """Validated settings for one reporting run."""

    ingress: IngressConfig
    xml_file: str
    session: SessionRequest


def parse_labels(labels: str) -> Sequence[Label]:
    """Parse comma-separated ``key`` or ``key=value`` labels.

    Tokens are whitespace-trimmed and blank tokens are dropped. Values split on
    the first ``=``, so ``key=`` yields an empty value.
    """
    parsed: list[Label] = []
    for token in labels.split(","):
        token = token.strip()
        if not token:
            continue
        key, sep, value = token.partition("=")
        parsed.append(Label(key=key, value=value if sep else None))
    return parsed


def parse_baggage(baggage: str) -> Mapping[str, Any] | None:
    """Parse session baggage from a JSON object string.

    Raises:
        ConfigError: If the string is not a JSON object

    """
    if not baggage.strip():
        return None
    try:
        value = json.loads(baggage)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"parse session baggage: {exc}") from exc
    if not isinstance(value, dict):
        raise ConfigError(
            f"parse session baggage: expected a JSON object, got {type(value).__name__}"
        )
    return value


def build_config(
    *,
    ingress_endpoint: str,
    ingress_api_key: str,
    xml_file: str,
    session_id: str = "",
    session_description: str = "",
    session_labels: str = "",
    session_baggage: str = "",
    timeout: float = 300,
) -> ReporterConfig:
    """Build and validate the run configuration from raw string values.

    Raises:
        ConfigError: If baggage is malformed or any value fails validation

    """
    try:
        return ReporterConfig(
            ingress=IngressConfig(
                endpoint=ingress_endpoint, api_key=ingress_api_key, timeout=timeout
            ),
            xml_file=xml_file,
            session=SessionRequest(
                id=session_id,
                description=session_description,
                labels=parse_labels(session_labels),
                baggage=parse_baggage(session_baggage),
            ),
        )
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
