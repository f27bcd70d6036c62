"""Session creation against the ingress API."""

import logging

import aiohttp
from pydantic import ValidationError

from greener_reporter_junitxml.errors import SessionError
from greener_reporter_junitxml.ingress.client import SESSIONS_PATH, IngressClient
from greener_reporter_junitxml.models.session import (
    SessionHandle,
    SessionRequest,
    SessionResponse,
)

log = logging.getLogger(__name__)


async def open_session(client: IngressClient, request: SessionRequest) -> SessionHandle:
    """Create a session and return its server-resolved ID.

    The ID returned by the server is used from then on, even when the request
    carried a client-supplied one. No retry is attempted.

    Raises:
        SessionError: On transport failure, a status other than 201 Created,
            or a success body without a session ID

    """
    log.info(
        "Creating session: endpoint=%s, id=%s, description=%s, labels=%d",
        client.config.endpoint,
        request.id,
        request.description,
        len(request.labels or ()),
    )

    try:
        async with client.session.post(
            SESSIONS_PATH, json=request.to_payload(), headers=client.headers
        ) as response:
            status = response.status
            body = await response.read()
    except (aiohttp.ClientError, TimeoutError) as exc:
        raise SessionError(f"failed to send request: {exc!r}") from exc

    # Error bodies are reported as-is, whatever their encoding.
    text = body.decode(errors="replace")

    if status != 201:
        raise SessionError(
            f"unexpected response: status={status} body={text}",
            status=status,
            body=text,
        )

    try:
        session_response = SessionResponse.model_validate_json(body.decode())
    except (UnicodeDecodeError, ValidationError) as exc:
        raise SessionError(
            f"malformed session response: body={text}", status=status, body=text
        ) from exc

    log.info("Created session: %s", session_response.id)
    return SessionHandle(session_id=session_response.id)
