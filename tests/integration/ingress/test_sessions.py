"""Integration tests for session creation."""

from collections.abc import AsyncGenerator

import aiohttp
import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr
from yarl import URL

from greener_reporter_junitxml.errors import SessionError
from greener_reporter_junitxml.ingress import IngressClient, IngressConfig, open_session
from greener_reporter_junitxml.models.session import (
    Label,
    SessionHandle,
    SessionRequest,
)
from greener_reporter_junitxml.testing.payloads import session_response

ENDPOINT = "http://greener.test"
SESSIONS_URL = f"{ENDPOINT}/api/v1/ingress/sessions"
API_KEY = "ingress-api-key-123"


@pytest.fixture
def config() -> IngressConfig:
    """Create test configuration."""
    return IngressConfig(endpoint=ENDPOINT, api_key=SecretStr(API_KEY))


@pytest.fixture
async def client(
    config: IngressConfig, aioresponses: aioresponses_cls
) -> AsyncGenerator[IngressClient, None]:
    """Create client with managed session."""
    async with IngressClient.from_config(config) as impl:
        yield impl


class TestOpenSession:
    """Tests for open_session."""

    async def test_creates_session_with_correct_payload(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Posts the session descriptor with the API key header."""
        aioresponses.post(
            SESSIONS_URL, status=201, payload=session_response(session_id="abc")
        )

        handle = await open_session(
            client,
            SessionRequest(
                description="nightly",
                labels=[Label(key="ci"), Label(key="tag", value="value")],
                baggage={"commit": "abc123"},
            ),
        )

        assert handle == SessionHandle(session_id="abc")

        aioresponses.assert_called_once()  # type: ignore[no-untyped-call]
        call = aioresponses.requests[("POST", URL(SESSIONS_URL))][0]
        assert call.kwargs["headers"] == {"x-api-key": API_KEY}
        assert call.kwargs["json"] == {
            "description": "nightly",
            "labels": [{"key": "ci"}, {"key": "tag", "value": "value"}],
            "baggage": {"commit": "abc123"},
        }

    async def test_server_id_overrides_client_id(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Uses the ID returned by the server even when one was supplied."""
        aioresponses.post(
            SESSIONS_URL, status=201, payload=session_response(session_id="server-id")
        )

        handle = await open_session(client, SessionRequest(id="client-id"))

        assert handle.session_id == "server-id"
        call = aioresponses.requests[("POST", URL(SESSIONS_URL))][0]
        assert call.kwargs["json"]["id"] == "client-id"

    async def test_sends_default_description(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Sends the default description when none is configured."""
        aioresponses.post(SESSIONS_URL, status=201, payload=session_response())

        await open_session(client, SessionRequest())

        call = aioresponses.requests[("POST", URL(SESSIONS_URL))][0]
        assert call.kwargs["json"] == {"description": "JUnit XML test report"}

    async def test_tolerates_trailing_slash_on_endpoint(
        self, aioresponses: aioresponses_cls
    ) -> None:
        """Joins the request path onto an endpoint ending with '/'."""
        aioresponses.post(SESSIONS_URL, status=201, payload=session_response())
        config = IngressConfig(
            endpoint="http://greener.test/", api_key=SecretStr(API_KEY)
        )

        async with IngressClient.from_config(config) as client:
            await open_session(client, SessionRequest())

        aioresponses.assert_called_once()  # type: ignore[no-untyped-call]

    @pytest.mark.parametrize("status", [200, 400, 401, 409, 500, 503])
    async def test_raises_for_non_created_status(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
        status: int,
    ) -> None:
        """Raises SessionError with status and body for any status but 201."""
        aioresponses.post(SESSIONS_URL, status=status, body="server says no")

        with pytest.raises(SessionError, match="unexpected response") as exc_info:
            await open_session(client, SessionRequest())

        assert exc_info.value.status == status
        assert exc_info.value.body == "server says no"
        assert str(exc_info.value).startswith("create session: ")

    @pytest.mark.parametrize("body", ["not json", "{}", '{"id": ""}', '{"id": 42}'])
    async def test_raises_for_malformed_body(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
        body: str,
    ) -> None:
        """Raises SessionError when the 201 body has no usable session ID."""
        aioresponses.post(SESSIONS_URL, status=201, body=body)

        with pytest.raises(
            SessionError, match="malformed session response"
        ) as exc_info:
            await open_session(client, SessionRequest())

        assert exc_info.value.status == 201
        assert exc_info.value.body == body

    async def test_raises_for_undecodable_error_body(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Keeps the status when the error body is not valid UTF-8."""
        aioresponses.post(SESSIONS_URL, status=500, body=b"\xff\xfe bad gateway \xe9")

        with pytest.raises(SessionError, match="status=500") as exc_info:
            await open_session(client, SessionRequest())

        assert exc_info.value.status == 500
        assert exc_info.value.body == "�� bad gateway �"

    async def test_raises_for_undecodable_created_body(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Treats a 201 body that is not valid UTF-8 as malformed."""
        aioresponses.post(SESSIONS_URL, status=201, body=b'{"id": "\xff\xfe"}')

        with pytest.raises(
            SessionError, match="malformed session response"
        ) as exc_info:
            await open_session(client, SessionRequest())

        assert exc_info.value.status == 201
        assert exc_info.value.body == '{"id": "��"}'

    async def test_raises_for_transport_failure(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Raises SessionError without status when the request cannot be sent."""
        aioresponses.post(
            SESSIONS_URL, exception=aiohttp.ClientConnectionError("refused")
        )

        with pytest.raises(SessionError, match="failed to send") as exc_info:
            await open_session(client, SessionRequest())

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    async def test_raises_for_timeout(
        self,
        client: IngressClient,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Raises SessionError when the request times out."""
        aioresponses.post(SESSIONS_URL, exception=TimeoutError())

        with pytest.raises(SessionError, match="failed to send"):
            await open_session(client, SessionRequest())
