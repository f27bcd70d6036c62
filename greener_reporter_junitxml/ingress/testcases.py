"""Batch submission of test case records to the ingress API."""

import logging
from collections.abc import Sequence

import aiohttp

from greener_reporter_junitxml.errors import SubmissionError
from greener_reporter_junitxml.ingress.client import TESTCASES_PATH, IngressClient
from greener_reporter_junitxml.models.record import SubmitResult, TestcaseRecord
from greener_reporter_junitxml.models.session import SessionHandle

log = logging.getLogger(__name__)


async def submit_testcases(
    client: IngressClient,
    session: SessionHandle,
    records: Sequence[TestcaseRecord],
) -> SubmitResult:
    """Submit all records in a single request.

    An empty batch succeeds without contacting the server. The batch is
    either accepted as a whole or the call fails.

    Raises:
        SubmissionError: On transport failure or a status other than 201 Created

    """
    if not records:
        log.info("No test results to submit")
        return SubmitResult(submitted=0)

    payload = {"testcases": [record.to_payload() for record in records]}

    log.info(
        "Submitting %d test result(s) to session %s", len(records), session.session_id
    )

    try:
        async with client.session.post(
            TESTCASES_PATH, json=payload, headers=client.headers
        ) as response:
            status = response.status
            body = await response.read()
    except (aiohttp.ClientError, TimeoutError) as exc:
        raise SubmissionError(f"failed to send request: {exc!r}") from exc

    text = body.decode(errors="replace")

    if status != 201:
        raise SubmissionError(
            f"unexpected response: status={status} body={text}",
            status=status,
            body=text,
        )

    log.info("Submitted %d test results", len(records))
    return SubmitResult(submitted=len(records))
