"""Pipeline that relays a JUnit XML report to the ingress API."""

import logging
from dataclasses import dataclass
from typing import BinaryIO

from greener_reporter_junitxml.config import ReporterConfig
from greener_reporter_junitxml.ingress.client import IngressClient
from greener_reporter_junitxml.ingress.sessions import open_session
from greener_reporter_junitxml.ingress.testcases import submit_testcases
from greener_reporter_junitxml.inputs import read_input
from greener_reporter_junitxml.normalizer import normalize_report
from greener_reporter_junitxml.parser import parse_report

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class PipelineResult:
    """Result of a completed reporting run."""

    session_id: str
    submitted: int


async def run_pipeline(
    config: ReporterConfig,
    client: IngressClient,
    stdin: BinaryIO | None = None,
) -> PipelineResult:
    """Read, parse, open a session, normalize and submit, in that order.

    The report is read and parsed before the session is opened, so a bad
    report never creates a session. A session stays open without records if
    submission fails; nothing is rolled back.

    Raises:
        InputError: If the report cannot be read
        ParseError: If the report is not valid JUnit XML
        SessionError: If the session cannot be created
        SubmissionError: If the records are rejected

    """
    log.info("Reading report from %s", config.xml_file)
    data = await read_input(config.xml_file, stdin)

    report = parse_report(data)
    log.info(
        "Parsed %d suite(s), %d test case(s)", len(report.suites), report.case_count
    )

    session = await open_session(client, config.session)

    records = normalize_report(report, session.session_id)
    result = await submit_testcases(client, session, records)

    return PipelineResult(session_id=session.session_id, submitted=result.submitted)
