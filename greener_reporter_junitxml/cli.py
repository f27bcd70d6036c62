"""CLI entry point for the JUnit XML reporter."""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any

from greener_reporter_junitxml.config import ReporterConfig, build_config
from greener_reporter_junitxml.errors import ConfigError, ReporterError
from greener_reporter_junitxml.ingress.client import IngressClient
from greener_reporter_junitxml.pipeline import PipelineResult, run_pipeline


def env_default(name: str, *, required: bool = False) -> dict[str, Any]:
    """Argument options that fall back to an environment variable.

    A required flag stops being required once its variable is set.
    """
    value = os.environ.get(name, "")
    if required:
        return {"default": value} if value else {"required": True}
    return {"default": value}


def format_output(result: PipelineResult) -> dict[str, Any]:
    """Format the run result for JSON output."""
    return {"session_id": result.session_id, "submitted": result.submitted}


async def run(config: ReporterConfig) -> int:
    """Report the configured JUnit XML file and return exit code."""
    log = logging.getLogger("greener_reporter_junitxml")

    try:
        async with IngressClient.from_config(config.ingress) as client:
            result = await run_pipeline(config, client)
    except ReporterError as exc:
        log.error("%s", exc)
        return 1

    print(json.dumps(format_output(result)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser, reading fallbacks from the environment."""
    parser = argparse.ArgumentParser(
        prog="greener-reporter-junitxml",
        description="Report JUnit XML test results to Greener",
    )
    parser.add_argument(
        "--ingress-endpoint",
        help="Greener ingress endpoint (env: GREENER_INGRESS_ENDPOINT)",
        **env_default("GREENER_INGRESS_ENDPOINT", required=True),
    )
    parser.add_argument(
        "--ingress-api-key",
        help="Greener ingress API key (env: GREENER_INGRESS_API_KEY)",
        **env_default("GREENER_INGRESS_API_KEY", required=True),
    )
    parser.add_argument(
        "-f",
        "--xml-file",
        required=True,
        help="Path to JUnit XML file (use '-' for stdin)",
    )
    parser.add_argument(
        "--session-id",
        help="Session ID (optional, will be generated if not provided)",
        **env_default("GREENER_SESSION_ID"),
    )
    parser.add_argument(
        "--session-description",
        help="Session description",
        **env_default("GREENER_SESSION_DESCRIPTION"),
    )
    parser.add_argument(
        "--session-labels",
        help="Session labels (comma-separated, e.g. 'ci,tag=value')",
        **env_default("GREENER_SESSION_LABELS"),
    )
    parser.add_argument(
        "--session-baggage",
        help="Session baggage (JSON object)",
        **env_default("GREENER_SESSION_BAGGAGE"),
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=os.environ.get("GREENER_INGRESS_TIMEOUT") or "300",
        help="Timeout in seconds for each ingress request (default: 300)",
    )
    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(
            ingress_endpoint=args.ingress_endpoint,
            ingress_api_key=args.ingress_api_key,
            xml_file=args.xml_file,
            session_id=args.session_id,
            session_description=args.session_description,
            session_labels=args.session_labels,
            session_baggage=args.session_baggage,
            timeout=args.timeout,
        )
    except ConfigError as exc:
        logging.getLogger("greener_reporter_junitxml").error("%s", exc)
        sys.exit(2)

    exit_code = asyncio.run(run(config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
