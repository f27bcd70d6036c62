"""Ingress API clients."""

from greener_reporter_junitxml.ingress.client import IngressClient
from greener_reporter_junitxml.ingress.config import IngressConfig
from greener_reporter_junitxml.ingress.sessions import open_session
from greener_reporter_junitxml.ingress.testcases import submit_testcases

__all__ = ["IngressClient", "IngressConfig", "open_session", "submit_testcases"]
