from __future__ import annotations
import os
import logging
from typing import Any, Dict, Optional
import requests
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class BaseClient:
    """Base HTTP client: owns the requests session, timeout and env lookup.

    No retries and no rate limiting; transport errors from `requests` reach
    the caller unchanged.
    """

    def __init__(self, timeout: int = 30):
        self.session = requests.Session()
        self.timeout = timeout

    def _send(self, method: str, url: str, *, headers: Dict[str, str] | None = None, data: Any | None = None) -> requests.Response:
        logger.debug("%s %s", method, _redact(url))
        resp = self.session.request(method, url, headers=headers, data=data, timeout=self.timeout)
        logger.debug("%s %s -> %s", method, _redact(url), resp.status_code)
        return resp

    @staticmethod
    def decode(resp: requests.Response) -> Any:
        """Decoded JSON body, or None when the body is not JSON."""
        try:
            return resp.json()
        except ValueError:
            return None

    @staticmethod
    def env(name: str, required: bool = True) -> Optional[str]:
        val = os.getenv(name)
        if required and (val is None or val.strip() == ''):
            raise ConfigurationError(f"Missing required environment variable: {name}")
        return val


def _redact(url: str) -> str:
    # strip credentials and query (client_secret, code) before logging
    scheme, sep, rest = url.partition('://')
    if '@' in rest.split('/', 1)[0]:
        rest = rest.split('@', 1)[1]
    return scheme + sep + rest.split('?', 1)[0]
