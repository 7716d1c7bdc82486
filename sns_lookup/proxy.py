import logging
from typing import Any, List, Optional

import requests

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_PROXY_URL

logger = logging.getLogger(__name__)


class ProxyError(RuntimeError):
    """Raised when the SDK proxy answers with an error or an unexpected body."""


class ProxyClient:
    """
    Client for the SNS SDK proxy, an HTTP worker that runs the SDK server side.
    Every endpoint answers {"s": "ok", "result": ...}.
    """

    def __init__(self, base_url: str = DEFAULT_PROXY_URL, timeout: float = DEFAULT_HTTP_TIMEOUT, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}/{path}"
        logger.debug("GET %s", url)
        res = self.session.get(url, timeout=self.timeout)
        if res.status_code != 200:
            raise ProxyError(f"Proxy returned HTTP {res.status_code} for {path}")
        try:
            data = res.json()
        except ValueError as exc:
            raise ProxyError(f"Proxy returned invalid JSON for {path}") from exc
        if not isinstance(data, dict) or data.get("s") != "ok":
            raise ProxyError(f"Proxy error for {path}: {data!r}")
        return data.get("result")

    def resolve(self, domain: str) -> Optional[str]:
        """Owner (or SOL record destination) of a domain, as base58 text."""
        return self._get(f"resolve/{domain}")

    def get_domains(self, owner: str) -> List[Any]:
        return self._get(f"domains/{owner}") or []

    def get_record_v2(self, domain: str, record: str) -> Any:
        return self._get(f"record-v2/{domain}/{record}")
