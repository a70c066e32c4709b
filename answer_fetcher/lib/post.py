from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)


def normalize_fingerprint(fingerprint: str) -> str:
    """``AA:BB:cc`` -> ``aabbcc``."""

    return "".join(fingerprint.split()).replace(":", "").lower()


class FingerprintAdapter(HTTPAdapter):
    """Accept exactly the server certificate whose SHA-256 digest matches.

    urllib3 checks ``assert_fingerprint`` against the peer certificate even
    when chain validation is off, so self-signed answer servers work.
    """

    def __init__(self, fingerprint: str, **kwargs: Any) -> None:
        self.fingerprint = normalize_fingerprint(fingerprint)
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["assert_fingerprint"] = self.fingerprint
        super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        proxy_kwargs["assert_fingerprint"] = self.fingerprint
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def build_session(fingerprint: Optional[str]) -> requests.Session:
    session = requests.Session()
    if fingerprint:
        session.mount("https://", FingerprintAdapter(fingerprint))
        # Pinning replaces CA validation.
        session.verify = False
    return session


def call(
    url: str,
    fingerprint: Optional[str],
    payload: Dict[str, Any],
    *,
    timeout: float = 60.0,
) -> str:
    """POST ``payload`` as JSON to ``url`` and return the answer body.

    No retries. Connection, TLS and HTTP status errors propagate as
    ``requests`` exceptions.
    """

    logger.info("Sending POST request to '%s' (pinned=%s)", url, bool(fingerprint))
    with build_session(fingerprint) as session:
        resp = session.post(url, json=payload, timeout=timeout, verify=session.verify)
        resp.raise_for_status()
        return resp.text
