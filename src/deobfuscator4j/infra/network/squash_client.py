from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

import requests

from deobfuscator4j.infra.network.common import (
    DEFAULT_TIMEOUT,
    DEOBFUSCATION_ENDPOINT,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


def build_release_payload(api_key: str, environment: str, build: str, namespace: str) -> Dict[str, Any]:
    """Assemble the JSON body of a deobfuscation upload."""
    return {
        "api_key": api_key,
        "environment": environment,
        "build": build,
        "namespace": namespace,
    }


def upload_deobfuscation(
        api_host: str,
        payload: Dict[str, Any],
        *,
        timeout: int = DEFAULT_TIMEOUT,
        verify: bool = True,
) -> Tuple[bool, str]:
    """
    POST a deobfuscation map to the crash-reporting server.

    Args:
        api_host: Server base URL, without trailing slash.
        payload: Body built by `build_release_payload`.
        timeout: Request timeout in seconds.
        verify: Verify the server's TLS certificate.

    Returns:
        Tuple[bool, str]: (accepted, human-readable status).
    """
    url = api_host.rstrip("/") + DEOBFUSCATION_ENDPOINT
    headers = {"User-Agent": USER_AGENT}
    logger.debug(f"Uploading deobfuscation data to {url}")

    try:
        response = requests.post(url, json=payload, headers=headers, timeout=timeout, verify=verify)
    except requests.RequestException as e:
        logger.error(f"Upload to {url} failed: {e}")
        return False, str(e)

    if response.status_code in (200, 201):
        return True, "Success"

    msg = f"Server responded with HTTP {response.status_code}: {response.text[:200]}"
    logger.error(msg)
    return False, msg
