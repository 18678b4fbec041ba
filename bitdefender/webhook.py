"""Posts scan results to the Malice webhook endpoint."""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .exceptions import WebhookError

logger = logging.getLogger(__name__)

SCAN_ID_HEADER = "X-Malice-ID"


async def post_results(
    endpoint: str,
    payload: Dict[str, Any],
    scan_id: str,
    proxy: Optional[str] = None,
    timeout: float = 30,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """POST ``payload`` as JSON to ``endpoint``.

    Returns the response status line (e.g. ``"200 OK"``); the body is not
    inspected.
    """
    if not endpoint:
        raise WebhookError("no webhook endpoint configured (set MALICE_ENDPOINT)")

    client_args: Dict[str, Any] = {"timeout": timeout, "transport": transport}
    if proxy:
        client_args["proxy"] = proxy

    try:
        async with httpx.AsyncClient(**client_args) as client:
            resp = await client.post(
                endpoint,
                content=json.dumps(payload),
                headers={
                    SCAN_ID_HEADER: scan_id,
                    "Content-Type": "application/json",
                },
            )
    except httpx.HTTPError as e:
        raise WebhookError(f"failed to POST results to {endpoint}: {e}") from e

    status = f"{resp.status_code} {resp.reason_phrase}"
    logger.info(f"Webhook {endpoint} responded {status}")
    return status
