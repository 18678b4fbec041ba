"""Elasticsearch storage for plugin results.

Talks to the Elasticsearch REST API over httpx. Each scanned sample is one
document in the ``malice`` index, keyed by its SHA-256; every plugin writes
its own ``plugins.<category>.<name>`` section into it.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from .exceptions import StorageError
from .models import PLUGIN_NAME, PluginResults

logger = logging.getLogger(__name__)

DEFAULT_INDEX = "malice"


class ElasticsearchStore:
    """Upserts plugin results into an Elasticsearch index."""

    def __init__(
        self,
        url: str,
        index: str = DEFAULT_INDEX,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.index = index
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.url, timeout=self.timeout, transport=self._transport
        )

    async def init(self) -> None:
        """Check the cluster is reachable and create the index if missing."""
        try:
            async with self._client() as client:
                resp = await client.get("/")
                resp.raise_for_status()
                logger.debug(f"Connected to Elasticsearch at {self.url}")

                resp = await client.head(f"/{self.index}")
                if resp.status_code == 404:
                    logger.info(f"Creating Elasticsearch index '{self.index}'")
                    resp = await client.put(f"/{self.index}")
                    # Another plugin may have created it in the meantime.
                    if resp.status_code != 400:
                        resp.raise_for_status()
                else:
                    resp.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(
                f"failed to initialize elasticsearch at {self.url}: {e}",
                plugin=PLUGIN_NAME,
            ) from e

    async def store_plugin_results(self, results: PluginResults) -> Dict[str, Any]:
        """Upsert ``results`` into the sample's document."""
        plugins = {results.category: {results.name: results.data}}
        body = {
            "doc": {"plugins": plugins},
            "upsert": {
                "id": results.id,
                "name": results.name,
                "scan_date": datetime.now(timezone.utc).isoformat(),
                "plugins": plugins,
            },
        }
        try:
            async with self._client() as client:
                resp = await client.post(
                    f"/{self.index}/_update/{results.id}",
                    json=body,
                    params={"refresh": "wait_for"},
                )
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(
                f"failed to index malice/{results.name} results: {e}",
                plugin=results.name,
                doc_id=results.id,
            ) from e

        data = resp.json()
        logger.debug(
            f"Indexed {results.category}/{results.name} results into "
            f"{self.index}/{results.id}: {data.get('result')}"
        )
        return data
