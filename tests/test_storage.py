"""Tests for Elasticsearch storage using httpx.MockTransport."""

import json

import httpx
import pytest

from bitdefender.exceptions import StorageError
from bitdefender.models import PluginResults, ScanResult
from bitdefender.storage import ElasticsearchStore


def _results() -> PluginResults:
    result = ScanResult(
        infected=True, result="EICAR", engine="7.90123", updated="20230615"
    ).with_markdown("md")
    return PluginResults.from_scan("deadbeef", result)


class Recorder:
    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        status, body = self.responses.get(key, (404, {}))
        return httpx.Response(status, json=body)


class TestInit:
    @pytest.mark.asyncio
    async def test_creates_missing_index(self):
        rec = Recorder({
            ("GET", "/"): (200, {"version": {"number": "8.11.0"}}),
            ("HEAD", "/malice"): (404, {}),
            ("PUT", "/malice"): (200, {"acknowledged": True}),
        })
        store = ElasticsearchStore("http://es:9200/", transport=httpx.MockTransport(rec))
        await store.init()

        assert [(r.method, r.url.path) for r in rec.requests] == [
            ("GET", "/"),
            ("HEAD", "/malice"),
            ("PUT", "/malice"),
        ]

    @pytest.mark.asyncio
    async def test_existing_index(self):
        rec = Recorder({
            ("GET", "/"): (200, {}),
            ("HEAD", "/malice"): (200, {}),
        })
        store = ElasticsearchStore("http://es:9200", transport=httpx.MockTransport(rec))
        await store.init()
        assert len(rec.requests) == 2

    @pytest.mark.asyncio
    async def test_unreachable(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        store = ElasticsearchStore("http://es:9200", transport=httpx.MockTransport(refuse))
        with pytest.raises(StorageError) as exc_info:
            await store.init()
        assert "failed to initialize elasticsearch" in str(exc_info.value)
        assert exc_info.value.plugin == "bitdefender"


class TestStorePluginResults:
    @pytest.mark.asyncio
    async def test_upsert_document(self):
        rec = Recorder({
            ("POST", "/malice/_update/deadbeef"): (200, {"result": "created"}),
        })
        store = ElasticsearchStore("http://es:9200", transport=httpx.MockTransport(rec))
        data = await store.store_plugin_results(_results())

        assert data["result"] == "created"
        request = rec.requests[0]
        body = json.loads(request.content)
        section = body["doc"]["plugins"]["av"]["bitdefender"]
        assert section == {
            "infected": True,
            "result": "EICAR",
            "engine": "7.90123",
            "updated": "20230615",
        }
        assert body["upsert"]["id"] == "deadbeef"
        assert body["upsert"]["name"] == "bitdefender"
        assert "scan_date" in body["upsert"]

    @pytest.mark.asyncio
    async def test_http_error_raises_with_context(self):
        rec = Recorder({
            ("POST", "/malice/_update/deadbeef"): (500, {"error": "boom"}),
        })
        store = ElasticsearchStore("http://es:9200", transport=httpx.MockTransport(rec))
        with pytest.raises(StorageError) as exc_info:
            await store.store_plugin_results(_results())

        err = exc_info.value
        assert err.plugin == "bitdefender"
        assert err.doc_id == "deadbeef"
        assert "failed to index malice/bitdefender results" in str(err)
