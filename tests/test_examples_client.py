"""Tests for the example seed client, with requests mocked."""

from unittest.mock import MagicMock

import pytest
import requests

from bringtolife.clients import examples as examples_module
from bringtolife.clients.examples import ExampleClient
from bringtolife.services.store import CreationStore
from conftest import CountingPort

URLS = [
    "https://examples.test/blog.json",
    "https://examples.test/down.json",
    "https://examples.test/cassette.json",
    "https://examples.test/list.json",
]


def fake_get(url, headers=None, timeout=None):
    if "down" in url:
        raise requests.ConnectionError("connection refused")
    response = MagicMock()
    response.raise_for_status.return_value = None
    if "list" in url:
        response.json.return_value = ["not", "an", "object"]
    else:
        name = url.rsplit("/", 1)[-1].removesuffix(".json")
        response.json.return_value = {"id": name, "name": name.title(), "html": "<!DOCTYPE html>"}
    return response


@pytest.fixture
def patched_get(monkeypatch):
    mock = MagicMock(side_effect=fake_get)
    monkeypatch.setattr(examples_module.requests, "get", mock)
    return mock


class TestExampleClient:
    @pytest.mark.asyncio
    async def test_failures_are_omitted(self, patched_get):
        documents = await ExampleClient(URLS, timeout=5).fetch_all()

        assert [d["id"] for d in documents] == ["blog", "cassette"]
        assert patched_get.call_count == len(URLS)

    def test_http_error_returns_none(self, monkeypatch):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        monkeypatch.setattr(examples_module.requests, "get", MagicMock(return_value=response))

        assert ExampleClient(URLS).fetch_one(URLS[0]) is None

    def test_invalid_json_returns_none(self, monkeypatch):
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.json.side_effect = ValueError("Expecting value")
        monkeypatch.setattr(examples_module.requests, "get", MagicMock(return_value=response))

        assert ExampleClient(URLS).fetch_one(URLS[0]) is None

    @pytest.mark.asyncio
    async def test_no_urls(self, patched_get):
        assert await ExampleClient([]).fetch_all() == []
        patched_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_seeds_store(self, patched_get):
        store = CreationStore(port=CountingPort(), examples=ExampleClient(URLS))

        loaded = await store.load()

        assert [c.name for c in loaded] == ["Blog", "Cassette"]
