"""Pytest configuration and fixtures

Provides deterministic stand-ins for the network edges (generation backend,
example fetch) and an in-memory history port, so nothing here touches the
network or the real history file.
"""

import asyncio
from datetime import datetime, timezone
from io import BytesIO

import pytest
from PIL import Image

from bringtolife.engine.orchestrator import GenerationOrchestrator
from bringtolife.models import Creation, GenerationRequest
from bringtolife.services.store import CreationStore, MemoryHistoryPort

SAMPLE_DOCUMENT = "<!DOCTYPE html><html><body><button>Start</button></body></html>"


class FakeGenerator:
    """Deterministic generator: records requests, returns a fixed document or raises."""

    def __init__(self, document: str = SAMPLE_DOCUMENT, error: Exception | None = None):
        self.document = document
        self.error = error
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.document


class BlockingGenerator(FakeGenerator):
    """Generator that waits for a gate, to observe the in-flight state."""

    def __init__(self, document: str = SAMPLE_DOCUMENT):
        super().__init__(document)
        self.gate = asyncio.Event()

    async def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        await self.gate.wait()
        return self.document


class FakeExamples:
    """Example source returning fixed documents."""

    def __init__(self, documents: list[dict] | None = None):
        self.documents = documents or []
        self.calls = 0

    async def fetch_all(self) -> list[dict]:
        self.calls += 1
        return list(self.documents)


class CountingPort(MemoryHistoryPort):
    """Memory port that also counts reads."""

    def __init__(self, data: str | None = None, quota_bytes: int | None = None):
        super().__init__(data, quota_bytes)
        self.reads = 0

    def read(self) -> str | None:
        self.reads += 1
        return super().read()


def make_creation(name: str = "Chess Clock", creation_id: str | None = None, **kwargs) -> Creation:
    if creation_id is not None:
        kwargs["id"] = creation_id
    kwargs.setdefault("document", SAMPLE_DOCUMENT)
    return Creation(name=name, **kwargs)


@pytest.fixture
def fixed_time():
    return datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def port():
    return CountingPort()


@pytest.fixture
def examples():
    return FakeExamples(
        [
            {"id": "ex-1", "name": "Cassette", "html": "<!DOCTYPE html><p>1</p>", "timestamp": "2025-01-01T00:00:00.000Z"},
            {"id": "ex-2", "name": "Chess", "html": "<!DOCTYPE html><p>2</p>"},
        ]
    )


@pytest.fixture
def store(port, examples):
    return CreationStore(port=port, examples=examples)


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def orchestrator(generator, store):
    return GenerationOrchestrator(generator=generator, store=store, locale="en")


@pytest.fixture
def png_bytes():
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / "napkin-sketch.png"
    path.write_bytes(png_bytes)
    return path
