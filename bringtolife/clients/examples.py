"""Example creation client - fetches first-run example documents."""

import asyncio
import logging
from typing import Any

import requests

from ..config import EXAMPLE_FETCH_TIMEOUT

logger = logging.getLogger(__name__)


class ExampleClient:
    """Fetch portable creation documents from a fixed list of URLs."""

    def __init__(self, urls: list[str], timeout: float = EXAMPLE_FETCH_TIMEOUT):
        self.urls = list(urls)
        self.timeout = timeout

    def fetch_one(self, url: str) -> dict[str, Any] | None:
        """Fetch a single example. Returns None on any failure."""
        try:
            response = requests.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Failed to fetch example from {url}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Example at {url} is not a JSON object")
            return None
        return data

    async def fetch_all(self) -> list[dict[str, Any]]:
        """
        Fetch every example concurrently.

        Each URL is independent: a failed fetch is omitted, never failing the batch.

        Returns:
            Example documents in URL order (may be empty)
        """
        if not self.urls:
            return []

        results = await asyncio.gather(
            *(asyncio.to_thread(self.fetch_one, url) for url in self.urls)
        )
        examples = [data for data in results if data is not None]
        logger.info(f"Fetched {len(examples)}/{len(self.urls)} examples")
        return examples
