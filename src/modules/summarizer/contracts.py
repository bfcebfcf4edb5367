import logging
from abc import ABC, abstractmethod

import httpx

from src.modules.summarizer.retry import retry_on_status

logger = logging.getLogger(__name__)


class SummarizationError(Exception):
    """A provider could not produce a summary for the given text."""


class SummarizationProvider(ABC):
    """Hosted text-generation endpoint that turns English text into a Chinese summary.

    Subclasses only describe the request and response shapes; transport,
    retry and error mapping are shared here.
    """

    name: str
    endpoint: str
    model: str
    max_input_chars: int = 500
    key_prefix: str | None = None

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    @abstractmethod
    def build_payload(self, text: str) -> dict: ...

    @abstractmethod
    def parse_response(self, data: dict) -> str: ...

    @retry_on_status()
    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        return await client.post(
            self.endpoint,
            json=payload,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
        )

    async def summarize(self, client: httpx.AsyncClient, text: str) -> str:
        payload = self.build_payload(text[: self.max_input_chars])
        try:
            response = await self._post(client, payload)
        except httpx.HTTPError as exc:
            raise SummarizationError(f"{self.name} request failed: {exc}") from exc

        if not response.is_success:
            raise SummarizationError(
                f"{self.name} API error {response.status_code}: {response.text[:200]}"
            )

        try:
            summary = self.parse_response(response.json())
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise SummarizationError(f"{self.name} returned an unexpected payload") from exc

        summary = summary.strip()
        if not summary:
            raise SummarizationError(f"{self.name} returned an empty summary")
        return summary
