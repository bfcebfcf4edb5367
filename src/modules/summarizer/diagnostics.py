"""Credential and connectivity checks for a summarization provider."""

import asyncio
import logging

import httpx

from src.modules.summarizer.contracts import SummarizationError, SummarizationProvider

logger = logging.getLogger(__name__)

REQUEST_DELAY = 2.0

SAMPLE_ARTICLES = [
    (
        "Tesla Introduces New Battery Technology",
        "Tesla has announced a breakthrough in battery technology that could increase "
        "electric vehicle range by 50%. The new lithium-ion batteries use advanced "
        "materials and manufacturing processes.",
    ),
    (
        "Aluminum Alloy Innovation for Automotive Industry",
        "Researchers have developed a new aluminum alloy that is 30% lighter and 20% "
        "stronger than traditional materials, making it ideal for automotive applications.",
    ),
    (
        "Carbon Fiber Composite Materials Advance",
        "New carbon fiber composite materials offer improved strength-to-weight ratios "
        "for vehicle manufacturing, potentially reducing fuel consumption by up to 15%.",
    ),
]

_INVISIBLE = {"\n": "line feed", "\r": "carriage return", "\t": "tab", " ": "space"}


def inspect_api_key(raw: str | None, prefix: str | None = None) -> list[str]:
    """List formatting problems in a raw credential as read from the environment."""
    if not raw:
        return ["not set"]
    problems = [f"contains {label}" for char, label in _INVISIBLE.items() if char in raw]
    if prefix and not raw.strip().startswith(prefix):
        problems.append(f"expected prefix '{prefix}', got '{raw.strip()[:len(prefix)]}'")
    return problems


async def check_provider(
    provider: SummarizationProvider, delay: float = REQUEST_DELAY
) -> tuple[int, int]:
    """Summarize the sample articles one at a time; returns ``(ok, failed)``."""
    ok = failed = 0
    async with httpx.AsyncClient(timeout=60.0) as client:
        for index, (title, description) in enumerate(SAMPLE_ARTICLES):
            try:
                summary = await provider.summarize(client, f"{title}\n\n{description}")
            except SummarizationError as exc:
                failed += 1
                logger.error("[%d/%d] %s failed: %s", index + 1, len(SAMPLE_ARTICLES), title, exc)
            else:
                ok += 1
                logger.info("[%d/%d] %s -> %s", index + 1, len(SAMPLE_ARTICLES), title, summary)
            if index < len(SAMPLE_ARTICLES) - 1:
                await asyncio.sleep(delay)
    return ok, failed
