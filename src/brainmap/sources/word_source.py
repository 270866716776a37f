"""Word sources: where related words and topic seed words come from.

Every source follows the same contract: ``fetch_related`` and
``fetch_topic_words`` return up to ``count`` distinct words in order, or
raise ``SourceUnavailable``.
"""

import asyncio
import logging
import random
from typing import Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from brainmap.config import fallback_words, settings
from brainmap.exceptions import SourceUnavailable
from brainmap.sources.cache import TTLCache
from brainmap.sources.llm_client import LLMClient
from brainmap.sources.parsing import parse_word_list
from brainmap.sources.prompts import SYSTEM_PROMPT, related_words_prompt, topic_words_prompt

logger = logging.getLogger(__name__)


# Generic academic vocabulary mixed into offline related words
BASE_WORDS = [
    "analysis", "comprehensive", "fundamental", "significant", "development",
    "innovation", "framework", "sustainable", "interaction", "perspective",
    "generation", "diversity", "implementation", "methodology", "collaboration",
    "emerging", "strategy", "assessment", "integration", "transformation",
]


class WordSource(Protocol):
    """Collaborator that supplies words to the graph."""

    async def fetch_related(self, label: str, topic: str, count: int) -> list[str]:
        ...

    async def fetch_topic_words(self, topic: str, count: int) -> list[str]:
        ...


class LLMWordSource:
    """Asks an LLM for related and topic words."""

    def __init__(self, client: LLMClient | None = None) -> None:
        self.client = client or LLMClient()

    async def fetch_related(self, label: str, topic: str, count: int) -> list[str]:
        words = await self._generate(related_words_prompt(label, topic, count), count)
        # The model sometimes echoes the prompt word back
        return [w for w in words if w != label]

    async def fetch_topic_words(self, topic: str, count: int) -> list[str]:
        return await self._generate(topic_words_prompt(topic, count), count)

    async def _generate(self, prompt: str, count: int) -> list[str]:
        try:
            words = await self.client.generate_list(
                prompt=prompt,
                system_prompt=SYSTEM_PROMPT,
                count=count,
            )
        except (requests.RequestException, ValueError) as e:
            raise SourceUnavailable(f"LLM word request failed: {e}") from e
        if not words:
            raise SourceUnavailable("LLM returned no words")
        return words

    async def close(self) -> None:
        await self.client.close()


class HttpWordSource:
    """Fetches words from a brainmap API server."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.llm_timeout
        self.retries = settings.llm_retries if retries is None else retries
        self.session = session or requests.Session()

        adapter = HTTPAdapter(
            max_retries=Retry(
                total=self.retries,
                backoff_factor=0.5,
                status_forcelist=(429, 500, 502, 503, 504),
                allowed_methods=frozenset({"POST"}),
                raise_on_status=False,
            ),
        )
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    async def fetch_related(self, label: str, topic: str, count: int) -> list[str]:
        data = await self._post("/get-related-words", {"word": label, "topic": topic, "count": count})
        return self._words(data, "relatedWords", count)

    async def fetch_topic_words(self, topic: str, count: int) -> list[str]:
        data = await self._post("/get-topic-words", {"topic": topic, "count": count})
        return self._words(data, "topicWords", count)

    async def _post(self, endpoint: str, payload: dict) -> dict:
        try:
            return await asyncio.to_thread(self._sync_post, endpoint, payload)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Request to {endpoint} failed: {e}")
            raise SourceUnavailable(f"{endpoint} failed: {e}") from e

    def _sync_post(self, endpoint: str, payload: dict) -> dict:
        response = self.session.post(
            f"{self.base_url}{endpoint}",
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _words(data: dict, key: str, count: int) -> list[str]:
        words = data.get(key) if isinstance(data, dict) else None
        if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
            raise SourceUnavailable(f"Malformed payload, expected '{key}' word list")
        return list(dict.fromkeys(words))[:count]

    async def close(self) -> None:
        self.session.close()


class OfflineWordSource:
    """Mock source for offline use: draws words from the static lists."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    async def fetch_related(self, label: str, topic: str, count: int) -> list[str]:
        candidates = [
            w for w in dict.fromkeys(fallback_words(topic) + BASE_WORDS)
            if w != label
        ]
        return self.rng.sample(candidates, min(count, len(candidates)))

    async def fetch_topic_words(self, topic: str, count: int) -> list[str]:
        return fallback_words(topic, count)


class CachingWordSource:
    """Caches successful results of another source."""

    def __init__(
        self,
        inner: WordSource,
        cache: TTLCache | None = None,
        max_age: float | None = None,
    ) -> None:
        self.inner = inner
        self.cache = cache if cache is not None else TTLCache()
        self.max_age = settings.cache_max_age if max_age is None else max_age

    async def fetch_related(self, label: str, topic: str, count: int) -> list[str]:
        key = f"{label}_{topic}_{count}"
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"[cache] related words for '{label}'")
            return list(cached)
        words = await self.inner.fetch_related(label, topic, count)
        self.cache.put(key, list(words), self.max_age)
        return words

    async def fetch_topic_words(self, topic: str, count: int) -> list[str]:
        key = f"{topic}_{count}"
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"[cache] topic words for '{topic}'")
            return list(cached)
        words = await self.inner.fetch_topic_words(topic, count)
        self.cache.put(key, list(words), self.max_age)
        return words

    async def close(self) -> None:
        close = getattr(self.inner, "close", None)
        if close is not None:
            await close()


def build_word_source(offline: bool = False, remote: bool = False) -> WordSource:
    """Source configured from settings: offline mock, API server or direct LLM."""
    if offline:
        source: WordSource = OfflineWordSource()
    elif remote:
        source = HttpWordSource()
    else:
        source = LLMWordSource()
    if settings.cache_enabled:
        source = CachingWordSource(source)
    return source
