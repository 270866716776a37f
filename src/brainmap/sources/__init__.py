"""Word sources feeding the graph: LLM, API server and offline lists."""

from brainmap.sources.cache import TTLCache
from brainmap.sources.llm_client import LLMClient
from brainmap.sources.parsing import parse_word_list, strip_thinking
from brainmap.sources.word_source import (
    CachingWordSource,
    HttpWordSource,
    LLMWordSource,
    OfflineWordSource,
    WordSource,
    build_word_source,
)

__all__ = [
    "TTLCache",
    "LLMClient",
    "parse_word_list",
    "strip_thinking",
    "WordSource",
    "LLMWordSource",
    "HttpWordSource",
    "OfflineWordSource",
    "CachingWordSource",
    "build_word_source",
]
