"""
Word list parsing for LLM output.

Handles:
- <think>...</think> reasoning blocks
- Newline or comma separated lists
- Bullets, numbering and quotes around items
"""

import re

THINKING_PATTERNS = [
    re.compile(r'<think>[\s\S]*?</think>', re.DOTALL),
    re.compile(r'<thinking>[\s\S]*?</thinking>', re.DOTALL),
]

# Incomplete tag: model stopped mid-thought
INCOMPLETE_THINKING = re.compile(r'<think(?:ing)?>[\s\S]*\Z')

SEPARATORS = re.compile(r'[\n,]+')
ITEM_PREFIX = re.compile(r'^[\s\-\*\•\d\.\)]+')
QUOTES = '"\'`“”‘’'


def strip_thinking(text: str) -> str:
    """Remove reasoning blocks, keeping the answer."""
    for pattern in THINKING_PATTERNS:
        text = pattern.sub('', text)
    text = INCOMPLETE_THINKING.sub('', text)
    return text.strip()


def parse_word_list(raw_output: str, count: int | None = None) -> list[str]:
    """
    Parse a word list from LLM output.

    Args:
        raw_output: Raw LLM output
        count: Keep at most this many words

    Returns:
        Distinct words in the order the model gave them
    """
    if not raw_output:
        return []

    text = strip_thinking(raw_output)

    words: list[str] = []
    seen: set[str] = set()
    for item in SEPARATORS.split(text):
        item = ITEM_PREFIX.sub('', item).strip().strip(QUOTES).strip()
        if not item or item in seen:
            continue
        seen.add(item)
        words.append(item)

    if count is not None:
        words = words[:count]
    return words
