"""Prompts for the word-source LLM calls."""

SYSTEM_PROMPT = """You are a vocabulary assistant for IELTS and TOEFL learners.
Answer with plain word lists only."""

RELATED_WORDS_PROMPT = """Give {count} English words associated with the word "{word}" in the topic "{topic}".
- Return only the word list, one word per line, no explanations
- Every word should suit IELTS/TOEFL exam preparation and fit the topic
- Prefer precise, expressive words over very simple ones"""

TOPIC_WORDS_PROMPT = """Give {count} representative English words for the topic "{topic}".
- Return only the word list, one word per line, no explanations
- Every word should suit IELTS/TOEFL exam preparation
- Prefer core vocabulary strongly tied to the topic"""


def related_words_prompt(word: str, topic: str, count: int) -> str:
    return RELATED_WORDS_PROMPT.format(word=word, topic=topic, count=count)


def topic_words_prompt(topic: str, count: int) -> str:
    return TOPIC_WORDS_PROMPT.format(topic=topic, count=count)
