"""brainmap: interactive vocabulary mind-map driven by an LLM word source."""

__version__ = "0.1.0"
