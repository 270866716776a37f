"""API routes for brainmap.

Provides:
- /api status
- /api/get-related-words
- /api/get-topic-words
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from brainmap.exceptions import SourceUnavailable
from brainmap.sources.word_source import WordSource

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ============================================================================
# Models
# ============================================================================


class RelatedWordsRequest(BaseModel):
    """Related words for one word within a topic."""

    word: str = Field(min_length=1)
    topic: str = Field(min_length=1)
    count: int = Field(default=4, ge=1, le=20)


class RelatedWordsResponse(BaseModel):
    relatedWords: list[str]


class TopicWordsRequest(BaseModel):
    """Seed words for a topic."""

    topic: str = Field(min_length=1)
    count: int = Field(default=5, ge=1, le=20)


class TopicWordsResponse(BaseModel):
    topicWords: list[str]


class StatusResponse(BaseModel):
    """API status."""

    status: str = "online"
    message: str = "brainmap API is running"
    endpoints: list[str] = ["/api/get-topic-words", "/api/get-related-words"]
    version: str = "0.1.0"


# ============================================================================
# Endpoints
# ============================================================================


def get_word_source(request: Request) -> WordSource:
    """Get word source from app state."""
    return request.app.state.word_source


@router.get("", response_model=StatusResponse)
async def status() -> StatusResponse:
    return StatusResponse()


@router.post("/get-related-words", response_model=RelatedWordsResponse)
async def get_related_words(body: RelatedWordsRequest, request: Request) -> RelatedWordsResponse:
    """Related words for ``body.word``."""
    source = get_word_source(request)
    try:
        words = await source.fetch_related(body.word, body.topic, body.count)
    except SourceUnavailable as e:
        logger.error(f"Related words failed for '{body.word}': {e}")
        raise HTTPException(status_code=500, detail="Failed to generate related words")
    return RelatedWordsResponse(relatedWords=words)


@router.post("/get-topic-words", response_model=TopicWordsResponse)
async def get_topic_words(body: TopicWordsRequest, request: Request) -> TopicWordsResponse:
    """Representative words for ``body.topic``."""
    source = get_word_source(request)
    try:
        words = await source.fetch_topic_words(body.topic, body.count)
    except SourceUnavailable as e:
        logger.error(f"Topic words failed for '{body.topic}': {e}")
        raise HTTPException(status_code=500, detail="Failed to generate topic words")
    return TopicWordsResponse(topicWords=words)
