"""FastAPI application for the brainmap word API."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brainmap.api.routes import router
from brainmap.config import settings
from brainmap.sources.cache import TTLCache
from brainmap.sources.word_source import CachingWordSource, LLMWordSource, WordSource

logger = logging.getLogger(__name__)


def create_app(word_source: WordSource | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without an injected ``word_source`` the app talks to the configured LLM,
    caching answers for ``settings.cache_max_age`` seconds.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application lifespan - startup and shutdown."""
        logger.info("Starting brainmap API...")
        owned = word_source is None
        if owned:
            source: WordSource = LLMWordSource()
            if settings.cache_enabled:
                source = CachingWordSource(source, TTLCache(default_max_age=settings.cache_max_age))
            logger.info(f"Using LLM word source: {settings.llm_model} at {settings.llm_base_url}")
        else:
            source = word_source
        app.state.word_source = source

        yield

        logger.info("Shutting down brainmap API...")
        if owned:
            await source.close()

    app = FastAPI(
        title="brainmap",
        description="Related-word API for the vocabulary mind-map",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "brainmap.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
