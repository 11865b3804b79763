"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_routes
from .cache import JsonFileBacking, LocalCache, MemoryBacking
from .core import (
    ALLOWED_CORS_ORIGINS,
    CACHE_PATH,
    DB_RESET,
    configure_logging,
    engine,
    write_engine,
)
from .services import Ranker, Reconciler
from .store import DurableStore, SQLStore


def default_cache() -> LocalCache:
    backing = JsonFileBacking(CACHE_PATH) if CACHE_PATH else MemoryBacking()
    return LocalCache(backing)


def create_app(
    store: Optional[DurableStore] = None, cache: Optional[LocalCache] = None
) -> FastAPI:
    """Build the API around an explicit store and cache.

    Without arguments the configured SQL database and cache are used.
    """

    configure_logging()
    store = store if store is not None else SQLStore(engine, write_engine)
    cache = cache if cache is not None else default_cache()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if isinstance(store, SQLStore):
            store.create_schema(reset=DB_RESET)
        yield
        if isinstance(store, SQLStore):
            store.close()

    app = FastAPI(title="Speedboard API", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.cache = cache
    app.state.reconciler = Reconciler(store, cache)
    app.state.ranker = Ranker(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("speedboard.app:app", host="127.0.0.1", port=3000, reload=True)
