"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dexgate import __version__
from dexgate.api.errors import register_error_handlers
from dexgate.chains.factory import ChainRegistry
from dexgate.config import Settings, get_settings
from dexgate.configstore.pools import DefaultPoolRegistry
from dexgate.configstore.store import NamespaceStore
from dexgate.configstore.tokens import TokenListSynchronizer
from dexgate.connectors.uniswap.sdk import ClmmSdk, load_clmm_sdk
from dexgate.web.services.config_service import ConfigService
from dexgate.web.services.quote_service import QuoteService

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[NamespaceStore] = None,
    chains: Optional[ChainRegistry] = None,
    clmm_sdk: Optional[ClmmSdk] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The store, chain registry and services are built once here and shared by
    every request through ``app.state``.
    """
    settings = settings or get_settings()
    store = store or NamespaceStore.load(settings.conf_dir)
    chains = chains or ChainRegistry(store, rpc_timeout=settings.rpc_timeout)
    if clmm_sdk is None and settings.clmm_sdk:
        clmm_sdk = load_clmm_sdk(settings.clmm_sdk)

    pools = DefaultPoolRegistry(store, preferred_network=settings.default_pool_network)
    tokens = TokenListSynchronizer(store, chains, lock_timeout=settings.token_lock_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info(f"Serving namespaces: {', '.join(store.namespace_names()) or '(none)'}")
        yield
        await chains.close()

    app = FastAPI(
        title="dexgate API",
        description="DEX swap quotes and connector configuration",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug and not settings.is_production,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = store
    app.state.chains = chains
    app.state.config_service = ConfigService(store, pools, tokens)
    app.state.quote_service = QuoteService(store, chains, pools, clmm_sdk)

    register_error_handlers(app)

    # Register routes
    from dexgate.api.routes import health
    from dexgate.web.controllers import config_router, quotes_router, tokens_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(config_router)
    app.include_router(tokens_router)
    app.include_router(quotes_router)

    return app
