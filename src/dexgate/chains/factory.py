"""Registry of chain clients, one per (chain, network).

Clients are created from the namespace store on first use and reused for
the process lifetime.
"""

import logging
from typing import Optional

import httpx

from dexgate.chains.base import ChainClient
from dexgate.configstore.store import NamespaceStore
from dexgate.errors import InvalidArgument

logger = logging.getLogger(__name__)

SUPPORTED_CHAINS = ("ethereum",)


class ChainRegistry:
    """Creates and caches chain clients."""

    def __init__(
        self,
        store: NamespaceStore,
        http_client: Optional[httpx.AsyncClient] = None,
        rpc_timeout: float = 10.0,
    ):
        self.store = store
        self._http = http_client
        self._owns_http = http_client is None
        self._rpc_timeout = rpc_timeout
        self._instances: dict[tuple[str, str], ChainClient] = {}

    def register(self, client: ChainClient) -> None:
        """Install a ready-made client (replaces any cached one)."""
        self._instances[(client.chain, client.network)] = client

    async def get_instance(self, chain: str, network: str) -> ChainClient:
        """Get the client for a chain/network, initializing it on first use.

        Raises:
            InvalidArgument: Chain unsupported or network not configured.
        """
        key = (chain, network)
        client = self._instances.get(key)
        if client is not None:
            return client

        if chain not in SUPPORTED_CHAINS:
            raise InvalidArgument(
                f"Chain '{chain}' is not supported. Supported chains are: {', '.join(SUPPORTED_CHAINS)}"
            )

        config = self.store.get(f"{chain}.networks.{network}")
        if not isinstance(config, dict):
            raise InvalidArgument(f"Network '{network}' is not configured for chain '{chain}'")

        from dexgate.chains.ethereum import Ethereum

        client = Ethereum(network, config, http_client=self._shared_http())
        await client.init()
        self._instances[key] = client
        logger.info(f"Created chain client for {chain}/{network}")
        return client

    async def close(self) -> None:
        """Close all clients and the shared HTTP client."""
        for client in self._instances.values():
            await client.close()
        self._instances.clear()
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _shared_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._rpc_timeout)
        return self._http
