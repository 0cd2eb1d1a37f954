"""Ethereum (and EVM-compatible network) chain client.

All EVM networks are configured under the ``ethereum`` namespace:

    networks:
      base:
        chainID: 8453
        nodeURL: https://mainnet.base.org
        tokenListType: FILE
        tokenListSource: conf/tokens/ethereum/base.json
        nativeCurrencySymbol: ETH

Gas prices come from the node's JSON-RPC endpoint over httpx.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import httpx

from dexgate.chains.base import ChainClient, TokenInfo
from dexgate.errors import ChainError, ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_LIST_FILE = "FILE"
TOKEN_LIST_URL = "URL"


class Ethereum(ChainClient):
    """Client for one EVM network."""

    def __init__(
        self,
        network: str,
        config: dict,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        """Initialize the client.

        Args:
            network: Network name (mainnet, base, arbitrum, ...)
            config: The ``ethereum.networks.<network>`` config section
            http_client: Shared httpx client (one is created if omitted)
            timeout: RPC timeout when creating an own client
        """
        if "chainID" not in config:
            raise ConfigurationError(f"chainID not configured for network '{network}'")

        self._network = network
        self._config = config
        self._chain_id = int(config["chainID"])
        self.node_url: str = config.get("nodeURL", "")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._tokens: list[TokenInfo] = []
        self._by_symbol: dict[str, TokenInfo] = {}
        self._by_address: dict[str, TokenInfo] = {}
        self._ready = False

    @property
    def chain(self) -> str:
        return "ethereum"

    @property
    def network(self) -> str:
        return self._network

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def token_list_type(self) -> str:
        return str(self._config.get("tokenListType", TOKEN_LIST_FILE)).upper()

    @property
    def token_list_source(self) -> Optional[str]:
        return self._config.get("tokenListSource")

    @property
    def native_token_symbol(self) -> str:
        return self._config.get("nativeCurrencySymbol", "ETH")

    @property
    def stored_token_list(self) -> list[TokenInfo]:
        """Tokens currently in the index."""
        return list(self._tokens)

    def ready(self) -> bool:
        """Whether init() has completed."""
        return self._ready

    async def init(self) -> None:
        """Load the configured token list."""
        source = self.token_list_source
        if (
            source
            and self.token_list_type == TOKEN_LIST_FILE
            and not Path(source).exists()
        ):
            logger.warning(f"Token list {source} for {self._network} does not exist yet")
        elif source:
            await self.load_tokens(source, self.token_list_type)
        self._ready = True
        logger.info(
            f"Ethereum {self._network} ready (chainId={self._chain_id}, {len(self._tokens)} tokens)"
        )

    async def load_tokens(self, source: str, list_type: str) -> list[TokenInfo]:
        """Rebuild the token index from a file path or URL.

        Raises:
            ConfigurationError: Source missing, unreachable or malformed.
        """
        if list_type.upper() == TOKEN_LIST_URL:
            raw = await self._fetch_token_list(source)
        else:
            raw = self._read_token_list(source)

        if not isinstance(raw, list):
            raise ConfigurationError(f"Token list {source} must be a JSON array")

        try:
            tokens = [TokenInfo.from_dict(entry) for entry in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid token entry in {source}: {e}") from e

        self._tokens = tokens
        self._by_symbol = {t.symbol.upper(): t for t in tokens}
        self._by_address = {t.address.lower(): t for t in tokens}
        logger.debug(f"Loaded {len(tokens)} tokens for ethereum/{self._network} from {source}")
        return tokens

    def get_token_by_symbol(self, symbol: str) -> Optional[TokenInfo]:
        return self._by_symbol.get(symbol.upper())

    def get_token_by_address(self, address: str) -> Optional[TokenInfo]:
        return self._by_address.get(address.lower())

    async def get_gas_price(self) -> int:
        """Get current gas price in wei via eth_gasPrice."""
        result = await self._rpc("eth_gasPrice")
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise ChainError(f"Unexpected eth_gasPrice result: {result!r}") from e

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _rpc(self, method: str, params: Optional[list] = None):
        if not self.node_url:
            raise ConfigurationError(f"nodeURL not configured for network '{self._network}'")

        try:
            response = await self._http.post(
                self.node_url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params or [],
                    "id": 1,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"RPC {method} to {self._network} failed: {e}")
            raise ChainError(f"RPC {method} failed: {e}") from e

        if response.status_code != 200:
            raise ChainError(f"RPC {method} returned HTTP {response.status_code}")

        data = response.json()
        if "error" in data:
            message = data["error"].get("message", data["error"])
            raise ChainError(f"RPC {method} error: {message}")
        return data.get("result")

    async def _fetch_token_list(self, url: str):
        try:
            response = await self._http.get(url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ConfigurationError(f"Failed to fetch token list {url}: {e}") from e
        # Uniswap-style token lists wrap the array in {"tokens": [...]}
        if isinstance(data, dict) and "tokens" in data:
            return data["tokens"]
        return data

    @staticmethod
    def _read_token_list(path: str):
        try:
            with open(Path(path), "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read token list {path}: {e}") from e
