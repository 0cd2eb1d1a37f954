"""Configuration service: config tree, default pools and custom tokens.

Validation runs before any mutation. Gateway errors pass through unchanged;
anything unexpected is logged and wrapped so the caller still gets the
original message.
"""

import json
import logging
from typing import Any, Optional

from dexgate.chains.base import TokenInfo
from dexgate.configstore.pools import DefaultPoolRegistry
from dexgate.configstore.store import NamespaceStore
from dexgate.configstore.tokens import TokenListSynchronizer
from dexgate.configstore.validation import prepare_config_value
from dexgate.errors import GatewayError

logger = logging.getLogger(__name__)


class ConfigService:
    """Service behind the /config and /tokens endpoints."""

    def __init__(
        self,
        store: NamespaceStore,
        pools: DefaultPoolRegistry,
        tokens: TokenListSynchronizer,
    ):
        self.store = store
        self.pools = pools
        self.tokens = tokens

    def get_config(self, chain_or_connector: Optional[str] = None) -> dict:
        """Get one namespace's tree (empty if unknown), or all of them."""
        if chain_or_connector:
            logger.info(f"Getting configuration for chain/connector: {chain_or_connector}")
            return self.store.get_namespace(chain_or_connector) or {}

        logger.info("Getting all configurations")
        return self.store.all_configurations()

    def update_config(self, config_path: str, config_value: Any) -> Any:
        """Validate, normalize and store a value.

        Returns:
            The value as stored (after normalization).
        """
        logger.info(f"Updating config path: {config_path} with value: {json.dumps(config_value)}")

        value = prepare_config_value(config_path, config_value)
        try:
            self.store.set(config_path, value)
        except GatewayError as e:
            logger.error(f"Failed to update configuration: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to update configuration: {e}")
            raise GatewayError(f"Failed to update configuration: {e}") from e

        logger.info(f"Successfully updated configuration: {config_path}")
        return value

    def get_default_pools(self, connector: str) -> dict[str, str]:
        return self.pools.get_default_pools(connector)

    def add_default_pool(
        self,
        connector: str,
        base_token: str,
        quote_token: str,
        pool_address: Optional[str],
    ) -> str:
        return self._guarded(
            "add default pool",
            self.pools.add_default_pool,
            connector,
            base_token,
            quote_token,
            pool_address,
        )

    def remove_default_pool(self, connector: str, base_token: str, quote_token: str) -> str:
        return self._guarded(
            "remove default pool",
            self.pools.remove_default_pool,
            connector,
            base_token,
            quote_token,
        )

    async def add_token(
        self,
        chain: str,
        network: str,
        name: str,
        symbol: str,
        address: str,
        decimals: int,
    ) -> TokenInfo:
        try:
            return await self.tokens.add_token(chain, network, name, symbol, address, decimals)
        except GatewayError as e:
            logger.error(f"Failed to add default token: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to add default token: {e}")
            raise GatewayError(f"Failed to add token: {e}") from e

    async def remove_token(self, chain: str, network: str, token: str) -> int:
        try:
            return await self.tokens.remove_token(chain, network, token)
        except GatewayError as e:
            logger.error(f"Failed to remove default token: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to remove default token: {e}")
            raise GatewayError(f"Failed to remove token: {e}") from e

    @staticmethod
    def _guarded(action: str, func, *args):
        try:
            return func(*args)
        except GatewayError as e:
            logger.error(f"Failed to {action}: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to {action}: {e}")
            raise GatewayError(f"Failed to {action}: {e}") from e
