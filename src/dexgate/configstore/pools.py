"""Default pools per connector, stored inside the connector's namespace.

Pools live at ``<connector>.networks.<network>.<type>.<BASE>-<QUOTE>``.
When the caller does not name a network, the preferred network is used if
the connector configures it; otherwise the first network listed in the
connector's config file.
"""

import logging
from typing import Optional

from dexgate.configstore.paths import ABSENT
from dexgate.configstore.store import NamespaceStore
from dexgate.errors import InvalidArgument, NotFound

logger = logging.getLogger(__name__)

DEFAULT_PREFERRED_NETWORK = "mainnet-beta"


def pair_key(base_token: str, quote_token: str) -> str:
    """Key for a default pool entry (symbols kept as given)."""
    if not base_token or not quote_token:
        raise InvalidArgument("Both baseToken and quoteToken are required")
    if "." in base_token or "." in quote_token:
        raise InvalidArgument("Token symbols must not contain '.'")
    return f"{base_token}-{quote_token}"


def parse_connector(connector: str) -> tuple[str, str]:
    """Split 'name/type' into its parts.

    Raises:
        InvalidArgument: Name or type is missing.
    """
    parts = (connector or "").split("/")
    name = parts[0]
    connector_type = parts[1] if len(parts) > 1 else ""
    if not name:
        raise InvalidArgument("Connector name is required")
    if not connector_type:
        raise InvalidArgument("Connector type is required (e.g., amm, clmm)")
    if "." in name or "." in connector_type:
        raise InvalidArgument("Connector name and type must not contain '.'")
    return name, connector_type


class DefaultPoolRegistry:
    """Read and edit default pools through the namespace store."""

    def __init__(
        self,
        store: NamespaceStore,
        preferred_network: str = DEFAULT_PREFERRED_NETWORK,
    ):
        self.store = store
        self.preferred_network = preferred_network

    def active_network(self, connector_name: str) -> Optional[str]:
        """Network whose pools are used for a connector, or None if it has none."""
        networks = self.store.get(f"{connector_name}.networks")
        if not isinstance(networks, dict) or not networks:
            return None
        if self.preferred_network in networks:
            return self.preferred_network
        # dicts keep the YAML file's key order
        return next(iter(networks))

    def get_default_pools(self, connector: str) -> dict[str, str]:
        """Pools for 'name/type' on the active network (empty if unconfigured)."""
        name, connector_type = parse_connector(connector)

        network = self.active_network(name)
        if network is None:
            logger.warning(f"Connector {name} configuration not found or missing networks")
            return {}

        pools = self.store.get(f"{name}.networks.{network}.{connector_type}")
        if not isinstance(pools, dict):
            pools = {}

        logger.info(f"Retrieved default pools for {connector} on network {network}")
        # Anything but pair -> address entries was written by hand; skip it
        return {pair: address for pair, address in pools.items() if isinstance(address, str)}

    def add_default_pool(
        self,
        connector: str,
        base_token: str,
        quote_token: str,
        pool_address: Optional[str] = None,
    ) -> str:
        """Register a pool for a pair, overwriting any existing entry.

        Returns:
            The network the pool was written to.

        Raises:
            InvalidArgument: Pool address or connector parts missing.
            NotFound: Connector has no configured networks.
        """
        if not pool_address:
            raise InvalidArgument("Pool address is required for adding a default pool")
        name, connector_type = parse_connector(connector)
        network = self._require_network(name)

        key = pair_key(base_token, quote_token)
        self.store.set(f"{name}.networks.{network}.{connector_type}.{key}", pool_address)

        logger.info(
            f"Added default pool for {connector}: {key} (address: {pool_address}) on network {network}"
        )
        return network

    def remove_default_pool(self, connector: str, base_token: str, quote_token: str) -> str:
        """Remove a pair's pool; removing an absent pair is a no-op.

        Returns:
            The network the pool was removed from.
        """
        name, connector_type = parse_connector(connector)
        network = self._require_network(name)

        key = pair_key(base_token, quote_token)
        self.store.delete(f"{name}.networks.{network}.{connector_type}.{key}")

        logger.info(f"Removed default pool for {connector}: {key} on network {network}")
        return network

    def find_default_pool(
        self,
        connector_name: str,
        network: str,
        connector_type: str,
        base_token: str,
        quote_token: str,
    ) -> Optional[str]:
        """Pool address for a pair on an explicit network, or None."""
        address = self.store.get(
            f"{connector_name}.networks.{network}.{connector_type}.{pair_key(base_token, quote_token)}"
        )
        if address is ABSENT or not isinstance(address, str):
            return None
        return address

    def _require_network(self, name: str) -> str:
        network = self.active_network(name)
        if network is None:
            raise NotFound(f"Connector {name} configuration not found or missing networks")
        return network
