"""Chain clients."""

from dexgate.chains.base import ChainClient, TokenInfo
from dexgate.chains.ethereum import Ethereum
from dexgate.chains.factory import ChainRegistry

__all__ = ["ChainClient", "ChainRegistry", "Ethereum", "TokenInfo"]
