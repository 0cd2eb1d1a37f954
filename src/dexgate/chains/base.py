"""Abstract chain client interface and token descriptors."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenInfo:
    """A token entry as stored in a token list file."""

    chain_id: int
    address: str
    name: str
    symbol: str
    decimals: int

    @classmethod
    def from_dict(cls, data: dict) -> "TokenInfo":
        """Build from a token list entry (camelCase keys)."""
        return cls(
            chain_id=int(data["chainId"]),
            address=str(data["address"]),
            name=str(data["name"]),
            symbol=str(data["symbol"]),
            decimals=int(data["decimals"]),
        )

    def to_dict(self) -> dict:
        """Convert to the token list file representation."""
        return {
            "chainId": self.chain_id,
            "address": self.address,
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
        }


class ChainClient(ABC):
    """Abstract base class for chain clients.

    A chain client owns an in-memory token index built from its token list.
    The index is a cache of the file and is refreshed with load_tokens()
    after every write to the list.
    """

    @property
    @abstractmethod
    def chain(self) -> str:
        """Chain name (ethereum, ...)."""
        pass

    @property
    @abstractmethod
    def network(self) -> str:
        """Network name (mainnet, base, ...)."""
        pass

    @property
    @abstractmethod
    def chain_id(self) -> int:
        """Numeric chain ID."""
        pass

    @property
    @abstractmethod
    def token_list_type(self) -> str:
        """How the token list source is read ("FILE" or "URL")."""
        pass

    @property
    @abstractmethod
    def native_token_symbol(self) -> str:
        """Symbol of the gas token."""
        pass

    @abstractmethod
    async def load_tokens(self, source: str, list_type: str) -> list[TokenInfo]:
        """(Re)build the token index from a token list."""
        pass

    @abstractmethod
    async def get_gas_price(self) -> int:
        """Current gas price in wei."""
        pass

    @abstractmethod
    def get_token_by_symbol(self, symbol: str) -> Optional[TokenInfo]:
        """Look up a token in the index (case-insensitive)."""
        pass

    async def close(self) -> None:
        """Release network resources."""
        pass
