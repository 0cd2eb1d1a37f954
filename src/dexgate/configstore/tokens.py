"""Custom token lists kept in sync with the chain clients' token index.

The JSON file named by ``<chain>.networks.<network>.tokenListSource`` is the
source of truth. After every successful edit the owning chain client reloads
it, so the token is usable as soon as the call returns. Edits to one file
are serialized with a per-path lock; nothing guards against other processes
editing the same file.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from dexgate.chains.base import TokenInfo
from dexgate.chains.ethereum import TOKEN_LIST_FILE
from dexgate.configstore.paths import ABSENT
from dexgate.configstore.store import NamespaceStore
from dexgate.errors import (
    ConfigurationError,
    Conflict,
    InvalidArgument,
    NotFound,
    PersistenceError,
)
from dexgate.utils.locks import file_lock

if TYPE_CHECKING:
    from dexgate.chains.factory import ChainRegistry

logger = logging.getLogger(__name__)


class TokenListSynchronizer:
    """Add and remove entries in per-network token list files."""

    def __init__(
        self,
        store: NamespaceStore,
        chains: "ChainRegistry",
        lock_timeout: float = 30.0,
    ):
        self.store = store
        self.chains = chains
        self.lock_timeout = lock_timeout

    async def add_token(
        self,
        chain: str,
        network: str,
        name: str,
        symbol: str,
        address: str,
        decimals: int,
    ) -> TokenInfo:
        """Append a token to the network's list and reload the chain client.

        Raises:
            InvalidArgument: Unknown network or bad decimals.
            ConfigurationError: No token list configured, or the file is unreadable.
            Conflict: Address or symbol already listed (case-insensitive).
            PersistenceError: The list could not be written.
        """
        path = self._token_list_path(chain, network)
        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
            raise InvalidArgument("decimals must be a non-negative integer")

        async with file_lock(path, timeout=self.lock_timeout, operation="add_token"):
            tokens = self._read_list(path, missing_ok=True)

            normalized_address = address.lower()
            normalized_symbol = symbol.upper()
            for entry in tokens:
                if (
                    str(entry.get("address", "")).lower() == normalized_address
                    or str(entry.get("symbol", "")).upper() == normalized_symbol
                ):
                    raise Conflict(
                        f"Token with address {address} or symbol {symbol} already exists."
                    )

            client = await self.chains.get_instance(chain, network)
            token = TokenInfo(
                chain_id=client.chain_id,
                address=address,
                name=name,
                symbol=symbol,
                decimals=decimals,
            )
            tokens.append(token.to_dict())

            self._write_list(path, tokens)
            await client.load_tokens(str(path), client.token_list_type)

        logger.info(f"Added token {symbol} ({address}) to {chain}/{network}.")
        return token

    async def remove_token(self, chain: str, network: str, token: str) -> int:
        """Remove every entry whose address or symbol matches token.

        Returns:
            Number of entries removed.

        Raises:
            InvalidArgument: Unknown network.
            ConfigurationError: No token list configured or the file is missing.
            NotFound: Nothing matched; the file is left untouched.
            PersistenceError: The list could not be written.
        """
        path = self._token_list_path(chain, network)

        async with file_lock(path, timeout=self.lock_timeout, operation="remove_token"):
            if not path.exists():
                raise ConfigurationError(
                    f"tokenListSource not configured or found for network '{network}'."
                )
            tokens = self._read_list(path)

            needle = token.lower()
            remaining = [
                entry
                for entry in tokens
                if str(entry.get("address", "")).lower() != needle
                and str(entry.get("symbol", "")).lower() != needle
            ]
            removed = len(tokens) - len(remaining)
            if removed == 0:
                raise NotFound(f"Token {token} not found in the list.")

            client = await self.chains.get_instance(chain, network)
            self._write_list(path, remaining)
            await client.load_tokens(str(path), client.token_list_type)

        logger.info(f"Removed token {token} from {chain}/{network}.")
        return removed

    def supported_networks(self, chain: str) -> list[str]:
        """Networks configured under a chain's namespace."""
        networks = self.store.get(f"{chain}.networks")
        return list(networks) if isinstance(networks, dict) else []

    # ----------------------
    # Internals
    # ----------------------

    def _token_list_path(self, chain: str, network: str) -> Path:
        available = self.supported_networks(chain)
        if network not in available:
            raise InvalidArgument(
                f"Network '{network}' is not a supported {chain} network. "
                f"Supported networks are: {', '.join(available)}"
            )

        source = self.store.get(f"{chain}.networks.{network}.tokenListSource")
        if source is ABSENT or not source:
            raise ConfigurationError(f"tokenListSource not configured for network '{network}'.")

        list_type = self.store.get(f"{chain}.networks.{network}.tokenListType")
        if list_type is not ABSENT and str(list_type).upper() != TOKEN_LIST_FILE:
            raise ConfigurationError(
                f"Token list for network '{network}' is not a local file ({list_type})."
            )
        return Path(str(source))

    @staticmethod
    def _read_list(path: Path, missing_ok: bool = False) -> list[dict]:
        if missing_ok and not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read token list {path}: {e}")
            raise ConfigurationError(f"Failed to read token list {path}: {e}") from e

        if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
            raise ConfigurationError(f"Token list {path} must be a JSON array of objects")
        return data

    @staticmethod
    def _write_list(path: Path, tokens: list[dict]) -> None:
        """Write the full list; the old file stays intact if this fails."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(json.dumps(tokens, indent=2))
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Failed to write token list {path}: {e}")
            raise PersistenceError(f"Failed to write token list {path}: {e}") from e

