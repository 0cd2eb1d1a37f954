"""Interface to the external CLMM trade-construction SDK.

dexgate does not do pool math itself. An SDK adapter provides pool lookup,
trade construction, slippage-adjusted bounds and price impact. Amounts
crossing this interface are raw integer token units.
"""

import importlib
import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from fractions import Fraction
from typing import Optional

from dexgate.chains.base import TokenInfo
from dexgate.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ClmmPool(ABC):
    """A concentrated-liquidity pool as seen by the SDK."""

    @property
    @abstractmethod
    def address(self) -> str:
        pass

    @property
    @abstractmethod
    def fee(self) -> int:
        """Fee tier in hundredths of a basis point (500 = 0.05%)."""
        pass


class ClmmTrade(ABC):
    """A single-pool trade built by the SDK."""

    @property
    @abstractmethod
    def input_amount(self) -> int:
        pass

    @property
    @abstractmethod
    def output_amount(self) -> int:
        pass

    @property
    @abstractmethod
    def price_impact(self) -> Decimal:
        """Price impact in percent."""
        pass

    @abstractmethod
    def minimum_amount_out(self, slippage: Fraction) -> int:
        """Worst-case output for an exact-input trade."""
        pass

    @abstractmethod
    def maximum_amount_in(self, slippage: Fraction) -> int:
        """Worst-case input for an exact-output trade."""
        pass


class ClmmSdk(ABC):
    """Pool lookup and trade construction."""

    @abstractmethod
    async def get_pool(
        self,
        base_token: TokenInfo,
        quote_token: TokenInfo,
        pool_address: str,
    ) -> Optional[ClmmPool]:
        """Load a pool by address, or None if it does not exist."""
        pass

    @abstractmethod
    async def build_trade(
        self,
        pool: ClmmPool,
        input_token: TokenInfo,
        output_token: TokenInfo,
        raw_amount: int,
        exact_input: bool,
    ) -> ClmmTrade:
        """Build a trade for raw_amount of input (exact_input) or output token."""
        pass


def load_clmm_sdk(target: str) -> ClmmSdk:
    """Instantiate an SDK adapter from a 'package.module:factory' string.

    Raises:
        ConfigurationError: The target cannot be imported or called.
    """
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(f"clmm_sdk must look like 'module:factory', got '{target}'")

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot load CLMM SDK '{target}': {e}") from e

    sdk = factory()
    if not isinstance(sdk, ClmmSdk):
        raise ConfigurationError(f"'{target}' did not return a ClmmSdk")

    logger.info(f"Loaded CLMM SDK from {target}")
    return sdk
