"""Uniswap connector: token resolution, default slippage and CLMM quoting."""

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from fractions import Fraction
from typing import Literal, Optional

from dexgate.chains.base import ChainClient, TokenInfo
from dexgate.configstore.paths import ABSENT
from dexgate.configstore.pools import DefaultPoolRegistry
from dexgate.configstore.store import NamespaceStore
from dexgate.configstore.validation import from_fraction_string, is_float_string
from dexgate.connectors.uniswap.sdk import ClmmSdk
from dexgate.errors import ConfigurationError, InvalidArgument, NotFound

logger = logging.getLogger(__name__)

CONNECTOR_NAME = "uniswap"
DEFAULT_ALLOWED_SLIPPAGE = Fraction(1, 100)

Side = Literal["BUY", "SELL"]


def format_token_amount(raw_amount: int, decimals: int) -> Decimal:
    """Convert raw integer units to a token amount."""
    return Decimal(raw_amount) / (Decimal(10) ** decimals)


def to_raw_amount(amount: Decimal, decimals: int) -> int:
    """Convert a token amount to raw units, rounding down."""
    return int((Decimal(amount) * (Decimal(10) ** decimals)).to_integral_value(rounding=ROUND_FLOOR))


@dataclass
class ClmmQuote:
    """Result of quoting a CLMM swap."""

    pool_address: str
    input_token: TokenInfo
    output_token: TokenInfo
    estimated_amount_in: Decimal
    estimated_amount_out: Decimal
    min_amount_out: Decimal
    max_amount_in: Decimal
    price_impact: Decimal
    fee_tier: int
    raw_amount_in: int
    raw_amount_out: int
    raw_min_amount_out: int
    raw_max_amount_in: int


class Uniswap:
    """Uniswap on one EVM network."""

    def __init__(
        self,
        network: str,
        chain: ChainClient,
        sdk: ClmmSdk,
        store: NamespaceStore,
        pools: DefaultPoolRegistry,
    ):
        self.network = network
        self.chain = chain
        self.sdk = sdk
        self.store = store
        self.pools = pools

    def get_token_by_symbol(self, symbol: str) -> Optional[TokenInfo]:
        return self.chain.get_token_by_symbol(symbol)

    def get_allowed_slippage(self) -> Fraction:
        """Default slippage from ``uniswap.allowedSlippage``."""
        value = self.store.get(f"{CONNECTOR_NAME}.allowedSlippage")
        if value is ABSENT:
            return DEFAULT_ALLOWED_SLIPPAGE

        if isinstance(value, str):
            fraction = from_fraction_string(value)
            if fraction is None and is_float_string(value):
                fraction = Fraction(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            fraction = Fraction(str(value))
        else:
            fraction = None

        if fraction is None:
            raise ConfigurationError(f"Invalid {CONNECTOR_NAME}.allowedSlippage: {value!r}")
        return fraction

    def find_default_pool(self, base_token: str, quote_token: str, pool_type: str) -> Optional[str]:
        return self.pools.find_default_pool(
            CONNECTOR_NAME, self.network, pool_type, base_token, quote_token
        )

    async def quote_clmm_swap(
        self,
        pool_address: str,
        base_token: TokenInfo,
        quote_token: TokenInfo,
        amount: Decimal,
        side: Side,
        slippage_pct: Optional[Decimal] = None,
    ) -> ClmmQuote:
        """Quote a swap through one CLMM pool.

        SELL is an exact-input trade of base for quote; BUY is an
        exact-output trade buying ``amount`` of base. ``slippage_pct`` is in
        percent (1 = 1%); when omitted the connector default applies.
        """
        if side not in ("BUY", "SELL"):
            raise InvalidArgument(f"side must be BUY or SELL, got {side}")
        if amount <= 0:
            raise InvalidArgument("amount must be positive")

        pool = await self.sdk.get_pool(base_token, quote_token, pool_address)
        if pool is None:
            raise NotFound(f"Pool not found for {base_token.symbol}-{quote_token.symbol}")

        exact_in = side == "SELL"
        input_token, output_token = (
            (base_token, quote_token) if exact_in else (quote_token, base_token)
        )

        # The amount is always denominated in the base token
        raw_amount = to_raw_amount(amount, base_token.decimals)
        trade = await self.sdk.build_trade(pool, input_token, output_token, raw_amount, exact_in)

        if slippage_pct is not None:
            # percent -> basis points, truncated
            slippage = Fraction(math.floor(Decimal(slippage_pct) * 100), 10000)
        else:
            slippage = self.get_allowed_slippage()

        if exact_in:
            raw_min_out = trade.minimum_amount_out(slippage)
            raw_max_in = trade.input_amount
        else:
            raw_min_out = trade.output_amount
            raw_max_in = trade.maximum_amount_in(slippage)

        return ClmmQuote(
            pool_address=pool_address,
            input_token=input_token,
            output_token=output_token,
            estimated_amount_in=format_token_amount(trade.input_amount, input_token.decimals),
            estimated_amount_out=format_token_amount(trade.output_amount, output_token.decimals),
            min_amount_out=format_token_amount(raw_min_out, output_token.decimals),
            max_amount_in=format_token_amount(raw_max_in, input_token.decimals),
            price_impact=Decimal(trade.price_impact),
            fee_tier=pool.fee,
            raw_amount_in=trade.input_amount,
            raw_amount_out=trade.output_amount,
            raw_min_amount_out=raw_min_out,
            raw_max_amount_in=raw_max_in,
        )
