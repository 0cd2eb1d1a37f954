"""Quote service for Uniswap CLMM swaps.

Pool and trade math come from the CLMM SDK and gas price from the chain
client. This service picks the pool, resolves tokens and shapes the
response. It never executes a swap.
"""

import logging
from decimal import Decimal
from typing import Optional

from dexgate.chains.factory import ChainRegistry
from dexgate.configstore.pools import DefaultPoolRegistry
from dexgate.configstore.store import NamespaceStore
from dexgate.connectors.uniswap.sdk import ClmmSdk
from dexgate.connectors.uniswap.uniswap import Side, Uniswap, format_token_amount
from dexgate.errors import ConfigurationError, GatewayError, NotFound
from dexgate.web.contracts.quotes import SwapQuoteResponse

logger = logging.getLogger(__name__)

EVM_CHAIN = "ethereum"

# V3 swaps use more gas than V2
CLMM_SWAP_GAS_LIMIT = 200000


class QuoteService:
    """Service for quoting swaps. READ-ONLY."""

    def __init__(
        self,
        store: NamespaceStore,
        chains: ChainRegistry,
        pools: DefaultPoolRegistry,
        sdk: Optional[ClmmSdk] = None,
    ):
        self.store = store
        self.chains = chains
        self.pools = pools
        self.sdk = sdk

    async def get_uniswap(self, network: str) -> Uniswap:
        """Connector instance for a network."""
        if self.sdk is None:
            raise ConfigurationError("No CLMM trade-construction SDK configured (set CLMM_SDK)")
        chain = await self.chains.get_instance(EVM_CHAIN, network)
        return Uniswap(network, chain, self.sdk, self.store, self.pools)

    async def quote_swap(
        self,
        network: str,
        base_token: str,
        quote_token: str,
        amount: Decimal,
        side: Side,
        pool_address: Optional[str] = None,
        slippage_pct: Optional[Decimal] = None,
    ) -> SwapQuoteResponse:
        """Quote a CLMM swap.

        Args:
            network: EVM network name
            base_token: Base token symbol
            quote_token: Quote token symbol
            amount: Base token amount to buy or sell
            side: BUY or SELL (of the base token)
            pool_address: Pool to use (default pool for the pair if omitted)
            slippage_pct: Slippage tolerance in percent

        Returns:
            SwapQuoteResponse with amounts, price and gas estimate
        """
        logger.info(
            f"Quoting swap: pool={pool_address}, {side} {amount} {base_token}/{quote_token} on {network}"
        )

        try:
            uniswap = await self.get_uniswap(network)

            if not pool_address:
                pool_address = uniswap.find_default_pool(base_token, quote_token, "clmm")
                if not pool_address:
                    raise NotFound(f"No CLMM pool found for pair {base_token}-{quote_token}")

            base = uniswap.get_token_by_symbol(base_token)
            if base is None:
                raise NotFound(f"Base token not found: {base_token}")
            quote = uniswap.get_token_by_symbol(quote_token)
            if quote is None:
                raise NotFound(f"Quote token not found: {quote_token}")

            clmm_quote = await uniswap.quote_clmm_swap(
                pool_address, base, quote, amount, side, slippage_pct
            )

            logger.info(
                f"Quote result: estimatedAmountIn={clmm_quote.estimated_amount_in}, "
                f"estimatedAmountOut={clmm_quote.estimated_amount_out}"
            )

            if side == "BUY":
                base_change = clmm_quote.estimated_amount_out
                quote_change = -clmm_quote.estimated_amount_in
                price = clmm_quote.estimated_amount_in / clmm_quote.estimated_amount_out
            else:
                base_change = -clmm_quote.estimated_amount_in
                quote_change = clmm_quote.estimated_amount_out
                price = clmm_quote.estimated_amount_out / clmm_quote.estimated_amount_in

            gas_price_wei = await uniswap.chain.get_gas_price()
            gas_cost = format_token_amount(gas_price_wei * CLMM_SWAP_GAS_LIMIT, 18)
            gas_price_gwei = format_token_amount(gas_price_wei, 9)
            logger.debug(f"Gas price {gas_price_gwei} gwei, cost {gas_cost} {uniswap.chain.native_token_symbol}")

        except GatewayError:
            raise
        except Exception as e:
            logger.error(f"Error getting swap quote: {e}")
            raise GatewayError(f"Error getting swap quote: {e}") from e

        return SwapQuoteResponse(
            pool_address=pool_address,
            estimated_amount_in=float(clmm_quote.estimated_amount_in),
            estimated_amount_out=float(clmm_quote.estimated_amount_out),
            min_amount_out=float(clmm_quote.min_amount_out),
            max_amount_in=float(clmm_quote.max_amount_in),
            base_token_balance_change=float(base_change),
            quote_token_balance_change=float(quote_change),
            price=float(price),
            gas_price=float(gas_price_gwei),
            gas_limit=CLMM_SWAP_GAS_LIMIT,
            gas_cost=float(gas_cost),
        )
