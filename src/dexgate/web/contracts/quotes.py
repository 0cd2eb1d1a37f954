"""Swap quote response contract."""

from pydantic import BaseModel, ConfigDict, Field


class SwapQuoteResponse(BaseModel):
    """Quote for a CLMM swap, including gas estimate."""

    model_config = ConfigDict(populate_by_name=True)

    pool_address: str = Field(..., alias="poolAddress", description="Pool used for the quote")
    estimated_amount_in: float = Field(..., alias="estimatedAmountIn")
    estimated_amount_out: float = Field(..., alias="estimatedAmountOut")
    min_amount_out: float = Field(..., alias="minAmountOut", description="Output after slippage")
    max_amount_in: float = Field(..., alias="maxAmountIn", description="Input after slippage")
    base_token_balance_change: float = Field(..., alias="baseTokenBalanceChange")
    quote_token_balance_change: float = Field(..., alias="quoteTokenBalanceChange")
    price: float = Field(..., description="Quote token per base token")
    gas_price: float = Field(..., alias="gasPrice", description="Gas price in gwei")
    gas_limit: int = Field(..., alias="gasLimit")
    gas_cost: float = Field(..., alias="gasCost", description="Gas cost in the native token")
