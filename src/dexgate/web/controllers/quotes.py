"""Uniswap CLMM quote endpoint."""

from decimal import Decimal
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from dexgate.web.contracts.quotes import SwapQuoteResponse
from dexgate.web.controllers.deps import get_quote_service
from dexgate.web.services.quote_service import QuoteService

router = APIRouter(prefix="/connectors/uniswap/clmm", tags=["uniswap/clmm"])


@router.get("/quote-swap", response_model=SwapQuoteResponse)
async def quote_swap(
    base_token: str = Query(..., alias="baseToken", examples=["WETH"]),
    quote_token: str = Query(..., alias="quoteToken", examples=["USDC"]),
    amount: Decimal = Query(..., gt=0, examples=[0.001]),
    side: Literal["BUY", "SELL"] = Query(..., examples=["SELL"]),
    network: str = Query("base"),
    pool_address: Optional[str] = Query(None, alias="poolAddress"),
    slippage_pct: Optional[Decimal] = Query(None, alias="slippagePct", ge=0, le=100, examples=[1]),
    service: QuoteService = Depends(get_quote_service),
) -> SwapQuoteResponse:
    """Get a swap quote for Uniswap V3 CLMM.

    This is a READ-ONLY operation - no transactions are executed.
    """
    return await service.quote_swap(
        network=network,
        base_token=base_token,
        quote_token=quote_token,
        amount=amount,
        side=side,
        pool_address=pool_address,
        slippage_pct=slippage_pct,
    )
