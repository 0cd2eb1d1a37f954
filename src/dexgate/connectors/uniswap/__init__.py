"""Uniswap connector."""

from dexgate.connectors.uniswap.sdk import ClmmPool, ClmmSdk, ClmmTrade, load_clmm_sdk
from dexgate.connectors.uniswap.uniswap import ClmmQuote, Uniswap

__all__ = [
    "ClmmPool",
    "ClmmQuote",
    "ClmmSdk",
    "ClmmTrade",
    "Uniswap",
    "load_clmm_sdk",
]
