"""Configuration, default pool and token request/response contracts."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

# Tagged union of storable config values; strict types keep "1" a string
# and true a boolean instead of coercing between them.
ConfigValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, dict[str, Any], list[Any]]


class ConfigUpdateRequest(BaseModel):
    """Request to set one configuration value."""

    model_config = ConfigDict(populate_by_name=True)

    config_path: str = Field(
        ...,
        alias="configPath",
        description="Dotted configuration path",
        examples=["uniswap.allowedSlippage"],
    )
    config_value: ConfigValue = Field(
        ...,
        alias="configValue",
        description="Configuration value",
        examples=["1/100"],
    )


class MessageResponse(BaseModel):
    """Generic status response."""

    message: str = Field(..., description="Status message")


class DefaultPoolRequest(BaseModel):
    """Request to add or remove a default pool."""

    model_config = ConfigDict(populate_by_name=True)

    connector: str = Field(
        ...,
        description='Connector name in format "connector/type" (e.g., uniswap/clmm)',
        examples=["uniswap/amm", "uniswap/clmm", "raydium/clmm"],
    )
    base_token: str = Field(..., alias="baseToken", description="Base token symbol", examples=["WETH"])
    quote_token: str = Field(
        ..., alias="quoteToken", description="Quote token symbol", examples=["USDC"]
    )
    pool_address: Optional[str] = Field(
        None,
        alias="poolAddress",
        description="Pool address (required for adding, ignored for removal)",
        examples=["0xd0b53d9277642d899df5c87a3966a349a798f224"],
    )


class DefaultTokenRequest(BaseModel):
    """Request to add a custom token to a network's token list."""

    chain: str = Field(..., description="Chain namespace (EVM networks live under 'ethereum')", examples=["ethereum"])
    network: str = Field(..., description="Network name", examples=["mainnet", "base"])
    name: str = Field(..., description="Token name", examples=["Tsunami"])
    symbol: str = Field(..., description="Token symbol", examples=["NAMI"])
    address: str = Field(
        ...,
        description="Token contract address",
        examples=["0x7EB4DB4dDDB16A329c5aDE17a8a0178331267E28"],
    )
    decimals: StrictInt = Field(..., ge=0, description="Token decimals", examples=[18])


class RemoveDefaultTokenRequest(BaseModel):
    """Request to remove a token by symbol or address."""

    chain: str = Field(..., description="Chain namespace", examples=["ethereum"])
    network: str = Field(..., description="Network name", examples=["base"])
    token: str = Field(
        ...,
        description="Token symbol or address to remove",
        examples=["NAMI", "0x7EB4DB4dDDB16A329c5aDE17a8a0178331267E28"],
    )
