"""Pytest configuration and fixtures."""

import json
import math
import os
from decimal import Decimal
from fractions import Fraction
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio
import yaml
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ["CLMM_SDK"] = ""

from dexgate.api.app import create_app
from dexgate.chains.base import ChainClient, TokenInfo
from dexgate.chains.factory import ChainRegistry
from dexgate.config import Settings
from dexgate.configstore.pools import DefaultPoolRegistry
from dexgate.configstore.store import NamespaceStore
from dexgate.configstore.tokens import TokenListSynchronizer
from dexgate.connectors.uniswap.sdk import ClmmPool, ClmmSdk, ClmmTrade
from dexgate.utils.locks import clear_path_locks

MAINNET_POOL = "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640"
GAS_PRICE_WEI = 10 * 10**9

MAINNET_TOKENS = [
    {
        "chainId": 1,
        "address": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "name": "Wrapped Ether",
        "symbol": "WETH",
        "decimals": 18,
    },
    {
        "chainId": 1,
        "address": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "name": "USD Coin",
        "symbol": "USDC",
        "decimals": 6,
    },
]


class FakeChainClient(ChainClient):
    """Chain client that reads token files but never touches the network."""

    def __init__(self, network: str, chain_id: int, tokens: Optional[list[dict]] = None):
        self._network = network
        self._chain_id = chain_id
        self.load_calls: list[tuple[str, str]] = []
        self._index: dict[str, TokenInfo] = {}
        for entry in tokens or []:
            token = TokenInfo.from_dict(entry)
            self._index[token.symbol.upper()] = token

    @property
    def chain(self) -> str:
        return "ethereum"

    @property
    def network(self) -> str:
        return self._network

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def token_list_type(self) -> str:
        return "FILE"

    @property
    def native_token_symbol(self) -> str:
        return "ETH"

    async def load_tokens(self, source: str, list_type: str) -> list[TokenInfo]:
        self.load_calls.append((source, list_type))
        with open(source, "r", encoding="utf-8") as f:
            tokens = [TokenInfo.from_dict(entry) for entry in json.load(f)]
        self._index = {t.symbol.upper(): t for t in tokens}
        return tokens

    async def get_gas_price(self) -> int:
        return GAS_PRICE_WEI

    def get_token_by_symbol(self, symbol: str) -> Optional[TokenInfo]:
        return self._index.get(symbol.upper())


class FakePool(ClmmPool):
    def __init__(self, address: str, fee: int = 500):
        self._address = address
        self._fee = fee

    @property
    def address(self) -> str:
        return self._address

    @property
    def fee(self) -> int:
        return self._fee


class FakeTrade(ClmmTrade):
    def __init__(self, input_amount: int, output_amount: int, price_impact: Decimal):
        self._input = input_amount
        self._output = output_amount
        self._impact = price_impact
        self.slippage_seen: Optional[Fraction] = None

    @property
    def input_amount(self) -> int:
        return self._input

    @property
    def output_amount(self) -> int:
        return self._output

    @property
    def price_impact(self) -> Decimal:
        return self._impact

    def minimum_amount_out(self, slippage: Fraction) -> int:
        self.slippage_seen = slippage
        return math.floor(self._output * (1 - slippage))

    def maximum_amount_in(self, slippage: Fraction) -> int:
        self.slippage_seen = slippage
        return math.ceil(self._input * (1 + slippage))


class FakeClmmSdk(ClmmSdk):
    """Fixed-price WETH/USDC pool: 1 WETH = 2000 USDC."""

    price = 2000

    def __init__(self, pools: tuple[str, ...] = (MAINNET_POOL,)):
        self.pools = set(pools)
        self.last_trade: Optional[FakeTrade] = None
        self.build_calls: list[tuple[str, str, int, bool]] = []

    async def get_pool(self, base_token, quote_token, pool_address):
        if pool_address not in self.pools:
            return None
        return FakePool(pool_address)

    async def build_trade(self, pool, input_token, output_token, raw_amount, exact_input):
        self.build_calls.append((input_token.symbol, output_token.symbol, raw_amount, exact_input))
        # WETH has 18 decimals and USDC 6: 1 raw WETH unit = price / 10**12 raw USDC
        if exact_input:
            output = raw_amount * self.price // 10**12
            trade = FakeTrade(raw_amount, output, Decimal("0.05"))
        else:
            needed = raw_amount * self.price // 10**12
            trade = FakeTrade(needed, raw_amount, Decimal("0.05"))
        self.last_trade = trade
        return trade


@pytest.fixture(autouse=True)
def _reset_locks():
    clear_path_locks()
    yield
    clear_path_locks()


@pytest.fixture
def token_dir(tmp_path) -> Path:
    path = tmp_path / "tokens"
    path.mkdir()
    (path / "mainnet.json").write_text(json.dumps(MAINNET_TOKENS, indent=2))
    return path


@pytest.fixture
def conf_dir(tmp_path, token_dir) -> Path:
    """Config directory with ethereum, uniswap, raydium and meteora namespaces."""
    conf = tmp_path / "conf"
    (conf / "chains").mkdir(parents=True)
    (conf / "connectors").mkdir()

    ethereum = {
        "networks": {
            "mainnet": {
                "chainID": 1,
                "nodeURL": "http://mainnet.invalid",
                "tokenListType": "FILE",
                "tokenListSource": str(token_dir / "mainnet.json"),
            },
            "base": {
                "chainID": 8453,
                "nodeURL": "http://base.invalid",
                "tokenListType": "FILE",
                "tokenListSource": str(token_dir / "base.json"),
            },
            "polygon": {
                "chainID": 137,
                "nodeURL": "http://polygon.invalid",
            },
        }
    }
    uniswap = {
        "allowedSlippage": "1/100",
        "networks": {
            "mainnet": {"clmm": {"WETH-USDC": MAINNET_POOL}},
            "base": {"clmm": {}},
        },
    }
    raydium = {
        "allowedSlippage": "1/100",
        "networks": {
            "devnet": {"amm": {"SOL-USDC": "devnetpool"}},
            "mainnet-beta": {"amm": {"SOL-USDC": "mainnetpool"}},
        },
    }
    meteora = {"allowedSlippage": "1/100"}

    for subdir, name, tree in (
        ("chains", "ethereum", ethereum),
        ("connectors", "uniswap", uniswap),
        ("connectors", "raydium", raydium),
        ("connectors", "meteora", meteora),
    ):
        with open(conf / subdir / f"{name}.yml", "w", encoding="utf-8") as f:
            yaml.safe_dump(tree, f, sort_keys=False)

    return conf


@pytest.fixture
def store(conf_dir) -> NamespaceStore:
    return NamespaceStore.load(conf_dir)


@pytest.fixture
def chain_clients() -> dict[str, FakeChainClient]:
    return {
        "mainnet": FakeChainClient("mainnet", 1, MAINNET_TOKENS),
        "base": FakeChainClient("base", 8453),
    }


@pytest.fixture
def registry(store, chain_clients) -> ChainRegistry:
    registry = ChainRegistry(store)
    for client in chain_clients.values():
        registry.register(client)
    return registry


@pytest.fixture
def pools(store) -> DefaultPoolRegistry:
    return DefaultPoolRegistry(store, preferred_network="mainnet-beta")


@pytest.fixture
def tokens(store, registry) -> TokenListSynchronizer:
    return TokenListSynchronizer(store, registry, lock_timeout=5.0)


@pytest.fixture
def clmm_sdk() -> FakeClmmSdk:
    return FakeClmmSdk()


@pytest.fixture
def test_app(conf_dir, store, registry, clmm_sdk):
    """Application wired to the temporary config and fake collaborators."""
    settings = Settings(conf_dir=str(conf_dir), debug=True)
    return create_app(settings=settings, store=store, chains=registry, clmm_sdk=clmm_sdk)


@pytest_asyncio.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
