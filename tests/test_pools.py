"""Tests for the default pool registry."""

import pytest

from dexgate.configstore.pools import DefaultPoolRegistry, pair_key, parse_connector
from dexgate.errors import InvalidArgument, NotFound

MAINNET_POOL = "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640"


class TestParseConnector:
    def test_valid(self):
        assert parse_connector("uniswap/clmm") == ("uniswap", "clmm")

    @pytest.mark.parametrize(
        "connector", ["", "/clmm", "uniswap", "uniswap/", "uniswap/clmm.x", "uni.swap/clmm"]
    )
    def test_invalid(self, connector):
        with pytest.raises(InvalidArgument):
            parse_connector(connector)

    def test_extra_segments_ignored(self):
        assert parse_connector("uniswap/clmm/extra") == ("uniswap", "clmm")

    def test_pair_key_keeps_case(self):
        assert pair_key("WETH", "usdc") == "WETH-usdc"

    def test_pair_key_rejects_dots(self):
        with pytest.raises(InvalidArgument):
            pair_key("USDC.e", "WETH")


class TestActiveNetwork:
    def test_prefers_configured_default(self, pools):
        # mainnet-beta is listed second in raydium.yml
        assert pools.active_network("raydium") == "mainnet-beta"
        assert pools.get_default_pools("raydium/amm") == {"SOL-USDC": "mainnetpool"}

    def test_falls_back_to_first_listed(self, pools):
        assert pools.active_network("uniswap") == "mainnet"

    def test_custom_preference(self, store):
        registry = DefaultPoolRegistry(store, preferred_network="base")
        assert registry.active_network("uniswap") == "base"

    def test_no_networks(self, pools):
        assert pools.active_network("meteora") is None
        assert pools.active_network("unknown") is None


class TestGetDefaultPools:
    def test_returns_pairs(self, pools):
        assert pools.get_default_pools("uniswap/clmm") == {"WETH-USDC": MAINNET_POOL}

    @pytest.mark.parametrize("connector", ["meteora/clmm", "unknown/amm", "uniswap/amm"])
    def test_empty_when_unconfigured(self, pools, connector):
        assert pools.get_default_pools(connector) == {}

    def test_invalid_connector(self, pools):
        with pytest.raises(InvalidArgument):
            pools.get_default_pools("uniswap")

    def test_skips_non_address_entries(self, pools, store):
        store.set("uniswap.networks.mainnet.clmm.x", {"WETH-DAI": "0xabc"})
        store.set("uniswap.networks.mainnet.clmm.fee", 500)

        assert pools.get_default_pools("uniswap/clmm") == {"WETH-USDC": MAINNET_POOL}

    def test_dotted_type_does_not_write(self, pools, store):
        before = store.get_namespace("uniswap")
        with pytest.raises(InvalidArgument):
            pools.add_default_pool("uniswap/clmm.x", "WETH", "DAI", "0xabc")
        assert store.get_namespace("uniswap") == before


class TestAddRemove:
    def test_add_then_get(self, pools):
        network = pools.add_default_pool("uniswap/clmm", "WETH", "USDC", "0xPOOL")

        assert network == "mainnet"
        assert pools.get_default_pools("uniswap/clmm")["WETH-USDC"] == "0xPOOL"

    def test_add_new_type_section(self, pools):
        pools.add_default_pool("uniswap/amm", "WBTC", "USDC", "0xAMM")
        assert pools.get_default_pools("uniswap/amm") == {"WBTC-USDC": "0xAMM"}

    def test_add_then_remove_restores_state(self, pools, store):
        before = store.get_namespace("uniswap")

        pools.add_default_pool("uniswap/clmm", "WBTC", "USDC", "0xWBTC")
        pools.remove_default_pool("uniswap/clmm", "WBTC", "USDC")

        assert store.get_namespace("uniswap") == before

    def test_add_requires_address(self, pools):
        with pytest.raises(InvalidArgument):
            pools.add_default_pool("uniswap/clmm", "WETH", "USDC", None)
        with pytest.raises(InvalidArgument):
            pools.add_default_pool("uniswap/clmm", "WETH", "USDC", "")

    def test_add_requires_networks(self, pools):
        with pytest.raises(NotFound):
            pools.add_default_pool("meteora/clmm", "SOL", "USDC", "pool")

    def test_remove_requires_networks(self, pools):
        with pytest.raises(NotFound):
            pools.remove_default_pool("meteora/clmm", "SOL", "USDC")

    def test_remove_absent_pair_is_noop(self, pools):
        pools.remove_default_pool("uniswap/clmm", "DAI", "USDT")
        assert pools.get_default_pools("uniswap/clmm") == {"WETH-USDC": MAINNET_POOL}

    def test_find_default_pool_on_explicit_network(self, pools):
        assert pools.find_default_pool("uniswap", "mainnet", "clmm", "WETH", "USDC") == MAINNET_POOL
        assert pools.find_default_pool("uniswap", "base", "clmm", "WETH", "USDC") is None
