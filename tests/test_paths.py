"""Tests for dotted-path resolution."""

import pytest

from dexgate.configstore.paths import ABSENT, DELETE, Mode, parse_path, resolve
from dexgate.errors import InvalidPath, TypeMismatch


class TestParsePath:
    def test_splits_segments(self):
        assert parse_path("ethereum.networks.base.tokenListSource") == [
            "ethereum",
            "networks",
            "base",
            "tokenListSource",
        ]

    def test_single_segment(self):
        assert parse_path("uniswap") == ["uniswap"]

    @pytest.mark.parametrize("path", ["", "a..b", ".a", "a."])
    def test_rejects_empty_segments(self, path):
        with pytest.raises(InvalidPath):
            parse_path(path)


class TestResolveRead:
    def test_returns_terminal_value(self):
        tree = {"networks": {"base": {"chainID": 8453}}}
        assert resolve(tree, ["networks", "base", "chainID"]) == 8453

    def test_missing_segment_is_absent(self):
        tree = {"networks": {}}
        assert resolve(tree, ["networks", "base", "chainID"]) is ABSENT

    def test_scalar_intermediate_is_absent(self):
        tree = {"networks": "oops"}
        assert resolve(tree, ["networks", "base"]) is ABSENT

    def test_arrays_are_not_indexed(self):
        tree = {"list": ["a", "b"]}
        assert resolve(tree, ["list", "0"]) is ABSENT

    def test_read_does_not_mutate(self):
        tree = {"a": {}}
        resolve(tree, ["a", "b", "c"], Mode.READ)
        assert tree == {"a": {}}

    def test_no_segments(self):
        with pytest.raises(InvalidPath):
            resolve({}, [])


class TestResolveWrite:
    def test_creates_intermediate_objects(self):
        tree = {}
        assert resolve(tree, ["networks", "base", "clmm", "WETH-USDC"], Mode.WRITE, "0xPOOL") is True
        assert tree == {"networks": {"base": {"clmm": {"WETH-USDC": "0xPOOL"}}}}

    def test_overwrites_terminal(self):
        tree = {"allowedSlippage": "1/100"}
        resolve(tree, ["allowedSlippage"], Mode.WRITE, "1/200")
        assert tree["allowedSlippage"] == "1/200"

    def test_scalar_intermediate_is_type_mismatch(self):
        tree = {"networks": {"base": 5}}
        with pytest.raises(TypeMismatch):
            resolve(tree, ["networks", "base", "chainID"], Mode.WRITE, 1)

    def test_array_intermediate_is_type_mismatch(self):
        tree = {"list": [1, 2]}
        with pytest.raises(TypeMismatch):
            resolve(tree, ["list", "x"], Mode.WRITE, 1)

    def test_delete_removes_key(self):
        tree = {"a": {"b": 1, "c": 2}}
        assert resolve(tree, ["a", "b"], Mode.WRITE, DELETE) is True
        assert tree == {"a": {"c": 2}}

    def test_delete_absent_is_noop(self):
        tree = {"a": {"c": 2}}
        assert resolve(tree, ["a", "b"], Mode.WRITE, DELETE) is False
        assert resolve(tree, ["x", "y", "z"], Mode.WRITE, DELETE) is False
        assert tree == {"a": {"c": 2}}

    def test_delete_below_scalar_is_noop(self):
        tree = {"a": 1}
        assert resolve(tree, ["a", "b"], Mode.WRITE, DELETE) is False
        assert tree == {"a": 1}
