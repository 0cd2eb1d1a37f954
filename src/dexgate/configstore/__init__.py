"""Connector configuration: namespaced config trees, default pools and token lists."""

from dexgate.configstore.paths import ABSENT, parse_path
from dexgate.configstore.pools import DefaultPoolRegistry
from dexgate.configstore.store import NamespaceStore
from dexgate.configstore.validation import prepare_config_value

__all__ = [
    "ABSENT",
    "DefaultPoolRegistry",
    "NamespaceStore",
    "parse_path",
    "prepare_config_value",
]
