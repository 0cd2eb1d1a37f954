"""Namespace store: one YAML-backed configuration tree per namespace.

Each namespace (``ethereum``, ``uniswap``, ...) is a file under the conf
directory whose stem is the namespace name. The store is constructed once at
startup and handed to every service that needs it.
"""

import copy
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml

from dexgate.configstore.paths import ABSENT, DELETE, Mode, parse_path, resolve
from dexgate.errors import ConfigurationError, InvalidPath, PersistenceError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yml", ".yaml")

# Namespace names double as file names
_NAMESPACE_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")


class NamespaceStore:
    """In-memory configuration trees with synchronous file persistence."""

    def __init__(
        self,
        conf_dir: str | Path,
        namespaces: Optional[dict[str, dict]] = None,
        files: Optional[dict[str, Path]] = None,
    ):
        """Initialize the store.

        Args:
            conf_dir: Directory new namespaces are written to
            namespaces: Initial trees keyed by namespace name
            files: File backing each namespace (defaults to <conf_dir>/<name>.yml)
        """
        self.conf_dir = Path(conf_dir)
        self._trees: dict[str, dict] = namespaces or {}
        self._files: dict[str, Path] = files or {}

    @classmethod
    def load(cls, conf_dir: str | Path) -> "NamespaceStore":
        """Load every YAML file below conf_dir as a namespace.

        A missing directory yields an empty store.

        Raises:
            ConfigurationError: A file is unreadable, not valid YAML, or not a mapping.
        """
        conf_dir = Path(conf_dir)
        trees: dict[str, dict] = {}
        files: dict[str, Path] = {}

        if not conf_dir.is_dir():
            logger.warning(f"Config directory {conf_dir} not found - starting with no namespaces")
            return cls(conf_dir)

        for path in sorted(conf_dir.rglob("*")):
            if path.suffix not in YAML_SUFFIXES or not path.is_file():
                continue

            name = path.stem
            if name in trees:
                raise ConfigurationError(
                    f"Namespace '{name}' defined twice: {files[name]} and {path}"
                )

            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file {path} must contain a mapping")

            trees[name] = data
            files[name] = path

        logger.info(f"Loaded {len(trees)} configuration namespaces from {conf_dir}")
        return cls(conf_dir, trees, files)

    # ----------------------
    # Reads
    # ----------------------

    def get(self, path: str) -> Any:
        """Get the value at a dotted path, or ABSENT."""
        namespace, *rest = parse_path(path)
        tree = self._trees.get(namespace)
        if tree is None:
            return ABSENT

        node = resolve(tree, rest, Mode.READ) if rest else tree
        if isinstance(node, (dict, list)):
            return copy.deepcopy(node)
        return node

    def get_namespace(self, name: str) -> Optional[dict]:
        """Get a copy of a namespace's tree, or None if unknown."""
        tree = self._trees.get(name)
        return copy.deepcopy(tree) if tree is not None else None

    def all_configurations(self) -> dict[str, dict]:
        """Snapshot of every namespace tree keyed by name."""
        return copy.deepcopy(self._trees)

    def namespace_names(self) -> list[str]:
        """Names of all loaded namespaces."""
        return sorted(self._trees)

    # ----------------------
    # Writes
    # ----------------------

    def set(self, path: str, value: Any) -> None:
        """Set a value and persist the owning namespace.

        Raises:
            InvalidPath: Path is malformed or names only a namespace.
            TypeMismatch: An intermediate segment is not an object.
            PersistenceError: The namespace file could not be written.
        """
        namespace, rest = self._split(path)
        self.file_for(namespace)
        created = namespace not in self._trees
        tree = self._trees.setdefault(namespace, {})
        snapshot = copy.deepcopy(tree)

        try:
            resolve(tree, rest, Mode.WRITE, copy.deepcopy(value))
        except Exception:
            self._restore(namespace, snapshot, created)
            raise

        self._persist_or_rollback(namespace, snapshot, created)
        logger.debug(f"Set {path}")

    def delete(self, path: str) -> None:
        """Remove a value and persist the owning namespace.

        Absent paths are a no-op.
        """
        namespace, rest = self._split(path)
        tree = self._trees.get(namespace)
        if tree is None:
            return

        snapshot = copy.deepcopy(tree)
        if not resolve(tree, rest, Mode.WRITE, DELETE):
            return

        self._persist_or_rollback(namespace, snapshot, created=False)
        logger.debug(f"Deleted {path}")

    def file_for(self, namespace: str) -> Path:
        """File backing a namespace.

        Raises:
            InvalidPath: The file would land outside the conf directory.
        """
        path = self._files.get(namespace)
        if path is not None:
            return path

        path = self.conf_dir / f"{namespace}.yml"
        if not path.resolve().is_relative_to(self.conf_dir.resolve()):
            raise InvalidPath(f"Namespace '{namespace}' resolves outside {self.conf_dir}")
        return path

    # ----------------------
    # Internals
    # ----------------------

    @staticmethod
    def _split(path: str) -> tuple[str, list[str]]:
        namespace, *rest = parse_path(path)
        if not _NAMESPACE_RE.fullmatch(namespace):
            raise InvalidPath(
                f"Invalid namespace '{namespace}': use letters, digits, '_' or '-'"
            )
        if not rest:
            raise InvalidPath(
                f"Configuration path '{path}' must address a key inside namespace '{namespace}'"
            )
        return namespace, rest

    def _restore(self, namespace: str, snapshot: dict, created: bool) -> None:
        if created:
            self._trees.pop(namespace, None)
        else:
            self._trees[namespace] = snapshot

    def _persist_or_rollback(self, namespace: str, snapshot: dict, created: bool) -> None:
        try:
            self._write_file(self.file_for(namespace), self._trees[namespace])
        except (OSError, yaml.YAMLError) as e:
            self._restore(namespace, snapshot, created)
            logger.error(f"Failed to persist namespace '{namespace}': {e}")
            raise PersistenceError(
                f"Failed to persist configuration namespace '{namespace}': {e}"
            ) from e

        if created:
            self._files[namespace] = self.file_for(namespace)
            logger.info(f"Created configuration namespace '{namespace}'")

    @staticmethod
    def _write_file(path: Path, tree: dict) -> None:
        """Write a tree atomically (temp file in the same dir, then replace)."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(tree, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
