"""Composer autoload based locator."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from phpreflect.domain.exceptions.configuration import LocatorConfigurationError
from phpreflect.domain.exceptions.parsing import ParseError
from phpreflect.domain.ports.locator import LocatorPort
from phpreflect.infrastructure.adapters.tree_sitter_parser import TreeSitterSourceParser
from phpreflect.infrastructure.analyzers.base import node_name, qualify
from phpreflect.infrastructure.analyzers.class_analyzer import CLASS_KINDS

if TYPE_CHECKING:
    from phpreflect.domain.ports.source_parser import SourceParserPort

logger = structlog.get_logger()

_SECTIONS = ("autoload", "autoload-dev")
_CLASSMAP_SUFFIXES = (".php", ".inc")


class ComposerLocator(LocatorPort):
    """Locator reading the classmap, PSR-4 and PSR-0 rules of a composer.json.

    Files are looked up on disk, nothing is loaded. Classmap entries are
    consulted first, then PSR-4, then PSR-0, as composer's class loader
    does. Classmap directories are scanned once, on the first lookup, by
    parsing their PHP files for top-level class-likes. Returned paths are
    canonical (symlinks resolved).

    Attributes:
        root: Directory holding composer.json
    """

    def __init__(
        self,
        root: Path,
        *,
        include_dev: bool = True,
        parser: SourceParserPort | None = None,
    ) -> None:
        """Read autoload rules.

        Args:
            root: Project directory containing composer.json
            include_dev: Also use the `autoload-dev` section
            parser: Parser used to scan classmap files (default: tree-sitter)

        Raises:
            LocatorConfigurationError: If composer.json is missing or malformed
        """
        self.root = Path(root)
        self._parser = parser
        manifest = self.root / "composer.json"
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise LocatorConfigurationError(manifest, "file not found") from e
        except json.JSONDecodeError as e:
            raise LocatorConfigurationError(manifest, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise LocatorConfigurationError(manifest, "top level must be an object")

        sections = _SECTIONS if include_dev else _SECTIONS[:1]
        self._psr4: list[tuple[str, tuple[Path, ...]]] = []
        self._psr0: list[tuple[str, tuple[Path, ...]]] = []
        self._classmap_paths: list[Path] = []
        self._classmap: dict[str, Path] | None = None
        for section in sections:
            rules = data.get(section) or {}
            if not isinstance(rules, dict):
                raise LocatorConfigurationError(manifest, f"'{section}' must be an object")
            self._psr4.extend(self._read_rules(manifest, rules.get("psr-4")))
            self._psr0.extend(self._read_rules(manifest, rules.get("psr-0")))
            self._classmap_paths.extend(self._read_classmap(manifest, rules.get("classmap")))

        # Longest prefix first, as composer does
        self._psr4.sort(key=lambda rule: len(rule[0]), reverse=True)
        self._psr0.sort(key=lambda rule: len(rule[0]), reverse=True)

    def _read_rules(
        self,
        manifest: Path,
        rules: object,
    ) -> list[tuple[str, tuple[Path, ...]]]:
        """Normalize a prefix → directory (or directories) mapping."""
        if rules is None:
            return []
        if not isinstance(rules, dict):
            raise LocatorConfigurationError(manifest, "autoload rules must be an object")

        result = []
        for prefix, dirs in rules.items():
            if isinstance(dirs, str):
                dirs = [dirs]
            if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
                raise LocatorConfigurationError(
                    manifest, f"directories for '{prefix}' must be a string or list"
                )
            result.append((prefix, tuple(self.root / d for d in dirs)))
        return result

    def _read_classmap(self, manifest: Path, paths: object) -> list[Path]:
        if paths is None:
            return []
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise LocatorConfigurationError(manifest, "classmap must be a list of paths")
        return [self.root / p for p in paths]

    def locate_class(self, class_name: str) -> Path | None:
        """Find the file of a class by its autoload rules.

        Args:
            class_name: Fully qualified class name

        Returns:
            Canonical path of the first existing candidate, None if none exists
        """
        name = class_name.lstrip("\\")

        mapped = self._class_map().get(name.lower())
        if mapped is not None:
            return mapped

        for prefix, dirs in self._psr4:
            if not name.startswith(prefix):
                continue
            relative = name[len(prefix) :].replace("\\", "/") + ".php"
            found = _first_file(dirs, relative)
            if found is not None:
                return found

        namespace, sep, short = name.rpartition("\\")
        psr0_relative = namespace.replace("\\", "/") + sep.replace("\\", "/")
        psr0_relative += short.replace("_", "/") + ".php"
        for prefix, dirs in self._psr0:
            if not name.startswith(prefix):
                continue
            found = _first_file(dirs, psr0_relative)
            if found is not None:
                return found

        logger.debug("composer_class_not_found", class_name=name)
        return None

    def _class_map(self) -> dict[str, Path]:
        """Lowercase class name → file for every classmap entry, built once."""
        if self._classmap is not None:
            return self._classmap

        classmap: dict[str, Path] = {}
        for path in self._classmap_paths:
            if path.is_dir():
                files = sorted(p for p in path.rglob("*") if p.suffix in _CLASSMAP_SUFFIXES)
            elif path.is_file():
                files = [path]
            else:
                logger.warning("classmap_path_missing", path=str(path))
                continue
            for file in files:
                for name in self._declared_classes(file):
                    classmap.setdefault(name.lower(), file.resolve())

        logger.debug("classmap_built", classes=len(classmap))
        self._classmap = classmap
        return classmap

    def _declared_classes(self, file: Path) -> list[str]:
        """Fully qualified names of the top-level class-likes of a file."""
        if self._parser is None:
            self._parser = TreeSitterSourceParser()
        try:
            source = self._parser.parse_file(file)
        except ParseError as e:
            logger.warning("classmap_file_skipped", path=str(file), reason=e.reason)
            return []

        names = []
        for block in source.namespaces:
            for statement in block.statements:
                name_node = statement.child_by_field("name")
                if statement.kind in CLASS_KINDS and name_node is not None:
                    names.append(qualify(block.name, node_name(name_node)))
        return names


def _first_file(dirs: tuple[Path, ...], relative: str) -> Path | None:
    """First directory containing the relative file."""
    for directory in dirs:
        candidate = directory / relative
        if candidate.is_file():
            return candidate.resolve()
    return None
